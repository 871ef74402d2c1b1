"""목록/정의 목록 구조화

분류기가 남긴 "list-item" div를 번호 형식과 레벨에 따라 중첩 목록으로,
"DefinitionTerm"/"Definition" div를 정의 목록으로 묶는다.
두 함수 모두 멱등이며 나머지 블록의 순서는 유지한다.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from docx2ir.ir.base import blocks_to_inlines
from docx2ir.ir.models import (
    IrBlock,
    IrBulletList,
    IrDefinitionList,
    IrDiv,
    IrInline,
    IrListAttributes,
    IrOrderedList,
)

LIST_ITEM_CLASS = "list-item"
LIST_PARAGRAPH_CLASS = "ListParagraph"
DEFINITION_TERM_CLASS = "DefinitionTerm"
DEFINITION_CLASS = "Definition"

# numFmt → 번호 스타일
NUMBER_STYLES: Dict[str, str] = {
    "decimal": "Decimal",
    "decimalZero": "Decimal",
    "lowerLetter": "LowerAlpha",
    "upperLetter": "UpperAlpha",
    "lowerRoman": "LowerRoman",
    "upperRoman": "UpperRoman",
}

_DELIMITERS = [
    (re.compile(r"^\(%\d\)$"), "TwoParens"),
    (re.compile(r"^%\d\)$"), "OneParen"),
    (re.compile(r"^%\d\.$"), "Period"),
]


def _has_class(block: IrBlock, class_name: str) -> bool:
    return isinstance(block, IrDiv) and class_name in block.attr.classes


def _attr(block: IrDiv, key: str) -> Optional[str]:
    return dict(block.attr.attributes).get(key)


def _level(block: IrDiv) -> int:
    try:
        return int(_attr(block, "level") or 0)
    except ValueError:
        return 0


def _list_key(block: IrDiv) -> Tuple[Optional[str], bool]:
    return _attr(block, "num-id"), _attr(block, "format") == "bullet"


def _list_attributes(block: IrDiv) -> IrListAttributes:
    start_value = _attr(block, "start")
    try:
        start = int(start_value) if start_value is not None else 1
    except ValueError:
        start = 1

    style = NUMBER_STYLES.get(_attr(block, "format") or "", "DefaultStyle")

    delim = "DefaultDelim"
    level_text = _attr(block, "text") or ""
    for pattern, name in _DELIMITERS:
        if pattern.match(level_text):
            delim = name
            break

    return IrListAttributes(start=start, style=style, delim=delim)


def _make_list(first: IrDiv, entries: List[List[IrBlock]]) -> IrBlock:
    if _attr(first, "format") == "bullet":
        return IrBulletList(entries)
    return IrOrderedList(_list_attributes(first), entries)


def _build_lists(items: List[IrDiv]) -> List[IrBlock]:
    """연속된 list-item div들을 레벨에 따라 중첩 목록으로 구성"""
    result: List[IrBlock] = []
    i = 0
    while i < len(items):
        first = items[i]
        level = _level(first)
        key = _list_key(first)
        entries: List[List[IrBlock]] = []

        while i < len(items) and _level(items[i]) >= level:
            item = items[i]
            if _level(item) == level:
                if entries and _list_key(item) != key:
                    break
                entries.append(_unwrap_list_paragraphs(item.blocks))
                i += 1
                continue

            # 더 깊은 레벨은 직전 항목의 하위 목록
            j = i
            while j < len(items) and _level(items[j]) > level:
                j += 1
            nested = _build_lists(items[i:j])
            if entries:
                entries[-1].extend(nested)
            else:
                entries.append(nested)
            i = j

        result.append(_make_list(first, entries))
    return result


def _unwrap_list_paragraphs(blocks: List[IrBlock]) -> List[IrBlock]:
    result: List[IrBlock] = []
    for block in blocks:
        if _has_class(block, LIST_PARAGRAPH_CLASS):
            result.extend(block.blocks)
        else:
            result.append(block)
    return result


def _attach_list_paragraphs(blocks: List[IrBlock]) -> List[IrBlock]:
    """목록 항목 바로 뒤의 ListParagraph div를 그 항목에 붙임"""
    result: List[IrBlock] = []
    for block in blocks:
        if result and _has_class(block, LIST_PARAGRAPH_CLASS) and _has_class(result[-1], LIST_ITEM_CLASS):
            previous = result[-1]
            result[-1] = IrDiv(previous.attr, list(previous.blocks) + list(block.blocks))
        else:
            result.append(block)
    return result


def blocks_to_bullets(blocks: List[IrBlock]) -> List[IrBlock]:
    """list-item div → 글머리/번호 목록"""
    blocks = _attach_list_paragraphs(blocks)
    result: List[IrBlock] = []
    i = 0
    while i < len(blocks):
        if _has_class(blocks[i], LIST_ITEM_CLASS):
            j = i
            while j < len(blocks) and _has_class(blocks[j], LIST_ITEM_CLASS):
                j += 1
            result.extend(_build_lists(blocks[i:j]))
            i = j
        elif _has_class(blocks[i], LIST_PARAGRAPH_CLASS):
            # 목록에 붙지 못한 목록 단락은 내용만 남김
            result.extend(blocks[i].blocks)
            i += 1
        else:
            result.append(blocks[i])
            i += 1
    return result


def blocks_to_definitions(blocks: List[IrBlock]) -> List[IrBlock]:
    """DefinitionTerm/Definition div → 정의 목록"""
    result: List[IrBlock] = []
    entries: List[Tuple[List[IrInline], List[List[IrBlock]]]] = []

    def _flush():
        if entries:
            result.append(IrDefinitionList(list(entries)))
            entries.clear()

    i = 0
    while i < len(blocks):
        block = blocks[i]
        if _has_class(block, DEFINITION_TERM_CLASS):
            term = blocks_to_inlines(block.blocks)
            definitions: List[List[IrBlock]] = []
            j = i + 1
            while j < len(blocks) and _has_class(blocks[j], DEFINITION_CLASS):
                definitions.append(list(blocks[j].blocks))
                j += 1
            entries.append((term, definitions))
            i = j
            continue

        _flush()
        if _has_class(block, DEFINITION_CLASS):
            result.extend(block.blocks)
        else:
            result.append(block)
        i += 1

    _flush()
    return result
