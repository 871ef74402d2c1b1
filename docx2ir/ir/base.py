"""IR 공통 유틸리티"""

from __future__ import annotations

import itertools
import re
from dataclasses import fields, is_dataclass, replace
from typing import AbstractSet, Any, Callable, Iterable, List, get_args

from docx2ir.ir.models import (
    IrAttr,
    IrBlock,
    IrBlockQuote,
    IrBulletList,
    IrCode,
    IrCodeBlock,
    IrDefinitionList,
    IrDiv,
    IrHeader,
    IrInline,
    IrLineBreak,
    IrLink,
    IrMath,
    IrNote,
    IrOrderedList,
    IrPara,
    IrPlain,
    IrSoftBreak,
    IrSpace,
    IrStr,
)


INLINE_TYPES = get_args(IrInline)

# 블록을 인라인으로 펼칠 때 사용하는 단락 구분자
PARAGRAPH_SEPARATOR = "¶"

_SPACE_RE = re.compile(r"([ \t\r\n]+)")


def text_to_inlines(text: str) -> List[IrInline]:
    """문자열을 Str/Space/SoftBreak 토큰으로 분리"""
    inlines: List[IrInline] = []
    for part in _SPACE_RE.split(text):
        if not part:
            continue
        if _SPACE_RE.fullmatch(part):
            inlines.append(IrSoftBreak() if "\n" in part else IrSpace())
        else:
            inlines.append(IrStr(part))
    return inlines


def is_space_like(inline: IrInline) -> bool:
    return isinstance(inline, (IrSpace, IrSoftBreak, IrLineBreak))


def trim_spaces(inlines: List[IrInline]) -> List[IrInline]:
    """앞뒤 공백/줄바꿈 인라인 제거"""
    start = 0
    end = len(inlines)
    while start < end and is_space_like(inlines[start]):
        start += 1
    while end > start and is_space_like(inlines[end - 1]):
        end -= 1
    return list(inlines[start:end])


def stringify(inlines: Iterable[IrInline]) -> str:
    """인라인 목록의 평문 텍스트"""
    parts: List[str] = []
    for inline in inlines:
        if isinstance(inline, IrStr):
            parts.append(inline.text)
        elif is_space_like(inline):
            parts.append(" ")
        elif isinstance(inline, (IrCode, IrMath)):
            parts.append(inline.text)
        elif isinstance(inline, IrNote):
            continue
        elif hasattr(inline, "inlines"):
            parts.append(stringify(inline.inlines))
    return "".join(parts)


def inline_list_to_identifier(inlines: Iterable[IrInline]) -> str:
    """인라인 텍스트에서 식별자 생성

    소문자화 후 문자/숫자/`_-.`/공백만 남기고, 단어를 `-`로 잇고,
    첫 문자(letter) 앞의 문자들을 제거한다.
    """
    text = stringify(inlines).replace("\xa0", " ").lower()
    text = "".join(c for c in text if c.isalnum() or c in "_-. ")
    ident = "-".join(text.split())
    for idx, ch in enumerate(ident):
        if ch.isalpha():
            return ident[idx:]
    return ""


def unique_ident(inlines: Iterable[IrInline], used: AbstractSet[str]) -> str:
    """used와 겹치지 않는 식별자 생성"""
    base = inline_list_to_identifier(inlines) or "section"
    if base not in used:
        return base
    for n in itertools.count(1):
        candidate = f"{base}-{n}"
        if candidate not in used:
            return candidate
    raise AssertionError("unreachable")


def _join_with_separator(groups: List[List[IrInline]]) -> List[IrInline]:
    result: List[IrInline] = []
    for idx, group in enumerate(groups):
        if idx > 0:
            result.extend([IrSpace(), IrStr(PARAGRAPH_SEPARATOR), IrSpace()])
        result.extend(group)
    return result


def block_to_inlines(block: IrBlock) -> List[IrInline]:
    if isinstance(block, (IrPlain, IrPara, IrHeader)):
        return list(block.inlines)
    if isinstance(block, IrCodeBlock):
        return [IrCode(block.text, block.attr)]
    if isinstance(block, (IrBlockQuote, IrDiv)):
        return blocks_to_inlines(block.blocks)
    if isinstance(block, (IrBulletList, IrOrderedList)):
        return _join_with_separator([blocks_to_inlines(item) for item in block.items])
    if isinstance(block, IrDefinitionList):
        groups: List[List[IrInline]] = []
        for term, definitions in block.items:
            groups.append(list(term))
            groups.extend(blocks_to_inlines(d) for d in definitions)
        return _join_with_separator(groups)
    return []


def blocks_to_inlines(blocks: Iterable[IrBlock]) -> List[IrInline]:
    """블록들을 단락 구분자로 이어 인라인으로 펼침"""
    return _join_with_separator([block_to_inlines(b) for b in blocks])


def walk_inlines(fn: Callable[[IrInline], IrInline], value: Any) -> Any:
    """트리를 상향식으로 순회하며 모든 인라인에 fn 적용"""
    if isinstance(value, list):
        return [walk_inlines(fn, v) for v in value]
    if isinstance(value, tuple):
        return tuple(walk_inlines(fn, v) for v in value)
    if not is_dataclass(value) or isinstance(value, (type, IrAttr)):
        return value

    changes = {}
    for f in fields(value):
        child = getattr(value, f.name)
        if isinstance(child, (list, tuple)):
            changes[f.name] = walk_inlines(fn, child)
    node = replace(value, **changes) if changes else value

    if isinstance(node, INLINE_TYPES):
        return fn(node)
    return node


def collect_links(blocks: List[IrBlock]) -> List[IrLink]:
    """문서 내 모든 링크 수집"""
    links: List[IrLink] = []

    def _visit(inline: IrInline) -> IrInline:
        if isinstance(inline, IrLink):
            links.append(inline)
        return inline

    walk_inlines(_visit, blocks)
    return links
