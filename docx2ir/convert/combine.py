"""인접 노드 병합

인접한 호환 인라인/블록을 하나로 합친다.
- 연속 Str 결합, 연속 Space 축약
- 같은 종류의 서식 래퍼(및 속성이 같은 span/code) 결합
- 서식 래퍼 양끝의 공백은 래퍼 밖으로 이동
- 연속 인용 블록, 속성이 같은 연속 코드 블록 결합
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from docx2ir.ir.models import (
    FORMATTING_TYPES,
    IrBlock,
    IrBlockQuote,
    IrCode,
    IrCodeBlock,
    IrInline,
    IrPara,
    IrPlain,
    IrSpace,
    IrSpan,
    IrStr,
)


def merge_inlines(groups: Iterable[List[IrInline]]) -> List[IrInline]:
    """인라인 목록들을 이어 붙이며 인접 노드 병합"""
    result: List[IrInline] = []
    for group in groups:
        for inline in group:
            for piece in _space_out(inline):
                _append_inline(result, piece)
    return result


def _space_out(inline: IrInline) -> List[IrInline]:
    """서식 래퍼 앞뒤의 공백을 밖으로 꺼냄"""
    if not isinstance(inline, FORMATTING_TYPES):
        return [inline]

    inner = list(inline.inlines)
    leading: List[IrInline] = []
    trailing: List[IrInline] = []
    while inner and isinstance(inner[0], IrSpace):
        leading.append(inner.pop(0))
    while inner and isinstance(inner[-1], IrSpace):
        trailing.insert(0, inner.pop())

    if not leading and not trailing:
        return [inline]
    core = [replace(inline, inlines=inner)] if inner else []
    return leading + core + trailing


def _append_inline(result: List[IrInline], inline: IrInline) -> None:
    if not result:
        result.append(inline)
        return

    last = result[-1]
    if isinstance(last, IrStr) and isinstance(inline, IrStr):
        result[-1] = IrStr(last.text + inline.text)
    elif isinstance(last, IrSpace) and isinstance(inline, IrSpace):
        return
    elif isinstance(inline, FORMATTING_TYPES) and type(last) is type(inline):
        result[-1] = replace(last, inlines=merge_inlines([last.inlines, inline.inlines]))
    elif isinstance(last, IrSpan) and isinstance(inline, IrSpan) and last.attr == inline.attr:
        result[-1] = replace(last, inlines=merge_inlines([last.inlines, inline.inlines]))
    elif isinstance(last, IrCode) and isinstance(inline, IrCode) and last.attr == inline.attr:
        result[-1] = IrCode(last.text + inline.text, last.attr)
    else:
        result.append(inline)


def merge_blocks(groups: Iterable[List[IrBlock]]) -> List[IrBlock]:
    """블록 목록들을 이어 붙이며 인접 블록 병합"""
    result: List[IrBlock] = []
    for group in groups:
        for block in group:
            last = result[-1] if result else None
            if isinstance(last, IrBlockQuote) and isinstance(block, IrBlockQuote):
                result[-1] = IrBlockQuote(merge_blocks([last.blocks, block.blocks]))
            elif (
                isinstance(last, IrCodeBlock)
                and isinstance(block, IrCodeBlock)
                and last.attr == block.attr
            ):
                result[-1] = IrCodeBlock(last.text + "\n" + block.text, last.attr)
            else:
                result.append(block)
    return result


def single_para_to_plain(blocks: List[IrBlock]) -> List[IrBlock]:
    """단락 하나뿐인 셀 내용을 Plain으로 변환"""
    if len(blocks) == 1 and isinstance(blocks[0], IrPara):
        return [IrPlain(blocks[0].inlines)]
    return blocks
