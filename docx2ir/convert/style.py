"""스타일 해석 및 서식 변환 합성

문자 스타일 상속 체인을 평탄화하고, 해석된 스타일을 인라인/블록
래핑 함수로 바꾼다. 플래그는 고정된 순서로 하나씩 소비된다.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, List, Optional, Set

from docx2ir.docx.models import ParagraphStyle, RunStyle
from docx2ir.errors import StyleChainError
from docx2ir.ir.models import (
    IrBlock,
    IrBlockQuote,
    IrDiv,
    IrEmph,
    IrInline,
    IrSmallCaps,
    IrSpan,
    IrStrikeout,
    IrStrong,
    IrSubscript,
    IrSuperscript,
    attr_with,
)

InlineTransform = Callable[[List[IrInline]], List[IrInline]]
BlockTransform = Callable[[List[IrBlock]], List[IrBlock]]

# 하위 스타일에 서식을 물려주지 않는 문자 스타일
BLACKLISTED_CHAR_STYLES = {"Hyperlink"}

# span으로 보존할 문자 스타일 (현재 없음)
SPANS_TO_KEEP: Set[str] = set()

# div로 보존할 단락 스타일
DIVS_TO_KEEP = {"list-item", "Definition", "DefinitionTerm"}
LIST_PARAGRAPH_DIVS = {"ListParagraph"}

CODE_STYLES = {"VerbatimChar"}
CODE_DIVS = {"SourceCode"}


def _pick(own, inherited):
    return own if own is not None else inherited


def resolve_run_style(run_style: RunStyle) -> RunStyle:
    """상속 체인을 따라 비어 있는 플래그를 채운 RunStyle 반환"""
    return _resolve(run_style, set())


def _resolve(run_style: RunStyle, seen: Set[str]) -> RunStyle:
    if run_style.style is None:
        return run_style

    style_id, parent = run_style.style
    if style_id in BLACKLISTED_CHAR_STYLES:
        return run_style
    if style_id in seen:
        raise StyleChainError(f"Cyclic character style chain at {style_id!r}")
    seen.add(style_id)

    inherited = _resolve(parent, seen)
    return RunStyle(
        bold=_pick(run_style.bold, inherited.bold),
        italic=_pick(run_style.italic, inherited.italic),
        small_caps=_pick(run_style.small_caps, inherited.small_caps),
        strike=_pick(run_style.strike, inherited.strike),
        vert_align=_pick(run_style.vert_align, inherited.vert_align),
        underline=_pick(run_style.underline, inherited.underline),
        style=run_style.style,
    )


def _identity(items):
    return items


def _wrap_inlines(ctor, inner: InlineTransform) -> InlineTransform:
    return lambda inlines: [ctor(inner(inlines))]


def _wrap_span(class_name: str, inner: InlineTransform) -> InlineTransform:
    return lambda inlines: [IrSpan(attr_with(classes=[class_name]), inner(inlines))]


def run_style_to_transform(run_style: RunStyle) -> InlineTransform:
    """해석된 RunStyle을 인라인 래핑 함수로 변환

    순서: 보존 span → 기울임 → 굵게 → 작은 대문자 → 취소선 → 위/아래 첨자 → 밑줄
    """
    if run_style.style is not None and run_style.style[0] in SPANS_TO_KEEP:
        return _wrap_span(run_style.style[0], run_style_to_transform(replace(run_style, style=None)))
    if run_style.italic:
        return _wrap_inlines(IrEmph, run_style_to_transform(replace(run_style, italic=None)))
    if run_style.bold:
        return _wrap_inlines(IrStrong, run_style_to_transform(replace(run_style, bold=None)))
    if run_style.small_caps:
        return _wrap_inlines(IrSmallCaps, run_style_to_transform(replace(run_style, small_caps=None)))
    if run_style.strike:
        return _wrap_inlines(IrStrikeout, run_style_to_transform(replace(run_style, strike=None)))
    if run_style.vert_align == "superscript":
        return _wrap_inlines(IrSuperscript, run_style_to_transform(replace(run_style, vert_align=None)))
    if run_style.vert_align == "subscript":
        return _wrap_inlines(IrSubscript, run_style_to_transform(replace(run_style, vert_align=None)))
    if run_style.underline == "single":
        return _wrap_span("underline", run_style_to_transform(replace(run_style, underline=None)))
    return _identity


def _wrap_div(class_name: str, inner: BlockTransform) -> BlockTransform:
    return lambda blocks: [IrDiv(attr_with(classes=[class_name]), inner(blocks))]


def _wrap_block_quote(inner: BlockTransform) -> BlockTransform:
    return lambda blocks: [IrBlockQuote(inner(blocks))]


def _indented(par_style: ParagraphStyle) -> Optional[bool]:
    """들여쓰기로 인용 블록 여부 추정 (판단 근거가 없으면 None)"""
    indentation = par_style.indentation
    if indentation is None or indentation.left is None:
        return None
    if indentation.hanging is not None:
        return indentation.left - indentation.hanging > 0
    return indentation.left > 0


def par_style_to_transform(par_style: ParagraphStyle) -> BlockTransform:
    """ParagraphStyle을 블록 래핑 함수로 변환

    스타일 클래스를 앞에서부터 소비한다. 보존 대상은 div로 감싸고,
    나머지는 건너뛴다. 클래스가 남지 않으면 명시적 인용 플래그,
    그 다음 들여쓰기를 본다.
    """
    if par_style.styles:
        head, rest = par_style.styles[0], par_style.styles[1:]
        if head in DIVS_TO_KEEP:
            return _wrap_div(head, par_style_to_transform(replace(par_style, styles=rest)))
        if head in LIST_PARAGRAPH_DIVS:
            # 목록 단락의 들여쓰기는 인용 블록 추정에 쓰지 않는다
            inner = par_style_to_transform(replace(par_style, styles=rest, indentation=None))
            return _wrap_div(head, inner)
        return par_style_to_transform(replace(par_style, styles=rest))

    if par_style.block_quote:
        rest_style = replace(par_style, block_quote=None, indentation=None)
        return _wrap_block_quote(par_style_to_transform(rest_style))

    quote = _indented(par_style)
    if quote is not None:
        inner = par_style_to_transform(replace(par_style, indentation=None))
        return _wrap_block_quote(inner) if quote else inner
    return _identity
