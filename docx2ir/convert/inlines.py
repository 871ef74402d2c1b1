"""런/단락 구성 요소 → 인라인 변환"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from docx2ir.convert.anchor import AnchorResolver
from docx2ir.convert.combine import merge_blocks, merge_inlines
from docx2ir.convert.context import ConversionContext
from docx2ir.convert.revision import Provenance, RevisionPolicy
from docx2ir.convert.style import CODE_STYLES, resolve_run_style, run_style_to_transform
from docx2ir.docx.base import emu_to_inches
from docx2ir.docx.models import (
    BodyPart,
    BookMark,
    BreakElem,
    Chart,
    CommentEnd,
    CommentStart,
    Deletion,
    Drawing,
    Endnote,
    Extent,
    ExternalHyperLink,
    Footnote,
    InlineChart,
    InlineDrawing,
    Insertion,
    InternalHyperLink,
    NoBreakHyphenElem,
    ParPart,
    PlainOMath,
    PlainRun,
    Run,
    RunElem,
    SmartTag,
    SoftHyphenElem,
    TabElem,
    TextElem,
    TextRun,
)
from docx2ir.ir.base import text_to_inlines
from docx2ir.ir.models import (
    IrAttr,
    IrBlock,
    IrCode,
    IrImage,
    IrInline,
    IrLineBreak,
    IrLink,
    IrMath,
    IrNote,
    IrSpace,
    IrSpan,
    IrStr,
    IrSubscript,
    IrSuperscript,
    attr_with,
)

if TYPE_CHECKING:
    from docx2ir.convert.classifier import BlockClassifier


SOFT_HYPHEN = "\xad"
NON_BREAKING_HYPHEN = "‑"
CHART_PLACEHOLDER = "[CHART]"


def extent_to_attr(extent: Extent) -> IrAttr:
    """드로잉 크기를 width/height 속성(인치)으로 변환"""
    if extent is None:
        return IrAttr()
    width, height = extent
    return attr_with(attributes=[
        ("width", f"{emu_to_inches(width)}in"),
        ("height", f"{emu_to_inches(height)}in"),
    ])


def run_elem_to_string(elem: RunElem) -> str:
    if isinstance(elem, TextElem):
        return elem.text
    if isinstance(elem, BreakElem):
        return "\n"
    if isinstance(elem, TabElem):
        return "\t"
    if isinstance(elem, SoftHyphenElem):
        return SOFT_HYPHEN
    if isinstance(elem, NoBreakHyphenElem):
        return NON_BREAKING_HYPHEN
    raise ValueError(f"Unsupported run element: {type(elem)}")


def run_to_string(run: Run) -> str:
    if isinstance(run, TextRun):
        return "".join(run_elem_to_string(e) for e in run.elems)
    return ""


def par_part_to_string(part: ParPart) -> str:
    """코드 블록용 평문 텍스트"""
    if isinstance(part, PlainRun):
        return run_to_string(part.run)
    if isinstance(part, (InternalHyperLink, ExternalHyperLink)):
        return "".join(run_to_string(r) for r in part.runs)
    return ""


def run_elem_to_inlines(elem: RunElem) -> List[IrInline]:
    if isinstance(elem, TextElem):
        return text_to_inlines(elem.text)
    if isinstance(elem, BreakElem):
        return [IrLineBreak()]
    if isinstance(elem, TabElem):
        return [IrSpace()]
    if isinstance(elem, SoftHyphenElem):
        return [IrStr(SOFT_HYPHEN)]
    if isinstance(elem, NoBreakHyphenElem):
        return [IrStr(NON_BREAKING_HYPHEN)]
    raise ValueError(f"Unsupported run element: {type(elem)}")


class InlineConverter:
    """런 및 단락 구성 요소를 인라인으로 변환"""

    def __init__(
        self,
        context: ConversionContext,
        revision_policy: RevisionPolicy,
        anchor_resolver: AnchorResolver,
    ):
        self.context = context
        self.revision_policy = revision_policy
        self.anchor_resolver = anchor_resolver
        # 각주/메모 본문 변환용 (BlockClassifier가 생성 후 연결)
        self.block_converter: Optional["BlockClassifier"] = None

    def runs_to_inlines(self, runs: List[Run]) -> List[IrInline]:
        return merge_inlines(self.run_to_inlines(r) for r in runs)

    def par_parts_to_inlines(self, parts: List[ParPart]) -> List[IrInline]:
        return merge_inlines(self.par_part_to_inlines(p) for p in parts)

    def run_to_inlines(self, run: Run) -> List[IrInline]:
        if isinstance(run, TextRun):
            return self._text_run_to_inlines(run)
        if isinstance(run, (Footnote, Endnote)):
            # 각주와 미주는 구분하지 않는다
            return [IrNote(self._body_to_blocks(run.body))]
        if isinstance(run, InlineDrawing):
            return self._drawing(run.path, run.title, run.alt, run.data, run.extent)
        if isinstance(run, InlineChart):
            return self._chart()
        raise ValueError(f"Unsupported run: {type(run)}")

    def _text_run_to_inlines(self, run: TextRun) -> List[IrInline]:
        resolved = resolve_run_style(run.style)
        if run.style.style is not None and run.style.style[0] in CODE_STYLES:
            code = IrCode(run_to_string(run))
            if resolved.vert_align == "superscript":
                return [IrSuperscript([code])]
            if resolved.vert_align == "subscript":
                return [IrSubscript([code])]
            return [code]

        inlines = merge_inlines(run_elem_to_inlines(e) for e in run.elems)
        return run_style_to_transform(resolved)(inlines)

    def par_part_to_inlines(self, part: ParPart) -> List[IrInline]:
        if isinstance(part, PlainRun):
            return self.run_to_inlines(part.run)
        if isinstance(part, Insertion):
            return self.revision_policy.apply(
                "insertion",
                Provenance(part.author, part.date),
                lambda: self.runs_to_inlines(part.runs),
            )
        if isinstance(part, Deletion):
            return self.revision_policy.apply(
                "deletion",
                Provenance(part.author, part.date),
                lambda: self.runs_to_inlines(part.runs),
            )
        if isinstance(part, CommentStart):
            return self.revision_policy.comment_start(
                part.comment_id,
                Provenance(part.author, part.date),
                lambda: self._body_to_blocks(part.body),
            )
        if isinstance(part, CommentEnd):
            return self.revision_policy.comment_end(part.comment_id)
        if isinstance(part, BookMark):
            return self.anchor_resolver.bookmark(part.anchor)
        if isinstance(part, Drawing):
            return self._drawing(part.path, part.title, part.alt, part.data, part.extent)
        if isinstance(part, Chart):
            return self._chart()
        if isinstance(part, InternalHyperLink):
            return [IrLink("#" + part.anchor, self.runs_to_inlines(part.runs))]
        if isinstance(part, ExternalHyperLink):
            return [IrLink(part.target, self.runs_to_inlines(part.runs))]
        if isinstance(part, PlainOMath):
            return [IrMath("InlineMath", part.tex)]
        if isinstance(part, SmartTag):
            return self.runs_to_inlines(part.runs)
        raise ValueError(f"Unsupported paragraph part: {type(part)}")

    def _body_to_blocks(self, body: List[BodyPart]) -> List[IrBlock]:
        if self.block_converter is None:
            raise RuntimeError("InlineConverter is not attached to a BlockClassifier")
        return merge_blocks(self.block_converter.classify(bp) for bp in body)

    def _drawing(self, path: str, title: str, alt: str, data: bytes, extent: Extent) -> List[IrInline]:
        self.context.store_media(path, data)
        return [IrImage(path, text_to_inlines(alt), title, extent_to_attr(extent))]

    def _chart(self) -> List[IrInline]:
        return [IrSpan(attr_with(classes=["chart"]), [IrStr(CHART_PLACEHOLDER)])]
