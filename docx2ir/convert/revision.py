"""변경 추적(삽입/삭제/메모) 정책"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Literal

from docx2ir.convert.context import ConversionContext, TrackChanges
from docx2ir.ir.base import blocks_to_inlines
from docx2ir.ir.models import IrBlock, IrInline, IrPara, IrPlain, IrSpan, attr_with

RevisionKind = Literal["insertion", "deletion"]

# 변경 내용을 그대로 남기는 모드
_PASS_THROUGH_MODE = {
    "insertion": "accept",
    "deletion": "reject",
}


@dataclass(frozen=True)
class Provenance:
    """변경 작성자/일시"""
    author: str
    date: str


class RevisionPolicy:
    """track_changes 모드에 따라 변경 내용을 유지/제거/태깅

    내용은 유지될 때만 변환되도록 호출 가능한 객체로 받는다.
    """

    def __init__(self, context: ConversionContext):
        self.context = context

    @property
    def mode(self) -> TrackChanges:
        return self.context.options.track_changes

    def apply(
        self,
        kind: RevisionKind,
        provenance: Provenance,
        content: Callable[[], List[IrInline]],
    ) -> List[IrInline]:
        """삽입/삭제 변경 적용"""
        if self.mode == "all":
            attr = attr_with(
                classes=[kind],
                attributes=[("author", provenance.author), ("date", provenance.date)],
            )
            return [IrSpan(attr, content())]
        if self.mode == _PASS_THROUGH_MODE[kind]:
            return content()
        return []

    def comment_start(
        self,
        comment_id: str,
        provenance: Provenance,
        content: Callable[[], List[IrBlock]],
    ) -> List[IrInline]:
        """메모 시작 표식 (all 모드에서만)"""
        if self.mode != "all":
            return []
        inlines = self._flatten_comment(comment_id, content())
        attr = attr_with(
            classes=["comment-start"],
            attributes=[("id", comment_id), ("author", provenance.author), ("date", provenance.date)],
        )
        return [IrSpan(attr, inlines)]

    def comment_end(self, comment_id: str) -> List[IrInline]:
        """메모 끝 표식 (all 모드에서만)"""
        if self.mode != "all":
            return []
        return [IrSpan(attr_with(classes=["comment-end"], attributes=[("id", comment_id)]), [])]

    def _flatten_comment(self, comment_id: str, blocks: List[IrBlock]) -> List[IrInline]:
        if any(not isinstance(block, (IrPara, IrPlain)) for block in blocks):
            self.context.warn(f"Docx comment {comment_id} will not retain formatting")
        return blocks_to_inlines(blocks)
