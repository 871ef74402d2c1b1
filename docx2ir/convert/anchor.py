"""앵커(북마크/헤더 식별자) 해석 및 내부 링크 재작성"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List

from docx2ir.convert.context import ConversionContext
from docx2ir.ir.base import unique_ident, walk_inlines
from docx2ir.ir.models import IrBlock, IrHeader, IrInline, IrLink, IrSpan, IrStr, attr_with

logger = logging.getLogger(__name__)

# 편집기 내부용 북마크 (무시)
DUMMY_ANCHORS = {"_GoBack"}

ANCHOR_CLASS = "anchor"


def anchor_span(ident: str) -> IrSpan:
    return IrSpan(attr_with(identifier=ident, classes=[ANCHOR_CLASS]), [])


def is_anchor_span(inline: IrInline) -> bool:
    return (
        isinstance(inline, IrSpan)
        and inline.attr.classes == [ANCHOR_CLASS]
        and not inline.attr.attributes
    )


class AnchorResolver:
    """북마크 이름 → 충돌 없는 식별자 매핑 관리

    본문 변환 중에 매핑을 채우고, 변환이 끝난 뒤 rewrite_links()로
    내부 링크 대상을 최종 식별자로 바꾼다.
    """

    def __init__(self, context: ConversionContext):
        self.context = context

    def bookmark(self, anchor: str) -> List[IrInline]:
        """북마크를 빈 앵커 span으로 변환"""
        if anchor in DUMMY_ANCHORS:
            return []

        # 헤더 안의 북마크는 make_header_anchor()에서 처리
        if self.context.in_header:
            return [anchor_span(anchor)]

        used = self.context.used_idents()
        new_anchor = unique_ident([IrStr(anchor)], used) if anchor in used else anchor
        if anchor in self.context.anchor_map:
            self.context.warn(f"Docx bookmark {anchor} is defined more than once")
        self.context.record_anchor(anchor, new_anchor)
        return [anchor_span(new_anchor)]

    def make_header_anchor(self, header: IrHeader) -> IrHeader:
        """헤더에 식별자 배정

        헤더 안에 앵커 span이 있으면 그 이름을 헤더 식별자에 연결하고
        span은 제거한다. 없으면 헤더 식별자를 자기 자신에 연결한다.
        """
        folded = False
        while True:
            span = next((il for il in header.inlines if is_anchor_span(il)), None)
            if span is None:
                break
            ident = header.attr.identifier or unique_ident(header.inlines, self.context.used_idents())
            self.context.record_anchor(span.attr.identifier, ident)

            inlines: List[IrInline] = []
            for il in header.inlines:
                if il == span:
                    inlines.extend(span.inlines)
                else:
                    inlines.append(il)
            header = replace(header, attr=replace(header.attr, identifier=ident), inlines=inlines)
            folded = True

        if folded:
            return header

        ident = header.attr.identifier or unique_ident(header.inlines, self.context.used_idents())
        self.context.record_anchor(ident, ident)
        return replace(header, attr=replace(header.attr, identifier=ident))

    def rewrite_links(self, blocks: List[IrBlock]) -> List[IrBlock]:
        """내부 링크(#...) 대상을 최종 식별자로 재작성"""
        anchor_map = self.context.anchor_map

        def _rewrite(inline: IrInline) -> IrInline:
            if isinstance(inline, IrLink) and inline.url.startswith("#"):
                target = anchor_map.get(inline.url[1:])
                if target is not None:
                    return replace(inline, url="#" + target)
            return inline

        logger.debug("Rewriting internal links with %d anchors", len(anchor_map))
        return walk_inlines(_rewrite, blocks)
