"""본문 단위(단락/목록 항목/표/수식 블록) → 블록 분류

단락은 코드 → 헤더 → 일반 단락 순으로 판별한다. 단위 사이의 상태는
드롭캡 누적값(context.drop_cap)뿐이다.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List

from docx2ir.convert.anchor import AnchorResolver
from docx2ir.convert.combine import merge_blocks, merge_inlines, single_para_to_plain
from docx2ir.convert.context import ConversionContext
from docx2ir.convert.inlines import InlineConverter, par_part_to_string
from docx2ir.convert.lists import LIST_ITEM_CLASS, LIST_PARAGRAPH_CLASS
from docx2ir.convert.style import CODE_DIVS, par_style_to_transform
from docx2ir.docx.models import (
    BodyPart,
    Cell,
    ListItem,
    OMathPara,
    Paragraph,
    Row,
    Table,
)
from docx2ir.ir.base import text_to_inlines, trim_spaces
from docx2ir.ir.models import (
    IrBlock,
    IrCodeBlock,
    IrDiv,
    IrHeader,
    IrMath,
    IrPara,
    IrTable,
    attr_with,
)

logger = logging.getLogger(__name__)

BlockStructurer = Callable[[List[IrBlock]], List[IrBlock]]


class BlockClassifier:
    """본문 단위 하나를 0개 이상의 블록으로 변환"""

    def __init__(
        self,
        context: ConversionContext,
        inline_converter: InlineConverter,
        anchor_resolver: AnchorResolver,
        list_structurer: BlockStructurer,
        definition_structurer: BlockStructurer,
    ):
        self.context = context
        self.inline_converter = inline_converter
        self.anchor_resolver = anchor_resolver
        self.list_structurer = list_structurer
        self.definition_structurer = definition_structurer
        # 각주/메모 본문은 같은 분류기로 변환
        inline_converter.block_converter = self

    def classify(self, body_part: BodyPart) -> List[IrBlock]:
        if isinstance(body_part, Paragraph):
            return self._paragraph(body_part)
        if isinstance(body_part, ListItem):
            return self._list_item(body_part)
        if isinstance(body_part, Table):
            return self._table(body_part)
        if isinstance(body_part, OMathPara):
            return [IrPara([IrMath("DisplayMath", body_part.tex)])]
        raise ValueError(f"Unsupported body part: {type(body_part)}")

    def classify_all(self, body_parts: List[BodyPart]) -> List[IrBlock]:
        """본문 단위 목록 → 병합된 블록 목록"""
        return merge_blocks(self.classify(bp) for bp in body_parts)

    # ------------------------------------------------------------------
    # 단락
    # ------------------------------------------------------------------

    def _paragraph(self, paragraph: Paragraph) -> List[IrBlock]:
        style = paragraph.style
        if any(s in CODE_DIVS for s in style.styles):
            return self._code_block(paragraph)
        if style.heading is not None:
            return self._header(paragraph)
        return self._plain_paragraph(paragraph)

    def _code_block(self, paragraph: Paragraph) -> List[IrBlock]:
        text = "".join(par_part_to_string(p) for p in paragraph.parts)
        transform = par_style_to_transform(replace(paragraph.style, indentation=None))
        return transform([IrCodeBlock(text)])

    def _header(self, paragraph: Paragraph) -> List[IrBlock]:
        style_id, level = paragraph.style.heading
        with self.context.inside_header():
            inlines = self.inline_converter.par_parts_to_inlines(paragraph.parts)
        classes = [s for s in paragraph.style.styles if s != style_id]
        header = IrHeader(level, attr_with(classes=classes), inlines)
        return [self.anchor_resolver.make_header_anchor(header)]

    def _plain_paragraph(self, paragraph: Paragraph) -> List[IrBlock]:
        inlines = trim_spaces(self.inline_converter.par_parts_to_inlines(paragraph.parts))
        pending = self.context.drop_cap

        if paragraph.style.drop_cap:
            self.context.drop_cap = pending + inlines
            return []

        self.context.drop_cap = []
        if pending:
            inlines = merge_inlines([pending, inlines])
        if not inlines:
            return []
        return par_style_to_transform(paragraph.style)([IrPara(inlines)])

    # ------------------------------------------------------------------
    # 목록 항목
    # ------------------------------------------------------------------

    def _list_item(self, item: ListItem) -> List[IrBlock]:
        if item.level_info is None:
            # 레벨 정보가 없으면 목록 단락 표시만 남긴 일반 단락
            style = replace(item.style, styles=[LIST_PARAGRAPH_CLASS] + list(item.style.styles))
            return self._paragraph(Paragraph(style, item.parts))

        info = item.level_info
        attributes = [
            ("level", item.level),
            ("num-id", item.num_id),
            ("format", info.format),
            ("text", info.text),
        ]
        if info.start is not None:
            attributes.append(("start", str(info.start)))

        blocks = self._paragraph(Paragraph(item.style, item.parts))
        return [IrDiv(attr_with(classes=[LIST_ITEM_CLASS], attributes=attributes), blocks)]

    # ------------------------------------------------------------------
    # 표
    # ------------------------------------------------------------------

    def _table(self, table: Table) -> List[IrBlock]:
        if not table.rows:
            return [IrPara([])]

        first, rest = table.rows[0], table.rows[1:]
        if table.look.first_row and rest:
            header_row, data_rows = first, rest
        elif table.look.first_row:
            # 행이 하나뿐이면 헤더 없이 데이터 행으로
            header_row, data_rows = None, [first]
        else:
            header_row, data_rows = None, list(table.rows)

        # 문서 순서대로 변환 (북마크 식별자 배정 순서)
        headers = self._row(header_row) if header_row is not None else []
        rows = [self._row(r) for r in data_rows]
        width = len(rows[0]) if rows else 0
        headers = (headers + [[] for _ in range(width)])[:width]

        logger.debug("Table with %d rows and %d columns", len(rows), width)
        return [
            IrTable(
                caption=text_to_inlines(table.caption),
                alignments=["AlignDefault"] * width,
                widths=[0.0] * width,
                headers=headers,
                rows=rows,
            )
        ]

    def _row(self, row: Row) -> List[List[IrBlock]]:
        return [single_para_to_plain(self._cell(c)) for c in row.cells]

    def _cell(self, cell: Cell) -> List[IrBlock]:
        blocks = self.classify_all(cell.body)
        return self.definition_structurer(self.list_structurer(blocks))
