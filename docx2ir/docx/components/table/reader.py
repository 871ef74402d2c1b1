"""표 Reader - w:tbl 파싱"""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from lxml import etree

from docx2ir.docx.base import NS, to_int, w_attr, w_val
from docx2ir.docx.models import Cell, Row, Table, TableLook

if TYPE_CHECKING:
    from docx2ir.docx.components.body.reader import BodyReader

# tblLook/@w:val 비트마스크의 "첫 행 서식" 비트
FIRST_ROW_MASK = 0x0020

_TRUE_VALUES = {"1", "true", "on"}


class TableReader:
    """표 파싱"""

    def __init__(self, body_reader: "BodyReader"):
        self.body_reader = body_reader

    def parse(self, tbl: etree._Element) -> Table:
        """w:tbl 요소에서 Table 파싱"""
        tbl_pr = tbl.find("w:tblPr", NS)
        caption = w_val(tbl_pr, "tblCaption", "") or ""

        grid: List[int] = []
        for col in tbl.xpath("./w:tblGrid/w:gridCol", namespaces=NS):
            grid.append(to_int(w_attr(col, "w"), 0))

        rows = [self._parse_row(tr) for tr in tbl.findall("w:tr", NS)]
        return Table(caption=caption, grid=grid, look=self._parse_look(tbl_pr), rows=rows)

    def _parse_look(self, tbl_pr) -> TableLook:
        look = tbl_pr.find("w:tblLook", NS) if tbl_pr is not None else None
        if look is None:
            return TableLook()
        first_row = w_attr(look, "firstRow")
        if first_row is not None:
            return TableLook(first_row=first_row.lower() in _TRUE_VALUES)
        try:
            value = int(w_attr(look, "val", "0"), 16)
        except ValueError:
            value = 0
        return TableLook(first_row=bool(value & FIRST_ROW_MASK))

    def _parse_row(self, tr: etree._Element) -> Row:
        cells = [Cell(self.body_reader.parse(tc)) for tc in tr.findall("w:tc", NS)]
        return Row(cells=cells)
