"""텍스트 런 Reader - w:r 파싱"""

from __future__ import annotations

from typing import Callable, List, Optional, TYPE_CHECKING

from lxml import etree

from docx2ir.docx.base import NS, is_tag, qname, to_int, w_attr
from docx2ir.docx.components.styles.reader import StyleReader
from docx2ir.docx.models import (
    BreakElem,
    Endnote,
    Footnote,
    InlineChart,
    InlineDrawing,
    NoBreakHyphenElem,
    Run,
    RunElem,
    SoftHyphenElem,
    TabElem,
    TextElem,
    TextRun,
)

if TYPE_CHECKING:
    from docx2ir.docx.components.notes.reader import NoteReader
    from docx2ir.docx.reader import DocxPackage


class RunReader:
    """텍스트 런 및 런 내부 개체(각주 참조, 드로잉, 차트) 파싱"""

    def __init__(
        self,
        package: "DocxPackage",
        style_reader: StyleReader,
        warn: Callable[[str], None],
    ):
        self.package = package
        self.style_reader = style_reader
        self.warn = warn
        self.note_reader: Optional["NoteReader"] = None

    def parse(self, r: etree._Element) -> List[Run]:
        """w:r 요소에서 런 목록 파싱

        텍스트 요소는 하나의 TextRun으로 모으고, 각주 참조나 드로잉을
        만나면 그 자리에서 나눈다.
        """
        style = self.style_reader.run_style(r.find("w:rPr", NS))
        runs: List[Run] = []
        elems: List[RunElem] = []

        def _flush():
            if elems:
                runs.append(TextRun(style=style, elems=list(elems)))
                elems.clear()

        for node in r:
            elem = self._parse_elem(node)
            if elem is not None:
                elems.append(elem)
                continue

            run = self._parse_object(node)
            if run is not None:
                _flush()
                runs.append(run)

        _flush()
        return runs

    def parse_all(self, parent: etree._Element) -> List[Run]:
        """부모 요소의 w:r 자식들 파싱"""
        runs: List[Run] = []
        for r in parent.findall("w:r", NS):
            runs.extend(self.parse(r))
        return runs

    def _parse_elem(self, node: etree._Element) -> Optional[RunElem]:
        if is_tag(node, "w", "t") or is_tag(node, "w", "delText"):
            return TextElem(node.text or "")
        if is_tag(node, "w", "br") or is_tag(node, "w", "cr"):
            return BreakElem()
        if is_tag(node, "w", "tab"):
            return TabElem()
        if is_tag(node, "w", "softHyphen"):
            return SoftHyphenElem()
        if is_tag(node, "w", "noBreakHyphen"):
            return NoBreakHyphenElem()
        return None

    def _parse_object(self, node: etree._Element) -> Optional[Run]:
        if is_tag(node, "w", "footnoteReference"):
            return self._note(node, "footnote")
        if is_tag(node, "w", "endnoteReference"):
            return self._note(node, "endnote")
        if is_tag(node, "w", "drawing"):
            return self._parse_drawing(node)
        if is_tag(node, "w", "pict") or is_tag(node, "w", "object"):
            return self._parse_vml(node)
        return None

    def _note(self, node: etree._Element, kind: str) -> Optional[Run]:
        note_id = w_attr(node, "id", "")
        body = None
        if self.note_reader is not None:
            body = self.note_reader.footnote(note_id) if kind == "footnote" else self.note_reader.endnote(note_id)
        if body is None:
            self.warn(f"Docx {kind} {note_id} not found")
            return None
        return Footnote(body) if kind == "footnote" else Endnote(body)

    def _parse_drawing(self, drawing: etree._Element) -> Optional[Run]:
        """w:drawing → InlineDrawing / InlineChart"""
        if drawing.xpath(".//c:chart", namespaces=NS):
            return InlineChart()

        blips = drawing.xpath(".//a:blip", namespaces=NS)
        if not blips:
            return None
        rel_id = blips[0].get(qname("r", "embed")) or blips[0].get(qname("r", "link"))

        doc_pr = drawing.xpath(".//wp:docPr", namespaces=NS)
        title = doc_pr[0].get("title", "") if doc_pr else ""
        alt = doc_pr[0].get("descr", "") if doc_pr else ""

        extent = None
        extents = drawing.xpath(".//wp:extent", namespaces=NS)
        if extents:
            cx = to_int(extents[0].get("cx"))
            cy = to_int(extents[0].get("cy"))
            if cx is not None and cy is not None:
                extent = (float(cx), float(cy))

        return self._image(rel_id, title, alt, extent)

    def _parse_vml(self, pict: etree._Element) -> Optional[Run]:
        """VML 이미지 (w:pict/v:imagedata)"""
        images = pict.xpath(".//v:imagedata", namespaces=NS)
        if not images:
            return None
        rel_id = images[0].get(qname("r", "id"))
        return self._image(rel_id, "", "", None)

    def _image(self, rel_id: Optional[str], title: str, alt: str, extent) -> Optional[Run]:
        rel = self.package.relationship(rel_id) if rel_id else None
        if rel is None or rel.external:
            self.warn(f"Docx image relationship {rel_id} not found")
            return None
        data = self.package.parts.get(rel.target)
        if data is None:
            self.warn(f"Docx media {rel.target} not found")
            data = b""
        return InlineDrawing(
            path=self.package.media_path(rel),
            title=title,
            alt=alt,
            data=data,
            extent=extent,
        )
