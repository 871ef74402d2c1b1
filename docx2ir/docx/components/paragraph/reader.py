"""단락 Reader - w:p 파싱"""

from __future__ import annotations

from typing import Callable, List, Optional, TYPE_CHECKING

from lxml import etree

from docx2ir.docx.base import NS, is_tag, qname, to_int, w_attr, w_val
from docx2ir.docx.components.math.reader import MathReader
from docx2ir.docx.components.numbering.reader import NumberingReader
from docx2ir.docx.components.styles.reader import StyleReader
from docx2ir.docx.components.text.reader import RunReader
from docx2ir.docx.models import (
    BodyPart,
    BookMark,
    Chart,
    CommentEnd,
    CommentStart,
    Deletion,
    Drawing,
    ExternalHyperLink,
    InlineChart,
    InlineDrawing,
    Insertion,
    InternalHyperLink,
    ListItem,
    OMathPara,
    ParIndentation,
    ParPart,
    Paragraph,
    ParagraphStyle,
    PlainOMath,
    PlainRun,
    Run,
    SmartTag,
)

if TYPE_CHECKING:
    from docx2ir.docx.components.notes.reader import NoteReader
    from docx2ir.docx.reader import DocxPackage

DROP_CAP_VALUES = {"drop", "margin"}

# 내용만 풀어서 읽는 래퍼 요소
_TRANSPARENT_WRAPPERS = {"fldSimple", "customXml", "dir", "bdo"}


class ParagraphReader:
    """단락 속성 및 단락 구성 요소 파싱"""

    def __init__(
        self,
        package: "DocxPackage",
        run_reader: RunReader,
        style_reader: StyleReader,
        numbering_reader: NumberingReader,
        math_reader: MathReader,
        warn: Callable[[str], None],
    ):
        self.package = package
        self.run_reader = run_reader
        self.style_reader = style_reader
        self.numbering_reader = numbering_reader
        self.math_reader = math_reader
        self.warn = warn
        self.note_reader: Optional["NoteReader"] = None

    def parse(self, p: etree._Element) -> BodyPart:
        """w:p 요소에서 Paragraph/ListItem/OMathPara 파싱"""
        content = [c for c in p if isinstance(c.tag, str) and not is_tag(c, "w", "pPr")]
        if content and all(is_tag(c, "m", "oMathPara") for c in content):
            return OMathPara(" \\\\ ".join(self.math_reader.parse_para(c) for c in content))

        ppr = p.find("w:pPr", NS)
        style = self.parse_style(ppr)
        parts = self.parse_parts(p)

        num_pr = ppr.find("w:numPr", NS) if ppr is not None else None
        if num_pr is not None:
            num_id = w_val(num_pr, "numId")
            level = w_val(num_pr, "ilvl", "0")
            # numId 0은 번호 매기기 해제
            if num_id and num_id != "0":
                level_info = self.numbering_reader.level_info(num_id, level)
                if level_info is None:
                    self.warn(f"Docx numbering {num_id} level {level} not found")
                return ListItem(style=style, num_id=num_id, level=level, level_info=level_info, parts=parts)

        return Paragraph(style=style, parts=parts)

    def parse_style(self, ppr: Optional[etree._Element]) -> ParagraphStyle:
        """w:pPr → ParagraphStyle"""
        style_id = w_val(ppr, "pStyle")
        styles = [style_id] if style_id else []

        heading = None
        block_quote = None
        if style_id:
            level = self.style_reader.heading_level(style_id)
            if level is not None:
                heading = (style_id, level)
            block_quote = self.style_reader.is_block_quote(style_id)

        frame = ppr.find("w:framePr", NS) if ppr is not None else None
        drop_cap = w_attr(frame, "dropCap", "none") in DROP_CAP_VALUES

        return ParagraphStyle(
            styles=styles,
            heading=heading,
            block_quote=block_quote,
            indentation=self._parse_indentation(ppr),
            drop_cap=drop_cap,
        )

    def _parse_indentation(self, ppr: Optional[etree._Element]) -> Optional[ParIndentation]:
        ind = ppr.find("w:ind", NS) if ppr is not None else None
        if ind is None:
            return None
        left = to_int(w_attr(ind, "left") or w_attr(ind, "start"))
        right = to_int(w_attr(ind, "right") or w_attr(ind, "end"))
        hanging = to_int(w_attr(ind, "hanging"))
        if hanging is None:
            first_line = to_int(w_attr(ind, "firstLine"))
            hanging = -first_line if first_line is not None else None
        return ParIndentation(left=left, right=right, hanging=hanging)

    # ============================================================
    # 단락 구성 요소
    # ============================================================

    def parse_parts(self, parent: etree._Element) -> List[ParPart]:
        parts: List[ParPart] = []
        for node in parent:
            if isinstance(node.tag, str):
                parts.extend(self._parse_part(node))
        return parts

    def _parse_part(self, node: etree._Element) -> List[ParPart]:
        if is_tag(node, "w", "r"):
            return [self._top_level_run(run) for run in self.run_reader.parse(node)]
        if is_tag(node, "w", "ins"):
            return [Insertion(*self._change_info(node), runs=self._change_runs(node))]
        if is_tag(node, "w", "del"):
            return [Deletion(*self._change_info(node), runs=self._change_runs(node))]
        if is_tag(node, "w", "commentRangeStart"):
            return self._comment_start(w_attr(node, "id", ""))
        if is_tag(node, "w", "commentRangeEnd"):
            return [CommentEnd(w_attr(node, "id", ""))]
        if is_tag(node, "w", "bookmarkStart"):
            return [BookMark(w_attr(node, "id", ""), w_attr(node, "name", ""))]
        if is_tag(node, "w", "hyperlink"):
            return [self._hyperlink(node)]
        if is_tag(node, "m", "oMath"):
            return [PlainOMath(self.math_reader.parse(node))]
        if is_tag(node, "m", "oMathPara"):
            return [PlainOMath(self.math_reader.parse(om)) for om in node.findall("m:oMath", NS)]
        if is_tag(node, "w", "smartTag"):
            return [SmartTag(self.run_reader.parse_all(node))]
        if is_tag(node, "w", "sdt"):
            content = node.find("w:sdtContent", NS)
            return self.parse_parts(content) if content is not None else []
        if etree.QName(node).namespace == NS["w"] and etree.QName(node).localname in _TRANSPARENT_WRAPPERS:
            return self.parse_parts(node)
        return []

    def _top_level_run(self, run: Run) -> ParPart:
        # 단락 바로 아래의 드로잉/차트는 단락 구성 요소로 올림
        if isinstance(run, InlineDrawing):
            return Drawing(run.path, run.title, run.alt, run.data, run.extent)
        if isinstance(run, InlineChart):
            return Chart()
        return PlainRun(run)

    def _change_info(self, node: etree._Element):
        return w_attr(node, "id", ""), w_attr(node, "author", ""), w_attr(node, "date", "")

    def _change_runs(self, node: etree._Element) -> List[Run]:
        runs: List[Run] = []
        for child in node:
            if is_tag(child, "w", "r"):
                runs.extend(self.run_reader.parse(child))
            elif is_tag(child, "w", "hyperlink"):
                # 변경 안의 하이퍼링크는 텍스트만 유지
                runs.extend(self.run_reader.parse_all(child))
        return runs

    def _comment_start(self, comment_id: str) -> List[ParPart]:
        comment = self.note_reader.comment(comment_id) if self.note_reader is not None else None
        if comment is None:
            self.warn(f"Docx comment {comment_id} not found")
            return []
        author, date, body = comment
        return [CommentStart(comment_id, author, date, body)]

    def _hyperlink(self, node: etree._Element) -> ParPart:
        runs = self.run_reader.parse_all(node)
        rel_id = node.get(qname("r", "id"))
        if rel_id:
            rel = self.package.relationship(rel_id)
            if rel is None:
                self.warn(f"Docx hyperlink relationship {rel_id} not found")
                return ExternalHyperLink("", runs)
            anchor = w_attr(node, "anchor")
            target = rel.target + ("#" + anchor if anchor else "")
            return ExternalHyperLink(target, runs)
        anchor = w_attr(node, "anchor")
        if anchor:
            return InternalHyperLink(anchor, runs)
        return ExternalHyperLink("", runs)
