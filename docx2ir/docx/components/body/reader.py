"""본문 Reader - w:body, 셀, 각주/메모 본문의 블록 수준 요소 파싱"""

from __future__ import annotations

from typing import List

from lxml import etree

from docx2ir.docx.base import NS, is_tag
from docx2ir.docx.components.paragraph.reader import ParagraphReader
from docx2ir.docx.components.table.reader import TableReader
from docx2ir.docx.models import BodyPart


class BodyReader:
    """블록 수준 요소(단락/표) 파싱"""

    def __init__(self, paragraph_reader: ParagraphReader):
        self.paragraph_reader = paragraph_reader
        self.table_reader = TableReader(self)

    def parse(self, container: etree._Element) -> List[BodyPart]:
        """컨테이너 요소의 자식들을 본문 단위 목록으로 파싱"""
        body_parts: List[BodyPart] = []
        for elem in container:
            if is_tag(elem, "w", "p"):
                body_parts.append(self.paragraph_reader.parse(elem))
            elif is_tag(elem, "w", "tbl"):
                body_parts.append(self.table_reader.parse(elem))
            elif is_tag(elem, "w", "sdt") or is_tag(elem, "w", "customXml"):
                content = elem.find("w:sdtContent", NS)
                body_parts.extend(self.parse(content if content is not None else elem))
        return body_parts
