"""각주/미주/메모 Reader"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, TYPE_CHECKING

from lxml import etree

from docx2ir.docx.base import NS, w_attr
from docx2ir.docx.models import BodyPart

if TYPE_CHECKING:
    from docx2ir.docx.components.body.reader import BodyReader

# 각주 구분선 등 본문이 아닌 항목
_SEPARATOR_TYPES = {"separator", "continuationSeparator", "continuationNotice"}


def _index(tree: Optional[etree._Element], tag: str) -> Dict[str, etree._Element]:
    if tree is None:
        return {}
    items: Dict[str, etree._Element] = {}
    for elem in tree.findall(f"w:{tag}", NS):
        if w_attr(elem, "type") in _SEPARATOR_TYPES:
            continue
        items[w_attr(elem, "id", "")] = elem
    return items


class NoteReader:
    """footnotes.xml, endnotes.xml, comments.xml 파싱

    본문은 참조될 때 파싱한다.
    """

    def __init__(
        self,
        footnotes_tree: Optional[etree._Element],
        endnotes_tree: Optional[etree._Element],
        comments_tree: Optional[etree._Element],
        body_reader: "BodyReader",
    ):
        self.body_reader = body_reader
        self._footnotes = _index(footnotes_tree, "footnote")
        self._endnotes = _index(endnotes_tree, "endnote")
        self._comments = _index(comments_tree, "comment")

    def footnote(self, note_id: str) -> Optional[List[BodyPart]]:
        """각주 본문 (없으면 None)"""
        elem = self._footnotes.get(note_id)
        return self.body_reader.parse(elem) if elem is not None else None

    def endnote(self, note_id: str) -> Optional[List[BodyPart]]:
        """미주 본문 (없으면 None)"""
        elem = self._endnotes.get(note_id)
        return self.body_reader.parse(elem) if elem is not None else None

    def comment(self, comment_id: str) -> Optional[Tuple[str, str, List[BodyPart]]]:
        """메모 (작성자, 일시, 본문)"""
        elem = self._comments.get(comment_id)
        if elem is None:
            return None
        return w_attr(elem, "author", ""), w_attr(elem, "date", ""), self.body_reader.parse(elem)
