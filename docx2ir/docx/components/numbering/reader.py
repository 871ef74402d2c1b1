"""번호 매기기 Reader - numbering.xml 파싱"""

from __future__ import annotations

from typing import Dict, Optional

from lxml import etree

from docx2ir.docx.base import NS, to_int, w_attr, w_val
from docx2ir.docx.models import LevelInfo


class NumberingReader:
    """numId/ilvl → LevelInfo"""

    def __init__(self, numbering_tree: Optional[etree._Element] = None):
        self.numbering_tree = numbering_tree
        self._abstract_nums: Dict[str, etree._Element] = {}
        self._nums: Dict[str, etree._Element] = {}
        self._index()

    def _index(self):
        if self.numbering_tree is None:
            return
        for abstract in self.numbering_tree.findall("w:abstractNum", NS):
            self._abstract_nums[w_attr(abstract, "abstractNumId", "")] = abstract
        for num in self.numbering_tree.findall("w:num", NS):
            self._nums[w_attr(num, "numId", "")] = num

    def _find_level(self, parent: Optional[etree._Element], ilvl: str) -> Optional[etree._Element]:
        if parent is None:
            return None
        for lvl in parent.findall("w:lvl", NS):
            if w_attr(lvl, "ilvl") == ilvl:
                return lvl
        return None

    def level_info(self, num_id: str, ilvl: str) -> Optional[LevelInfo]:
        """번호 정의에서 레벨 정보 조회 (없으면 None)"""
        num = self._nums.get(num_id)
        if num is None:
            return None

        override = None
        for lvl_override in num.findall("w:lvlOverride", NS):
            if w_attr(lvl_override, "ilvl") == ilvl:
                override = lvl_override
                break

        # lvlOverride 안의 w:lvl이 추상 정의보다 우선
        lvl = self._find_level(override, ilvl)
        if lvl is None:
            abstract = self._abstract_nums.get(w_val(num, "abstractNumId", ""))
            lvl = self._find_level(abstract, ilvl)
        if lvl is None:
            return None

        start = to_int(w_val(lvl, "start"))
        start_override = to_int(w_val(override, "startOverride"))
        if start_override is not None:
            start = start_override

        return LevelInfo(
            level=ilvl,
            format=w_val(lvl, "numFmt", "decimal"),
            text=w_val(lvl, "lvlText", ""),
            start=start,
        )
