"""스타일 Reader - styles.xml 파싱"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from lxml import etree

from docx2ir.docx.base import NS, on_off, w_attr, w_val
from docx2ir.docx.models import RunStyle
from docx2ir.errors import StyleChainError

_HEADING_NAME_RE = re.compile(r"^heading (\d)$", re.IGNORECASE)
_HEADING_ID_RE = re.compile(r"^Heading(\d)$")

# 인용 블록으로 보는 단락 스타일 이름
BLOCK_QUOTE_STYLE_NAMES = {"quote", "block text", "blockquote", "intense quote"}

_VERT_ALIGNS = {"superscript", "subscript", "baseline"}


class StyleReader:
    """문자/단락 스타일 파싱

    문자 스타일은 basedOn 체인을 따라 RunStyle 체인으로 만들고,
    단락 스타일에서는 헤더 레벨과 인용 블록 여부를 상속 포함하여 구한다.
    """

    def __init__(self, styles_tree: Optional[etree._Element] = None):
        self.styles_tree = styles_tree
        self._styles: Dict[Tuple[str, str], etree._Element] = {}
        self._char_cache: Dict[str, Tuple[str, RunStyle]] = {}
        self._index_styles()

    def _index_styles(self):
        if self.styles_tree is None:
            return
        for style in self.styles_tree.findall("w:style", NS):
            style_type = w_attr(style, "type", "paragraph")
            style_id = w_attr(style, "styleId")
            if style_id:
                self._styles[(style_type, style_id)] = style

    # ============================================================
    # 문자 스타일
    # ============================================================

    def parse_run_properties(
        self,
        rpr: Optional[etree._Element],
        style: Optional[Tuple[str, RunStyle]] = None,
    ) -> RunStyle:
        """w:rPr → RunStyle"""
        vert_align = w_val(rpr, "vertAlign")
        return RunStyle(
            bold=on_off(rpr, "b"),
            italic=on_off(rpr, "i"),
            small_caps=on_off(rpr, "smallCaps"),
            strike=on_off(rpr, "strike"),
            vert_align=vert_align if vert_align in _VERT_ALIGNS else None,
            underline=w_val(rpr, "u"),
            style=style,
        )

    def run_style(self, rpr: Optional[etree._Element]) -> RunStyle:
        """런의 w:rPr → RunStyle (w:rStyle 체인 포함)"""
        style_id = w_val(rpr, "rStyle")
        style = self.char_style(style_id) if style_id else None
        return self.parse_run_properties(rpr, style)

    def char_style(self, style_id: str) -> Optional[Tuple[str, RunStyle]]:
        """문자 스타일 ID → (ID, RunStyle) 체인"""
        return self._char_style(style_id, [])

    def _char_style(self, style_id: str, chain: List[str]) -> Optional[Tuple[str, RunStyle]]:
        if style_id in self._char_cache:
            return self._char_cache[style_id]
        elem = self._styles.get(("character", style_id))
        if elem is None:
            return None
        if style_id in chain:
            raise StyleChainError(f"Cyclic character style chain: {' -> '.join(chain + [style_id])}")

        based_on = w_val(elem, "basedOn")
        parent = self._char_style(based_on, chain + [style_id]) if based_on else None
        result = (style_id, self.parse_run_properties(elem.find("w:rPr", NS), parent))
        self._char_cache[style_id] = result
        return result

    # ============================================================
    # 단락 스타일
    # ============================================================

    def _paragraph_chain(self, style_id: str) -> List[etree._Element]:
        """단락 스타일과 그 상위 스타일들 (구체적인 것부터)"""
        chain: List[etree._Element] = []
        seen: List[str] = []
        current: Optional[str] = style_id
        while current:
            elem = self._styles.get(("paragraph", current))
            if elem is None:
                break
            if current in seen:
                raise StyleChainError(f"Cyclic paragraph style chain: {' -> '.join(seen + [current])}")
            seen.append(current)
            chain.append(elem)
            current = w_val(elem, "basedOn")
        return chain

    def heading_level(self, style_id: str) -> Optional[int]:
        """헤더 레벨 (스타일 이름 "heading N" 또는 ID "HeadingN", 상속)"""
        match = _HEADING_ID_RE.match(style_id)
        if match:
            return int(match.group(1))
        for elem in self._paragraph_chain(style_id):
            name = w_val(elem, "name", "")
            match = _HEADING_NAME_RE.match(name) or _HEADING_ID_RE.match(w_attr(elem, "styleId", ""))
            if match:
                return int(match.group(1))
        return None

    def is_block_quote(self, style_id: str) -> Optional[bool]:
        """인용 블록 스타일 여부 (상속, 판단 불가면 None)"""
        for elem in self._paragraph_chain(style_id):
            name = (w_val(elem, "name", "") or "").lower()
            if name in BLOCK_QUOTE_STYLE_NAMES:
                return True
        return None
