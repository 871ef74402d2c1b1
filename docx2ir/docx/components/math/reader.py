"""수식 Reader - OMML → TeX 형식 선형 텍스트"""

from __future__ import annotations

from typing import List, Optional

from lxml import etree

from docx2ir.docx.base import NS, is_tag, qname

NARY_OPERATORS = {
    "∑": "\\sum",
    "∏": "\\prod",
    "∐": "\\coprod",
    "∫": "\\int",
    "∬": "\\iint",
    "∭": "\\iiint",
    "∮": "\\oint",
    "⋃": "\\bigcup",
    "⋂": "\\bigcap",
}

ACCENTS = {
    "̂": "\\hat",
    "̃": "\\tilde",
    "̄": "\\bar",
    "̇": "\\dot",
    "̈": "\\ddot",
    "⃗": "\\vec",
}

FUNCTIONS = {"sin", "cos", "tan", "cot", "sec", "csc", "log", "ln", "exp", "lim", "max", "min", "det"}

# 속성 요소 (출력 없음)
_PROPERTY_TAGS = {
    "rPr", "fPr", "radPr", "dPr", "naryPr", "sSupPr", "sSubPr", "sSubSupPr", "sPrePr",
    "funcPr", "accPr", "barPr", "limLowPr", "limUppPr", "eqArrPr", "mPr", "boxPr",
    "borderBoxPr", "groupChrPr", "phantPr", "ctrlPr", "oMathParaPr",
}


def _chr(elem: etree._Element, prop: str, default: str) -> str:
    node = elem.find(f"m:{prop}/m:chr", NS)
    if node is None:
        return default
    return node.get(qname("m", "val"), default)


def _prop(elem: etree._Element, path: str, default: str) -> str:
    node = elem.find(path, NS)
    if node is None:
        return default
    return node.get(qname("m", "val"), default)


class MathReader:
    """Office Math 파싱"""

    def parse(self, omath: etree._Element) -> str:
        """m:oMath 요소 → 수식 텍스트"""
        return self._children(omath).strip()

    def parse_para(self, omath_para: etree._Element) -> str:
        """m:oMathPara 요소 → 수식 텍스트 (줄 단위 결합)"""
        lines = [self.parse(om) for om in omath_para.findall("m:oMath", NS)]
        return " \\\\ ".join(line for line in lines if line)

    def _children(self, elem: Optional[etree._Element]) -> str:
        if elem is None:
            return ""
        return "".join(self._node(child) for child in elem)

    def _arg(self, elem: etree._Element, local: str) -> str:
        return self._children(elem.find(f"m:{local}", NS))

    def _node(self, node: etree._Element) -> str:
        if not isinstance(node.tag, str):
            return ""
        local = etree.QName(node).localname

        if local in _PROPERTY_TAGS:
            return ""
        if is_tag(node, "m", "r") or is_tag(node, "w", "r"):
            return "".join(t.text or "" for t in node if is_tag(t, "m", "t") or is_tag(t, "w", "t"))
        if is_tag(node, "m", "f"):
            return f"\\frac{{{self._arg(node, 'num')}}}{{{self._arg(node, 'den')}}}"
        if is_tag(node, "m", "sSup"):
            return f"{{{self._arg(node, 'e')}}}^{{{self._arg(node, 'sup')}}}"
        if is_tag(node, "m", "sSub"):
            return f"{{{self._arg(node, 'e')}}}_{{{self._arg(node, 'sub')}}}"
        if is_tag(node, "m", "sSubSup"):
            return f"{{{self._arg(node, 'e')}}}_{{{self._arg(node, 'sub')}}}^{{{self._arg(node, 'sup')}}}"
        if is_tag(node, "m", "sPre"):
            return f"{{}}_{{{self._arg(node, 'sub')}}}^{{{self._arg(node, 'sup')}}}{{{self._arg(node, 'e')}}}"
        if is_tag(node, "m", "rad"):
            degree = self._arg(node, "deg")
            if degree:
                return f"\\sqrt[{degree}]{{{self._arg(node, 'e')}}}"
            return f"\\sqrt{{{self._arg(node, 'e')}}}"
        if is_tag(node, "m", "d"):
            return self._delimiter(node)
        if is_tag(node, "m", "nary"):
            return self._nary(node)
        if is_tag(node, "m", "func"):
            name = self._arg(node, "fName").strip()
            if name in FUNCTIONS:
                name = "\\" + name
            return f"{name}{{{self._arg(node, 'e')}}}"
        if is_tag(node, "m", "acc"):
            command = ACCENTS.get(_chr(node, "accPr", "̂"), "\\hat")
            return f"{command}{{{self._arg(node, 'e')}}}"
        if is_tag(node, "m", "bar"):
            command = "\\underline" if _prop(node, "m:barPr/m:pos", "top") == "bot" else "\\overline"
            return f"{command}{{{self._arg(node, 'e')}}}"
        if is_tag(node, "m", "limLow"):
            return f"{{{self._arg(node, 'e')}}}_{{{self._arg(node, 'lim')}}}"
        if is_tag(node, "m", "limUpp"):
            return f"{{{self._arg(node, 'e')}}}^{{{self._arg(node, 'lim')}}}"
        if is_tag(node, "m", "eqArr"):
            rows = [self._children(e) for e in node.findall("m:e", NS)]
            return "\\begin{array}{l} " + " \\\\ ".join(rows) + " \\end{array}"
        if is_tag(node, "m", "m"):
            return self._matrix(node)
        return self._children(node)

    def _delimiter(self, node: etree._Element) -> str:
        begin = _prop(node, "m:dPr/m:begChr", "(")
        end = _prop(node, "m:dPr/m:endChr", ")")
        separator = _prop(node, "m:dPr/m:sepChr", "|")
        items = [self._children(e) for e in node.findall("m:e", NS)]
        return begin + separator.join(items) + end

    def _nary(self, node: etree._Element) -> str:
        symbol = _chr(node, "naryPr", "∫")
        result = NARY_OPERATORS.get(symbol, symbol)
        lower = self._arg(node, "sub")
        upper = self._arg(node, "sup")
        if lower:
            result += f"_{{{lower}}}"
        if upper:
            result += f"^{{{upper}}}"
        return f"{result}{{{self._arg(node, 'e')}}}"

    def _matrix(self, node: etree._Element) -> str:
        rows: List[str] = []
        for row in node.findall("m:mr", NS):
            rows.append(" & ".join(self._children(e) for e in row.findall("m:e", NS)))
        return "\\begin{matrix} " + " \\\\ ".join(rows) + " \\end{matrix}"
