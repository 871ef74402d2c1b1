"""DOCX 공통 유틸리티 및 네임스페이스 정의"""

from __future__ import annotations

from typing import Optional

from lxml import etree

from docx2ir.errors import DocxPackageError


# WordprocessingML 네임스페이스
NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "m": "http://schemas.openxmlformats.org/officeDocument/2006/math",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "pic": "http://schemas.openxmlformats.org/drawingml/2006/picture",
    "c": "http://schemas.openxmlformats.org/drawingml/2006/chart",
    "v": "urn:schemas-microsoft-com:vml",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}

# 관계(relationship) 타입 접미사
REL_OFFICE_DOCUMENT = "/officeDocument"
REL_STYLES = "/styles"
REL_NUMBERING = "/numbering"
REL_FOOTNOTES = "/footnotes"
REL_ENDNOTES = "/endnotes"
REL_COMMENTS = "/comments"
REL_HYPERLINK = "/hyperlink"
REL_IMAGE = "/image"

# 외부 엔티티를 해석하지 않는 파서
_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)

# EMU 단위 (914400 EMU = 1 inch)
EMU_PER_INCH = 914400

# on/off 속성에서 거짓으로 해석하는 값
_FALSE_VALUES = {"0", "false", "off", "none"}


def is_tag(elem: etree._Element, prefix: str, local: str) -> bool:
    """XML 요소의 태그 이름 확인"""
    return elem.tag == f"{{{NS[prefix]}}}{local}"


def qname(prefix: str, local: str) -> str:
    """네임스페이스 포함 태그 이름 생성"""
    return f"{{{NS[prefix]}}}{local}"


def w_attr(elem: Optional[etree._Element], local: str, default: Optional[str] = None) -> Optional[str]:
    """w: 네임스페이스 속성 값"""
    if elem is None:
        return default
    return elem.get(qname("w", local), default)


def w_val(parent: Optional[etree._Element], child: str, default: Optional[str] = None) -> Optional[str]:
    """자식 요소 w:<child>의 w:val 값"""
    if parent is None:
        return default
    node = parent.find(f"w:{child}", NS)
    if node is None:
        return default
    return w_attr(node, "val", default)


def on_off(parent: Optional[etree._Element], child: str) -> Optional[bool]:
    """w:b, w:i 같은 토글 속성 해석 (요소가 없으면 None)"""
    if parent is None:
        return None
    node = parent.find(f"w:{child}", NS)
    if node is None:
        return None
    val = w_attr(node, "val")
    if val is None:
        return True
    return val.lower() not in _FALSE_VALUES


def to_int(value: Optional[str], default: Optional[int] = None) -> Optional[int]:
    """속성 문자열을 정수로 변환"""
    if value is None:
        return default
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def guess_media_type(filename: str) -> str:
    """파일 확장자로 미디어 타입 추측"""
    lower = filename.lower()
    if lower.endswith(".jpg") or lower.endswith(".jpeg"):
        return "image/jpeg"
    if lower.endswith(".png"):
        return "image/png"
    if lower.endswith(".gif"):
        return "image/gif"
    if lower.endswith(".bmp"):
        return "image/bmp"
    if lower.endswith(".emf"):
        return "image/x-emf"
    if lower.endswith(".wmf"):
        return "image/x-wmf"
    if lower.endswith(".svg"):
        return "image/svg+xml"
    return "application/octet-stream"


def emu_to_inches(emu: float) -> float:
    """EMU를 인치로 변환"""
    return emu / EMU_PER_INCH


def parse_xml(xml_bytes: bytes) -> etree._Element:
    """XML 파트 파싱 (실패 시 DocxPackageError)"""
    try:
        return etree.fromstring(xml_bytes, _PARSER)
    except etree.XMLSyntaxError as e:
        raise DocxPackageError(f"couldn't parse docx file: {e}") from e
