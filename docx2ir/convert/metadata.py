"""문서 앞부분 메타데이터 단락 추출"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from docx2ir.convert.inlines import InlineConverter
from docx2ir.docx.models import BodyPart, Paragraph, PlainRun, TextElem, TextRun
from docx2ir.ir.base import trim_spaces
from docx2ir.ir.models import (
    IrMetaBlocks,
    IrMetaInlines,
    IrMetaList,
    IrMetaValue,
    IrPara,
)

# 단락 스타일 → 메타데이터 필드
META_STYLES: Dict[str, str] = {
    "Title": "title",
    "Subtitle": "subtitle",
    "Author": "author",
    "Date": "date",
    "Abstract": "abstract",
}


def meta_field(body_part: BodyPart) -> Optional[str]:
    """메타데이터 단락이면 필드 이름, 아니면 None"""
    if not isinstance(body_part, Paragraph):
        return None
    for style in body_part.style.styles:
        if style in META_STYLES:
            return META_STYLES[style]
    return None


def is_empty_par(body_part: BodyPart) -> bool:
    """공백 텍스트만 담은 단락인지"""
    if not isinstance(body_part, Paragraph):
        return False
    for part in body_part.parts:
        if not isinstance(part, PlainRun) or not isinstance(part.run, TextRun):
            return False
        for elem in part.run.elems:
            if isinstance(elem, TextElem) and elem.text.strip():
                return False
    return True


def sep_body_parts(body: List[BodyPart]) -> Tuple[List[BodyPart], List[BodyPart]]:
    """앞쪽의 메타데이터/빈 단락과 나머지 본문으로 분리"""
    index = 0
    while index < len(body) and (meta_field(body[index]) is not None or is_empty_par(body[index])):
        index += 1
    return body[:index], body[index:]


def combine_meta_values(existing: IrMetaValue, value: IrMetaInlines) -> IrMetaValue:
    """같은 필드의 값 결합: 1개 → 인라인, 2개 → 단락 쌍, 3개 이상 → 목록"""
    if isinstance(existing, IrMetaInlines):
        return IrMetaBlocks([IrPara(existing.inlines), IrPara(value.inlines)])
    if isinstance(existing, IrMetaBlocks):
        values: List[IrMetaValue] = [
            IrMetaInlines(b.inlines if isinstance(b, IrPara) else []) for b in existing.blocks
        ]
        return IrMetaList(values + [value])
    if isinstance(existing, IrMetaList):
        return IrMetaList(list(existing.values) + [value])
    return IrMetaList([existing, value])


def fix_authors(value: IrMetaValue) -> IrMetaValue:
    """author 단락 묶음을 평평한 인라인 목록으로"""
    if isinstance(value, IrMetaBlocks):
        return IrMetaList([
            IrMetaInlines(b.inlines if isinstance(b, IrPara) else []) for b in value.blocks
        ])
    return value


class MetadataExtractor:
    """메타데이터 단락 → 필드 매핑"""

    def __init__(self, inline_converter: InlineConverter):
        self.inline_converter = inline_converter

    def extract(self, body_parts: List[BodyPart]) -> Dict[str, IrMetaValue]:
        meta: Dict[str, IrMetaValue] = {}
        for body_part in body_parts:
            name = meta_field(body_part)
            if name is None:
                continue
            inlines = trim_spaces(self.inline_converter.par_parts_to_inlines(body_part.parts))
            value = IrMetaInlines(inlines)
            meta[name] = combine_meta_values(meta[name], value) if name in meta else value

        if "author" in meta:
            meta["author"] = fix_authors(meta["author"])
        return meta
