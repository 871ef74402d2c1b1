"""DOCX Reader

DOCX 파일을 읽어서 DocxDocument 모델로 변환하는 메인 리더.
각 컴포넌트 리더들을 조합하여 사용합니다.
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree

from docx2ir.docx.base import (
    NS,
    REL_COMMENTS,
    REL_ENDNOTES,
    REL_FOOTNOTES,
    REL_NUMBERING,
    REL_OFFICE_DOCUMENT,
    REL_STYLES,
    parse_xml,
)
from docx2ir.docx.components import (
    BodyReader,
    MathReader,
    NoteReader,
    NumberingReader,
    ParagraphReader,
    RunReader,
    StyleReader,
)
from docx2ir.docx.models import DocxDocument
from docx2ir.errors import DocxPackageError

logger = logging.getLogger(__name__)

DEFAULT_MAIN_PART = "word/document.xml"

DocxSource = Union[str, Path, bytes]


@dataclass(frozen=True)
class Relationship:
    """패키지 관계 항목"""
    id: str
    type: str
    target: str  # 패키지 내부 경로 (외부 관계는 원래 URL)
    external: bool = False


@dataclass(frozen=True)
class DocxPackage:
    """DOCX 패키지 구조"""
    main_part: str
    document_xml: bytes
    relationships: Dict[str, Relationship]
    parts: Dict[str, bytes] = field(default_factory=dict)

    @property
    def base_dir(self) -> str:
        return posixpath.dirname(self.main_part)

    def relationship(self, rel_id: str) -> Optional[Relationship]:
        return self.relationships.get(rel_id)

    def related_part(self, rel_suffix: str) -> Optional[bytes]:
        """관계 타입(접미사)으로 연결된 파트 내용"""
        for rel in self.relationships.values():
            if rel.type.endswith(rel_suffix) and not rel.external:
                return self.parts.get(rel.target)
        return None

    def media_path(self, rel: Relationship) -> str:
        """미디어 경로 (본문 파트 기준 상대 경로)"""
        prefix = self.base_dir + "/" if self.base_dir else ""
        if prefix and rel.target.startswith(prefix):
            return rel.target[len(prefix):]
        return rel.target


def _resolve_target(base_dir: str, target: str) -> str:
    if target.startswith("/"):
        return target.lstrip("/")
    return posixpath.normpath(posixpath.join(base_dir, target))


def _rels_path(part: str) -> str:
    directory, name = posixpath.split(part)
    return posixpath.join(directory, "_rels", name + ".rels")


def _parse_relationships(xml_bytes: Optional[bytes], base_dir: str) -> Dict[str, Relationship]:
    if xml_bytes is None:
        return {}
    root = parse_xml(xml_bytes)
    relationships: Dict[str, Relationship] = {}
    for rel in root.findall("rel:Relationship", NS):
        rel_id = rel.get("Id", "")
        external = rel.get("TargetMode") == "External"
        target = rel.get("Target", "")
        relationships[rel_id] = Relationship(
            id=rel_id,
            type=rel.get("Type", ""),
            target=target if external else _resolve_target(base_dir, target),
            external=external,
        )
    return relationships


class DocxReader:
    """DOCX 파일을 DocxDocument로 변환하는 리더"""

    def __init__(self):
        self.package: Optional[DocxPackage] = None
        self.warnings: List[str] = []

        # 컴포넌트 리더들 (lazy init)
        self._style_reader: Optional[StyleReader] = None
        self._numbering_reader: Optional[NumberingReader] = None
        self._math_reader: Optional[MathReader] = None
        self._run_reader: Optional[RunReader] = None
        self._paragraph_reader: Optional[ParagraphReader] = None
        self._body_reader: Optional[BodyReader] = None
        self._note_reader: Optional[NoteReader] = None

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _related_tree(self, rel_suffix: str) -> Optional[etree._Element]:
        xml_bytes = self.package.related_part(rel_suffix)
        return parse_xml(xml_bytes) if xml_bytes is not None else None

    def _init_readers(self):
        """컴포넌트 리더들 초기화"""
        self._style_reader = StyleReader(self._related_tree(REL_STYLES))
        self._numbering_reader = NumberingReader(self._related_tree(REL_NUMBERING))
        self._math_reader = MathReader()
        self._run_reader = RunReader(self.package, self._style_reader, self._warn)
        self._paragraph_reader = ParagraphReader(
            self.package,
            self._run_reader,
            self._style_reader,
            self._numbering_reader,
            self._math_reader,
            self._warn,
        )
        self._body_reader = BodyReader(self._paragraph_reader)
        self._note_reader = NoteReader(
            self._related_tree(REL_FOOTNOTES),
            self._related_tree(REL_ENDNOTES),
            self._related_tree(REL_COMMENTS),
            self._body_reader,
        )
        # 각주/메모 참조 해석용
        self._run_reader.note_reader = self._note_reader
        self._paragraph_reader.note_reader = self._note_reader

    def read_package(self, source: DocxSource) -> DocxPackage:
        """DOCX 파일에서 패키지 정보 읽기"""
        try:
            if isinstance(source, (bytes, bytearray)):
                zf = zipfile.ZipFile(io.BytesIO(source), "r")
            else:
                zf = zipfile.ZipFile(source, "r")
            with zf:
                parts = {name: zf.read(name) for name in zf.namelist() if not name.endswith("/")}
        except (zipfile.BadZipFile, zlib.error, OSError) as e:
            raise DocxPackageError(f"couldn't parse docx file: {e}") from e

        # 본문 파트 찾기
        main_part = DEFAULT_MAIN_PART
        package_rels = _parse_relationships(parts.get("_rels/.rels"), "")
        for rel in package_rels.values():
            if rel.type.endswith(REL_OFFICE_DOCUMENT) and not rel.external:
                main_part = rel.target
                break

        if main_part not in parts:
            raise DocxPackageError(f"couldn't parse docx file: missing main part {main_part}")

        relationships = _parse_relationships(
            parts.get(_rels_path(main_part)),
            posixpath.dirname(main_part),
        )
        return DocxPackage(
            main_part=main_part,
            document_xml=parts[main_part],
            relationships=relationships,
            parts=parts,
        )

    def read(self, source: DocxSource) -> Tuple[DocxDocument, List[str]]:
        """DOCX 파일을 (DocxDocument, 파서 경고)로 변환"""
        self.warnings = []
        self.package = self.read_package(source)
        self._init_readers()

        root = parse_xml(self.package.document_xml)
        body = root.find("w:body", NS)
        if body is None:
            raise DocxPackageError("couldn't parse docx file: document has no body")

        body_parts = self._body_reader.parse(body)
        logger.debug("Decoded %d body parts from %s", len(body_parts), self.package.main_part)
        return DocxDocument(body=body_parts), list(self.warnings)
