"""
Docx2Ir 메인 클래스
"""

import logging
from pathlib import Path
from typing import Optional

from docx2ir.convert.assembler import ConversionResult, DocumentAssembler
from docx2ir.convert.context import ReaderOptions, TrackChanges
from docx2ir.docx.reader import DocxReader, DocxSource
from docx2ir.media import MediaStore

logger = logging.getLogger(__name__)


class Docx2Ir:
    """DOCX를 IR 문서로 변환하는 메인 클래스"""

    def __init__(
        self,
        track_changes: Optional[TrackChanges] = None,
        media_store: Optional[MediaStore] = None,
    ):
        """
        Args:
            track_changes: 변경 추적 처리 ("accept", "reject", "all").
                지정하지 않으면 DOCX2IR_TRACK_CHANGES 환경 변수, 기본값 accept
            media_store: 이미지 저장소 (기본: 변환마다 새 MediaBag)
        """
        if track_changes is None:
            self.options = ReaderOptions.from_env()
        else:
            self.options = ReaderOptions(track_changes=track_changes)
        self.media_store = media_store

    def _convert(self, source: DocxSource) -> ConversionResult:
        docx, parser_warnings = DocxReader().read(source)
        assembler = DocumentAssembler(self.options, self.media_store)
        result = assembler.convert(docx, parser_warnings)
        logger.info(
            "Converted %d blocks (%d warnings, track-changes=%s)",
            len(result.document.blocks),
            len(result.warnings),
            self.options.track_changes,
        )
        return result

    def convert(self, input_path: str | Path) -> ConversionResult:
        """
        DOCX 파일을 IR 문서로 변환

        Args:
            input_path: 입력 DOCX 파일 경로

        Returns:
            변환 결과 (문서, 경고, 미디어)

        Raises:
            ConversionError: 파일을 해석할 수 없거나 스타일 체인이 순환하는 경우
        """
        return self._convert(Path(input_path))

    def convert_bytes(self, docx_bytes: bytes) -> ConversionResult:
        """
        DOCX 바이트를 IR 문서로 변환

        Args:
            docx_bytes: DOCX 파일 바이트

        Returns:
            변환 결과 (문서, 경고, 미디어)
        """
        return self._convert(docx_bytes)
