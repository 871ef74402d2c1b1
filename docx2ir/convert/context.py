"""변환 컨텍스트 및 옵션"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterator, List, Literal, Optional

from docx2ir.ir.models import IrInline
from docx2ir.media import MediaBag, MediaStore

logger = logging.getLogger(__name__)

TrackChanges = Literal["accept", "reject", "all"]
TRACK_CHANGES_MODES = ("accept", "reject", "all")


@dataclass(frozen=True)
class ReaderOptions:
    """변환 옵션"""
    track_changes: TrackChanges = "accept"

    def __post_init__(self):
        if self.track_changes not in TRACK_CHANGES_MODES:
            raise ValueError(
                f"Unknown track-changes mode: {self.track_changes!r} "
                f"(expected one of {', '.join(TRACK_CHANGES_MODES)})"
            )

    @classmethod
    def from_env(cls) -> "ReaderOptions":
        """환경 변수 DOCX2IR_TRACK_CHANGES에서 옵션 생성"""
        return cls(track_changes=os.getenv("DOCX2IR_TRACK_CHANGES", "accept").strip().lower())


class ConversionContext:
    """변환 1회 동안 공유되는 상태

    - anchor_map: 북마크/헤더 이름 → 최종 식별자 (추가만 됨)
    - drop_cap: 다음 일반 단락 앞에 붙을 드롭캡 인라인
    - warnings: 치명적이지 않은 경고 (추가만 됨)
    """

    def __init__(self, options: Optional[ReaderOptions] = None, media_store: Optional[MediaStore] = None):
        self.options = options or ReaderOptions()
        self.media_store: MediaStore = media_store if media_store is not None else MediaBag()
        self.anchor_map: Dict[str, str] = {}
        # anchor_map 값별 개수
        self._ident_counts: Dict[str, int] = {}
        self.drop_cap: List[IrInline] = []
        self.warnings: List[str] = []
        self._in_header = False

    @property
    def in_header(self) -> bool:
        return self._in_header

    @contextmanager
    def inside_header(self) -> Iterator[None]:
        """헤더 단락 변환 구간"""
        previous = self._in_header
        self._in_header = True
        try:
            yield
        finally:
            self._in_header = previous

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def used_idents(self) -> AbstractSet[str]:
        """이미 배정된 식별자 집합 (anchor_map의 값)"""
        return self._ident_counts.keys()

    def record_anchor(self, name: str, ident: str) -> None:
        previous = self.anchor_map.get(name)
        if previous is not None:
            self._ident_counts[previous] -= 1
            if not self._ident_counts[previous]:
                del self._ident_counts[previous]
        self.anchor_map[name] = ident
        self._ident_counts[ident] = self._ident_counts.get(ident, 0) + 1

    def store_media(self, path: str, data: bytes) -> None:
        self.media_store.store(path, data)
