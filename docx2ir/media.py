"""미디어 저장소

변환 중 만나는 이미지/드로잉 바이트를 경로 기준으로 보관한다.
변환기는 store() 호출 결과를 기다리지 않는다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, Optional, Protocol

from docx2ir.docx.base import guess_media_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaItem:
    """미디어 항목"""
    path: str
    data: bytes
    mime_type: str


class MediaStore(Protocol):
    def store(self, path: str, data: bytes) -> None:
        ...


class MediaBag:
    """메모리 내 미디어 저장소"""

    def __init__(self):
        self._items: Dict[str, MediaItem] = {}

    def store(self, path: str, data: bytes) -> None:
        self._items[path] = MediaItem(path=path, data=data, mime_type=guess_media_type(path))

    def get(self, path: str) -> Optional[MediaItem]:
        return self._items.get(path)

    def __contains__(self, path: str) -> bool:
        return path in self._items

    def __iter__(self) -> Iterator[MediaItem]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)


class DirectoryMediaStore:
    """디렉터리에 미디어 파일을 기록하는 저장소"""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def store(self, path: str, data: bytes) -> None:
        target = (self.root / path).resolve()
        if self.root.resolve() not in target.parents:
            logger.warning("Skipping media outside of %s: %s", self.root, path)
            return
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug("Stored media %s (%d bytes)", target, len(data))
