"""각주/미주/메모 컴포넌트 모듈"""

from .reader import NoteReader

__all__ = ["NoteReader"]
