"""DOCX 컴포넌트 모듈

각 컴포넌트는 reader.py를 포함합니다.
"""

from .styles import StyleReader
from .numbering import NumberingReader
from .math import MathReader
from .text import RunReader
from .paragraph import ParagraphReader
from .table import TableReader
from .body import BodyReader
from .notes import NoteReader

__all__ = [
    "StyleReader",
    "NumberingReader",
    "MathReader",
    "RunReader",
    "ParagraphReader",
    "TableReader",
    "BodyReader",
    "NoteReader",
]
