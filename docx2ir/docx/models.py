from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple, Union


# ============================================================
# 공통 타입 정의
# ============================================================

VertAlign = Literal["baseline", "superscript", "subscript"]

# (cx, cy) EMU 단위 (914400 EMU = 1 inch)
Extent = Optional[Tuple[float, float]]


# ============================================================
# 스타일
# ============================================================

@dataclass(frozen=True)
class RunStyle:
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    small_caps: Optional[bool] = None
    strike: Optional[bool] = None
    vert_align: Optional[VertAlign] = None
    underline: Optional[str] = None  # "single", "double", "none", ...
    # (문자 스타일 ID, 해당 스타일의 RunStyle) - basedOn 체인을 따라 이어짐
    style: Optional[Tuple[str, "RunStyle"]] = None


@dataclass(frozen=True)
class ParIndentation:
    left: Optional[int] = None  # twips
    right: Optional[int] = None
    hanging: Optional[int] = None


@dataclass(frozen=True)
class ParagraphStyle:
    styles: List[str] = field(default_factory=list)  # 구체적인 것부터
    heading: Optional[Tuple[str, int]] = None  # (스타일 ID, 레벨)
    block_quote: Optional[bool] = None
    indentation: Optional[ParIndentation] = None
    drop_cap: bool = False


# ============================================================
# 런 요소
# ============================================================

@dataclass(frozen=True)
class TextElem:
    text: str


@dataclass(frozen=True)
class BreakElem:
    pass


@dataclass(frozen=True)
class TabElem:
    pass


@dataclass(frozen=True)
class SoftHyphenElem:
    pass


@dataclass(frozen=True)
class NoBreakHyphenElem:
    pass


RunElem = Union[TextElem, BreakElem, TabElem, SoftHyphenElem, NoBreakHyphenElem]


# ============================================================
# 런
# ============================================================

@dataclass(frozen=True)
class TextRun:
    style: RunStyle = field(default_factory=RunStyle)
    elems: List[RunElem] = field(default_factory=list)


@dataclass(frozen=True)
class Footnote:
    body: List["BodyPart"] = field(default_factory=list)


@dataclass(frozen=True)
class Endnote:
    body: List["BodyPart"] = field(default_factory=list)


@dataclass(frozen=True)
class InlineDrawing:
    path: str
    title: str = ""
    alt: str = ""
    data: bytes = b""
    extent: Extent = None


@dataclass(frozen=True)
class InlineChart:
    pass


Run = Union[TextRun, Footnote, Endnote, InlineDrawing, InlineChart]


# ============================================================
# 단락 구성 요소
# ============================================================

@dataclass(frozen=True)
class PlainRun:
    run: Run


@dataclass(frozen=True)
class Insertion:
    change_id: str
    author: str
    date: str
    runs: List[Run] = field(default_factory=list)


@dataclass(frozen=True)
class Deletion:
    change_id: str
    author: str
    date: str
    runs: List[Run] = field(default_factory=list)


@dataclass(frozen=True)
class CommentStart:
    comment_id: str
    author: str
    date: str
    body: List["BodyPart"] = field(default_factory=list)


@dataclass(frozen=True)
class CommentEnd:
    comment_id: str


@dataclass(frozen=True)
class BookMark:
    bookmark_id: str
    anchor: str


@dataclass(frozen=True)
class Drawing:
    path: str
    title: str = ""
    alt: str = ""
    data: bytes = b""
    extent: Extent = None


@dataclass(frozen=True)
class Chart:
    pass


@dataclass(frozen=True)
class InternalHyperLink:
    anchor: str
    runs: List[Run] = field(default_factory=list)


@dataclass(frozen=True)
class ExternalHyperLink:
    target: str
    runs: List[Run] = field(default_factory=list)


@dataclass(frozen=True)
class PlainOMath:
    tex: str


@dataclass(frozen=True)
class SmartTag:
    runs: List[Run] = field(default_factory=list)


ParPart = Union[
    PlainRun,
    Insertion,
    Deletion,
    CommentStart,
    CommentEnd,
    BookMark,
    Drawing,
    Chart,
    InternalHyperLink,
    ExternalHyperLink,
    PlainOMath,
    SmartTag,
]


# ============================================================
# 본문 단위 (단락/목록 항목/표/수식 블록)
# ============================================================

@dataclass(frozen=True)
class LevelInfo:
    level: str
    format: str  # numFmt (예: "decimal", "bullet")
    text: str  # lvlText (예: "%1.")
    start: Optional[int] = None


@dataclass(frozen=True)
class Paragraph:
    style: ParagraphStyle = field(default_factory=ParagraphStyle)
    parts: List[ParPart] = field(default_factory=list)


@dataclass(frozen=True)
class ListItem:
    style: ParagraphStyle = field(default_factory=ParagraphStyle)
    num_id: str = ""
    level: str = "0"
    level_info: Optional[LevelInfo] = None
    parts: List[ParPart] = field(default_factory=list)


@dataclass(frozen=True)
class Cell:
    body: List["BodyPart"] = field(default_factory=list)


@dataclass(frozen=True)
class Row:
    cells: List[Cell] = field(default_factory=list)


@dataclass(frozen=True)
class TableLook:
    first_row: bool = False


@dataclass(frozen=True)
class Table:
    caption: str = ""
    grid: List[int] = field(default_factory=list)  # gridCol 너비 (twips)
    look: TableLook = field(default_factory=TableLook)
    rows: List[Row] = field(default_factory=list)


@dataclass(frozen=True)
class OMathPara:
    tex: str


BodyPart = Union[Paragraph, ListItem, Table, OMathPara]


@dataclass(frozen=True)
class DocxDocument:
    body: List[BodyPart] = field(default_factory=list)
