from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple, Union


# ============================================================
# 공통 타입 정의
# ============================================================

MathType = Literal["InlineMath", "DisplayMath"]
Alignment = Literal["AlignLeft", "AlignRight", "AlignCenter", "AlignDefault"]
ListNumberStyle = Literal[
    "DefaultStyle", "Example", "Decimal", "LowerRoman", "UpperRoman", "LowerAlpha", "UpperAlpha"
]
ListNumberDelim = Literal["DefaultDelim", "Period", "OneParen", "TwoParens"]


@dataclass(frozen=True)
class IrAttr:
    identifier: str = ""
    classes: List[str] = field(default_factory=list)
    attributes: List[Tuple[str, str]] = field(default_factory=list)


# ============================================================
# 인라인 요소
# ============================================================

@dataclass(frozen=True)
class IrStr:
    text: str


@dataclass(frozen=True)
class IrSpace:
    pass


@dataclass(frozen=True)
class IrSoftBreak:
    pass


@dataclass(frozen=True)
class IrLineBreak:
    pass


@dataclass(frozen=True)
class IrEmph:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrStrong:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrSmallCaps:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrStrikeout:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrSuperscript:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrSubscript:
    inlines: List["IrInline"] = field(default_factory=list)


@dataclass(frozen=True)
class IrCode:
    text: str
    attr: IrAttr = field(default_factory=IrAttr)


@dataclass(frozen=True)
class IrMath:
    math_type: MathType
    text: str


@dataclass(frozen=True)
class IrLink:
    url: str
    inlines: List["IrInline"] = field(default_factory=list)
    title: str = ""
    attr: IrAttr = field(default_factory=IrAttr)


@dataclass(frozen=True)
class IrImage:
    url: str
    inlines: List["IrInline"] = field(default_factory=list)  # 대체 텍스트
    title: str = ""
    attr: IrAttr = field(default_factory=IrAttr)


@dataclass(frozen=True)
class IrNote:
    blocks: List["IrBlock"] = field(default_factory=list)


@dataclass(frozen=True)
class IrSpan:
    attr: IrAttr = field(default_factory=IrAttr)
    inlines: List["IrInline"] = field(default_factory=list)


IrInline = Union[
    IrStr,
    IrSpace,
    IrSoftBreak,
    IrLineBreak,
    IrEmph,
    IrStrong,
    IrSmallCaps,
    IrStrikeout,
    IrSuperscript,
    IrSubscript,
    IrCode,
    IrMath,
    IrLink,
    IrImage,
    IrNote,
    IrSpan,
]

# 같은 종류끼리 병합 가능한 서식 래퍼
FORMATTING_TYPES = (IrEmph, IrStrong, IrSmallCaps, IrStrikeout, IrSuperscript, IrSubscript)


# ============================================================
# 블록 요소
# ============================================================

@dataclass(frozen=True)
class IrPlain:
    inlines: List[IrInline] = field(default_factory=list)


@dataclass(frozen=True)
class IrPara:
    inlines: List[IrInline] = field(default_factory=list)


@dataclass(frozen=True)
class IrHeader:
    level: int
    attr: IrAttr = field(default_factory=IrAttr)
    inlines: List[IrInline] = field(default_factory=list)


@dataclass(frozen=True)
class IrBlockQuote:
    blocks: List["IrBlock"] = field(default_factory=list)


@dataclass(frozen=True)
class IrCodeBlock:
    text: str
    attr: IrAttr = field(default_factory=IrAttr)


@dataclass(frozen=True)
class IrListAttributes:
    start: int = 1
    style: ListNumberStyle = "DefaultStyle"
    delim: ListNumberDelim = "DefaultDelim"


@dataclass(frozen=True)
class IrBulletList:
    items: List[List["IrBlock"]] = field(default_factory=list)


@dataclass(frozen=True)
class IrOrderedList:
    list_attributes: IrListAttributes = field(default_factory=IrListAttributes)
    items: List[List["IrBlock"]] = field(default_factory=list)


@dataclass(frozen=True)
class IrDefinitionList:
    # (용어, [정의 블록들])
    items: List[Tuple[List[IrInline], List[List["IrBlock"]]]] = field(default_factory=list)


@dataclass(frozen=True)
class IrTable:
    caption: List[IrInline] = field(default_factory=list)
    alignments: List[Alignment] = field(default_factory=list)
    widths: List[float] = field(default_factory=list)  # 상대 너비 (0 = 미지정)
    headers: List[List["IrBlock"]] = field(default_factory=list)
    rows: List[List[List["IrBlock"]]] = field(default_factory=list)


@dataclass(frozen=True)
class IrDiv:
    attr: IrAttr = field(default_factory=IrAttr)
    blocks: List["IrBlock"] = field(default_factory=list)


IrBlock = Union[
    IrPlain,
    IrPara,
    IrHeader,
    IrBlockQuote,
    IrCodeBlock,
    IrBulletList,
    IrOrderedList,
    IrDefinitionList,
    IrTable,
    IrDiv,
]


# ============================================================
# 메타데이터
# ============================================================

@dataclass(frozen=True)
class IrMetaInlines:
    inlines: List[IrInline] = field(default_factory=list)


@dataclass(frozen=True)
class IrMetaBlocks:
    blocks: List[IrBlock] = field(default_factory=list)


@dataclass(frozen=True)
class IrMetaList:
    values: List["IrMetaValue"] = field(default_factory=list)


IrMetaValue = Union[IrMetaInlines, IrMetaBlocks, IrMetaList]


# ============================================================
# 문서
# ============================================================

@dataclass(frozen=True)
class IrDocument:
    meta: Dict[str, IrMetaValue] = field(default_factory=dict)
    blocks: List[IrBlock] = field(default_factory=list)


def attr_with(
    identifier: str = "",
    classes: Optional[List[str]] = None,
    attributes: Optional[List[Tuple[str, str]]] = None,
) -> IrAttr:
    """IrAttr 생성 헬퍼"""
    return IrAttr(identifier=identifier, classes=list(classes or []), attributes=list(attributes or []))
