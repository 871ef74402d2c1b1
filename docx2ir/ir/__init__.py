"""IR (Intermediate Representation) 모듈

DOCX 구조를 변환한 결과인 형식 중립 문서 모델.

구조:
- models.py: IR 모델 정의 (블록/인라인/메타데이터)
- base.py: 공통 유틸리티 (텍스트 토큰화, 식별자 생성, 트리 순회)
- writer.py: IR → JSON 변환
"""

from .models import (
    # 공통 타입 정의
    Alignment,
    IrAttr,
    IrInline,
    IrBlock,
    IrMetaValue,
    # 인라인 요소
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
    # 블록 요소
    IrPlain,
    IrPara,
    IrHeader,
    IrBlockQuote,
    IrCodeBlock,
    IrListAttributes,
    IrBulletList,
    IrOrderedList,
    IrDefinitionList,
    IrTable,
    IrDiv,
    # 메타데이터
    IrMetaInlines,
    IrMetaBlocks,
    IrMetaList,
    # 문서
    IrDocument,
)

from .writer import IrJsonWriter

__all__ = [
    # 공통 타입 정의
    "Alignment",
    "IrAttr",
    "IrInline",
    "IrBlock",
    "IrMetaValue",
    # 인라인 요소
    "IrStr",
    "IrSpace",
    "IrSoftBreak",
    "IrLineBreak",
    "IrEmph",
    "IrStrong",
    "IrSmallCaps",
    "IrStrikeout",
    "IrSuperscript",
    "IrSubscript",
    "IrCode",
    "IrMath",
    "IrLink",
    "IrImage",
    "IrNote",
    "IrSpan",
    # 블록 요소
    "IrPlain",
    "IrPara",
    "IrHeader",
    "IrBlockQuote",
    "IrCodeBlock",
    "IrListAttributes",
    "IrBulletList",
    "IrOrderedList",
    "IrDefinitionList",
    "IrTable",
    "IrDiv",
    # 메타데이터
    "IrMetaInlines",
    "IrMetaBlocks",
    "IrMetaList",
    # 문서
    "IrDocument",
    # Writer
    "IrJsonWriter",
]
