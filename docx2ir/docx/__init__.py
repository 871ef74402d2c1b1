"""DOCX 디코더 모듈

DOCX(OOXML) 패키지를 구조 모델(DocxDocument)로 읽는다.

구조:
- models.py: 입력 구조 모델 (스타일/런/단락 구성 요소/본문 단위)
- base.py: 네임스페이스 및 XML 유틸리티
- reader.py: 패키지 읽기 및 컴포넌트 리더 조합
- components/: 스타일, 번호 매기기, 수식, 런, 단락, 표, 본문, 각주/메모 리더
"""

from .reader import DocxPackage, DocxReader, Relationship
from .models import DocxDocument

__all__ = [
    "DocxDocument",
    "DocxPackage",
    "DocxReader",
    "Relationship",
]
