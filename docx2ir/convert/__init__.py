"""변환 파이프라인 모듈

DocxDocument를 IrDocument로 바꾼다.

구조:
- context.py: 변환 옵션과 변환 1회의 공유 상태
- style.py: 스타일 해석 및 서식 래핑 함수 합성
- revision.py: 변경 추적/메모 정책
- anchor.py: 북마크/헤더 식별자 및 내부 링크 재작성
- inlines.py: 런/단락 구성 요소 → 인라인
- classifier.py: 본문 단위 → 블록
- metadata.py: 앞부분 메타데이터 단락 추출
- combine.py, lists.py: 인접 노드 병합, 목록/정의 목록 구조화
- assembler.py: 전체 조립
"""

from .assembler import ConversionResult, DocumentAssembler
from .context import ConversionContext, ReaderOptions, TRACK_CHANGES_MODES

__all__ = [
    "ConversionContext",
    "ConversionResult",
    "DocumentAssembler",
    "ReaderOptions",
    "TRACK_CHANGES_MODES",
]
