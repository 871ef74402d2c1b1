"""단락 컴포넌트 모듈

단락 속성, 변경 추적, 메모 범위, 북마크, 하이퍼링크, 인라인 수식 처리
"""

from .reader import ParagraphReader

__all__ = ["ParagraphReader"]
