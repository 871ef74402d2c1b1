"""번호 매기기 컴포넌트 모듈"""

from .reader import NumberingReader

__all__ = ["NumberingReader"]
