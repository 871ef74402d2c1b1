"""수식 컴포넌트 모듈"""

from .reader import MathReader

__all__ = ["MathReader"]
