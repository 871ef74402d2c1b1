"""본문 컴포넌트 모듈"""

from .reader import BodyReader

__all__ = ["BodyReader"]
