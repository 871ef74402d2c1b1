"""텍스트 런 컴포넌트 모듈"""

from .reader import RunReader

__all__ = ["RunReader"]
