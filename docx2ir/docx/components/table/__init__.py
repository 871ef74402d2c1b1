"""표 컴포넌트 모듈"""

from .reader import TableReader

__all__ = ["TableReader"]
