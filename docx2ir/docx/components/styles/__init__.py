"""스타일 컴포넌트 모듈

styles.xml 문자/단락 스타일 처리
"""

from .reader import StyleReader

__all__ = ["StyleReader"]
