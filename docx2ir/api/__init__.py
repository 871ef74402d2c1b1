"""API 서버 모듈"""

from docx2ir.api.server import app

__all__ = ["app"]
