"""
docx2ir - DOCX를 형식 중립 IR 문서로 변환하는 라이브러리
"""

from docx2ir.core import Docx2Ir
from docx2ir.convert.assembler import ConversionResult
from docx2ir.errors import ConversionError

__version__ = "0.1.0"
__all__ = ["Docx2Ir", "ConversionResult", "ConversionError"]
