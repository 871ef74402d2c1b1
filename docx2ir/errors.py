"""변환 오류 정의"""


class ConversionError(Exception):
    """변환 중단 오류 (부분 결과 없음)"""
    pass


class DocxPackageError(ConversionError):
    """DOCX 컨테이너/XML 해석 실패"""
    pass


class StyleChainError(ConversionError):
    """문자 스타일 상속 체인이 순환함"""
    pass
