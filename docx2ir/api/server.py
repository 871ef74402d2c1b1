"""IR 변환 API 서버"""

import logging
import os
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile

from docx2ir.core import Docx2Ir
from docx2ir.convert.context import TrackChanges
from docx2ir.errors import ConversionError
from docx2ir.ir.writer import IrJsonWriter

logger = logging.getLogger(__name__)

app = FastAPI(
    title="docx2ir API",
    description="DOCX를 IR(JSON)로 변환하는 API",
    version="0.1.0",
)


@app.post("/v1/convert")
async def convert_docx(
    file: UploadFile = File(...),
    track_changes: Optional[TrackChanges] = Query(None),
) -> dict:
    """
    DOCX를 IR로 변환

    - **file**: DOCX 파일
    - **track_changes**: accept | reject | all (기본: 서버 설정)

    Returns:
        {
          "meta": {...},
          "blocks": [...],
          "warnings": [...]
        }
    """
    if not file.filename or not file.filename.lower().endswith(".docx"):
        raise HTTPException(status_code=400, detail="DOCX file required")

    docx_bytes = await file.read()

    try:
        converter = Docx2Ir(track_changes=track_changes)
        result = converter.convert_bytes(docx_bytes)
    except ConversionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Conversion failed for %s", file.filename)
        raise HTTPException(status_code=500, detail=f"Conversion failed: {str(e)}")

    return IrJsonWriter().to_dict(result.document, result.warnings)


@app.get("/health")
async def health_check() -> dict:
    """헬스 체크"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
