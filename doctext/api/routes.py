from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from doctext.ocr.base_ocr import OCREngine
from doctext.ocr.factory import get_ocr_engine
from doctext.pipeline.pipeline import DocumentProcessor, UploadedFile
from doctext.schemas import ErrorResponse, StatusResponse, TextResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", response_model=StatusResponse)
async def health() -> StatusResponse:
    return StatusResponse(status="ok")


@router.post(
    "/api/v1/documents/upload",
    response_model=TextResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_document(
    file: UploadFile | None = File(None),
    ocr_engine: OCREngine = Depends(get_ocr_engine),
):
    upload = None
    if file is not None:
        upload = UploadedFile(
            content=await file.read(),
            mime_type=file.content_type or "application/octet-stream",
            filename=file.filename,
        )

    result = await DocumentProcessor(ocr_engine).process(upload)

    if not result.ok:
        logger.info(
            "document_upload_rejected",
            extra={"upload_filename": upload.filename if upload else None, "error_kind": result.error_kind.value},
        )
        return JSONResponse(
            status_code=result.error_kind.status_code,
            content=ErrorResponse(error=result.message).model_dump(),
        )

    return TextResponse(text=result.text)
