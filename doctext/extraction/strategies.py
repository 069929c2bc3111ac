"""Text extraction strategies: OCR for images, text layer for PDFs.

Both strategies re-check the classification they were dispatched for and
translate every library error into a ``DocumentProcessingError``.
"""
from __future__ import annotations

import asyncio
import io
import logging

import pdfplumber

from doctext.core.errors import DocumentProcessingError, ErrorKind
from doctext.extraction.classifier import FileClassification
from doctext.ocr.base_ocr import OCREngine

logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"


class ImageExtractor:
    def __init__(self, ocr_engine: OCREngine) -> None:
        self._ocr_engine = ocr_engine

    async def extract(self, data: bytes, classification: FileClassification) -> str:
        if classification.category != "image":
            raise DocumentProcessingError(
                ErrorKind.EXTRACTION_FAILED, "Image processor was chosen but no image was sent."
            )

        async with self._ocr_engine.session() as session:
            try:
                return await session.recognize(data)
            except Exception as exc:
                logger.exception(
                    "image_extraction_failed",
                    extra={"engine": self._ocr_engine.name, "bytes": len(data)},
                )
                raise DocumentProcessingError(ErrorKind.EXTRACTION_FAILED, "Error processing image") from exc


class PdfExtractor:
    async def extract(self, data: bytes, classification: FileClassification) -> str:
        if classification.category != "application" or classification.subtype != "pdf":
            raise DocumentProcessingError(
                ErrorKind.EXTRACTION_FAILED, "PDF processor was chosen but no PDF was sent."
            )

        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, self._extract_text, data)
        except Exception as exc:
            logger.exception("pdf_extraction_failed", extra={"bytes": len(data)})
            raise DocumentProcessingError(ErrorKind.EXTRACTION_FAILED, "Error processing PDF") from exc

    @staticmethod
    def _extract_text(data: bytes) -> str:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]
        logger.info("pdf_text_extracted", extra={"pages": len(pages)})
        return PAGE_SEPARATOR.join(pages)
