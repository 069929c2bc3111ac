"""Document processing pipeline: classify → select strategy → extract → result.

Each call is an independent, stateless run. Classified failures raised by a
strategy are forwarded untouched as a failed ``ExtractionResult``; anything
else is a programming error and propagates to the HTTP boundary.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from doctext.core.errors import MISSING_INPUT_MESSAGE, DocumentProcessingError, ErrorKind
from doctext.extraction.classifier import ExtractionStrategy, classify, select_strategy
from doctext.extraction.strategies import ImageExtractor, PdfExtractor
from doctext.ocr.base_ocr import OCREngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedFile:
    content: bytes
    mime_type: str
    filename: str | None = None


@dataclass(frozen=True)
class ExtractionResult:
    text: str | None = None
    error_kind: ErrorKind | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error_kind is None):
            raise ValueError("ExtractionResult needs exactly one of text or error_kind")
        if self.text is not None and self.message is not None:
            raise ValueError("successful ExtractionResult cannot carry an error message")

    @classmethod
    def success(cls, text: str) -> ExtractionResult:
        return cls(text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> ExtractionResult:
        return cls(error_kind=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error_kind is None


class DocumentProcessor:
    def __init__(self, ocr_engine: OCREngine) -> None:
        self._extractors = {
            ExtractionStrategy.PDF: PdfExtractor(),
            ExtractionStrategy.IMAGE: ImageExtractor(ocr_engine),
        }

    async def process(self, upload: UploadedFile | None) -> ExtractionResult:
        if upload is None:
            logger.info("document_missing")
            return ExtractionResult.failure(ErrorKind.MISSING_INPUT, MISSING_INPUT_MESSAGE)

        classification = classify(upload.mime_type)
        strategy = select_strategy(classification)
        log_ctx = {
            "mime_type": upload.mime_type,
            "strategy": strategy.value if strategy else None,
            "bytes": len(upload.content),
        }

        if strategy is None:
            logger.info("document_unsupported", extra=log_ctx)
            return ExtractionResult.failure(ErrorKind.UNSUPPORTED_TYPE, "Unsupported file type")

        t0 = time.monotonic()
        try:
            text = await self._extractors[strategy].extract(upload.content, classification)
        except DocumentProcessingError as exc:
            logger.warning(
                "document_failed",
                extra={**log_ctx, "error_kind": exc.kind.value, "duration_ms": _elapsed_ms(t0)},
            )
            return ExtractionResult.failure(exc.kind, exc.message)

        logger.info(
            "document_processed",
            extra={**log_ctx, "chars": len(text), "duration_ms": _elapsed_ms(t0)},
        )
        return ExtractionResult.success(text)


def _elapsed_ms(t0: float) -> int:
    return int((time.monotonic() - t0) * 1000)
