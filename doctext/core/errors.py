"""Closed error taxonomy for document processing.

Every failure that can leave the pipeline is one of the four ``ErrorKind``
members. Extraction strategies translate library exceptions into a
``DocumentProcessingError`` before they can reach the HTTP boundary.
"""
from __future__ import annotations

from enum import Enum

MISSING_INPUT_MESSAGE = "No document uploaded"


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    UNSUPPORTED_TYPE = "unsupported_type"
    ENGINE_INIT_FAILED = "engine_init_failed"
    EXTRACTION_FAILED = "extraction_failed"

    @property
    def status_code(self) -> int:
        if self is ErrorKind.MISSING_INPUT:
            return 400
        return 500


class DocumentProcessingError(Exception):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"DocumentProcessingError(kind={self.kind.value!r}, message={self.message!r})"
