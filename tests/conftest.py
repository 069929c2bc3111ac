"""Shared pytest configuration and fixtures."""
from __future__ import annotations

import os

# Provide required env vars before any app module is imported
os.environ.setdefault("OCR_PROVIDER", "mock")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from doctext.ocr.base_ocr import OCREngine, OCRSession


def build_pdf(*pages: str) -> bytes:
    """Return a minimal single-font PDF with one line of text per page."""
    page_count = len(pages)
    font_id = 3 + 2 * page_count
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [%s] /Count %d >>"
        % (b" ".join(b"%d 0 R" % (3 + 2 * i) for i in range(page_count)), page_count),
    ]
    for i, text in enumerate(pages):
        stream = b"BT /F1 24 Tf 72 720 Td (%s) Tj ET" % text.encode("latin-1")
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Contents %d 0 R /Resources << /Font << /F1 %d 0 R >> >> >>" % (4 + 2 * i, font_id)
        )
        objects.append(b"<< /Length %d >>\nstream\n%s\nendstream" % (len(stream), stream))
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)

    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


class CountingSession(OCRSession):
    def __init__(self, engine: CountingOCREngine) -> None:
        super().__init__("eng+por")
        self._engine = engine

    def _start(self) -> None:
        if self._engine.fail_start:
            raise RuntimeError("engine unavailable")

    def _recognize(self, image_bytes: bytes) -> str:
        if image_bytes.startswith(b"FAIL"):
            raise RuntimeError("recognition crashed")
        return f"recognized {len(image_bytes)} bytes"

    def _terminate(self) -> None:
        self._engine.released += 1


class CountingOCREngine(OCREngine):
    """Fake engine that records how many sessions were created and released."""

    name = "counting"

    def __init__(self, fail_start: bool = False) -> None:
        self.fail_start = fail_start
        self.created = 0
        self.released = 0
        self.sessions: list[CountingSession] = []

    def create_session(self) -> OCRSession:
        self.created += 1
        session = CountingSession(self)
        self.sessions.append(session)
        return session


@pytest.fixture
def counting_engine() -> CountingOCREngine:
    return CountingOCREngine()


@pytest.fixture
def sample_pdf() -> bytes:
    return build_pdf("Hello World")
