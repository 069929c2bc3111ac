from __future__ import annotations

from doctext.ocr.base_ocr import OCREngine, OCRSession

MOCK_TEXT = "Sample recognized text\nTexto reconhecido de exemplo"


class MockSession(OCRSession):
    def _start(self) -> None:
        pass

    def _recognize(self, image_bytes: bytes) -> str:
        # Mock OCR for development/testing
        if not image_bytes:
            raise ValueError("empty image payload")
        return MOCK_TEXT

    def _terminate(self) -> None:
        pass


class MockOCREngine(OCREngine):
    name = "mock"

    def create_session(self) -> OCRSession:
        return MockSession("eng+por")
