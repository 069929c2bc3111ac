from __future__ import annotations

from functools import lru_cache

from doctext.core.config import Settings, settings
from doctext.ocr.base_ocr import OCREngine
from doctext.ocr.mock_ocr import MockOCREngine


def build_ocr_engine(config: Settings) -> OCREngine:
    """Return the OCR engine selected by *config*.

    OCR_PROVIDER options:
        tesseract — TesseractOCREngine (pip install pytesseract + tesseract binary)
        paddleocr — PaddleOCREngine (pip install paddlepaddle paddleocr)
        mock      — fixed text (dev/test, no deps required)
    """
    provider = config.ocr_provider.lower().strip()

    if provider == "mock":
        return MockOCREngine()

    if provider == "tesseract":
        from doctext.ocr.engines import TesseractOCREngine
        return TesseractOCREngine(languages=config.ocr_languages, tesseract_cmd=config.tesseract_cmd)

    if provider == "paddleocr":
        from doctext.ocr.engines import PaddleOCREngine
        return PaddleOCREngine(lang=config.paddle_lang, use_gpu=config.paddle_use_gpu)

    raise ValueError(f"Unknown OCR_PROVIDER={config.ocr_provider!r}")


@lru_cache
def get_ocr_engine() -> OCREngine:
    return build_ocr_engine(settings)
