"""TesseractOCREngine (default) and PaddleOCREngine implementations."""
from __future__ import annotations

import io
import logging

from doctext.ocr.base_ocr import OCREngine, OCRSession

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TesseractOCREngine
# ---------------------------------------------------------------------------

class TesseractSession(OCRSession):
    def __init__(self, languages: str) -> None:
        super().__init__(languages)
        self._pytesseract = None

    def _start(self) -> None:
        import pytesseract  # type: ignore[import]

        # Raises TesseractNotFoundError when the binary is unavailable
        version = pytesseract.get_tesseract_version()
        installed = set(pytesseract.get_languages(config=""))
        missing = [lang for lang in self.languages.split("+") if lang not in installed]
        if missing:
            raise RuntimeError(f"Tesseract language data not installed: {', '.join(missing)}")

        self._pytesseract = pytesseract
        logger.info("tesseract_ready", extra={"version": str(version), "languages": self.languages})

    def _recognize(self, image_bytes: bytes) -> str:
        from PIL import Image  # type: ignore[import]

        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            text = self._pytesseract.image_to_string(img, lang=self.languages)

        logger.info("tesseract_complete", extra={"chars": len(text)})
        return text

    def _terminate(self) -> None:
        self._pytesseract = None


class TesseractOCREngine(OCREngine):
    """OCR engine backed by the Tesseract binary via pytesseract.

    Install dependency:
        apt-get install tesseract-ocr tesseract-ocr-por
        pip install pytesseract

    Config (via .env):
        OCR_PROVIDER=tesseract
        OCR_LANGUAGES=eng+por
        TESSERACT_CMD=/usr/bin/tesseract   # optional
    """

    name = "tesseract"

    def __init__(self, languages: str = "eng+por", tesseract_cmd: str | None = None) -> None:
        self._languages = languages
        if tesseract_cmd:
            import pytesseract  # type: ignore[import]

            # process-wide setting; applied once when the engine is built
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def create_session(self) -> OCRSession:
        return TesseractSession(self._languages)


# ---------------------------------------------------------------------------
# PaddleOCREngine
# ---------------------------------------------------------------------------

class PaddleSession(OCRSession):
    def __init__(self, languages: str, use_gpu: bool = False) -> None:
        super().__init__(languages)
        self._use_gpu = use_gpu
        self._ocr = None

    def _start(self) -> None:
        try:
            from paddleocr import PaddleOCR  # type: ignore[import]
        except ModuleNotFoundError as exc:
            raise RuntimeError(
                "PaddleOCR is not installed. Run: pip install paddlepaddle paddleocr"
            ) from exc
        self._ocr = PaddleOCR(
            use_angle_cls=True,
            lang=self.languages,
            use_gpu=self._use_gpu,
            show_log=False,
        )

    def _recognize(self, image_bytes: bytes) -> str:
        import numpy as np  # type: ignore[import]
        from PIL import Image  # type: ignore[import]

        # Decode image bytes → numpy array
        with Image.open(io.BytesIO(image_bytes)) as img:
            img_array = np.array(img.convert("RGB"))

        result = self._ocr.ocr(img_array, cls=True)

        lines: list[str] = []
        if result and result[0]:
            for line in result[0]:
                # Each line: [bounding_box, [text, confidence]]
                text, _conf = line[1]
                lines.append(text)

        logger.info("paddleocr_complete", extra={"lines": len(lines)})
        return "\n".join(lines)

    def _terminate(self) -> None:
        self._ocr = None


class PaddleOCREngine(OCREngine):
    """OCR engine backed by PaddleOCR (runs 100% locally).

    Install dependency:
        pip install paddlepaddle paddleocr

    Config (via .env):
        OCR_PROVIDER=paddleocr
        PADDLE_LANG=latin
        PADDLE_USE_GPU=false
    """

    name = "paddleocr"

    def __init__(self, lang: str = "latin", use_gpu: bool = False) -> None:
        self._lang = lang
        self._use_gpu = use_gpu

    def create_session(self) -> OCRSession:
        return PaddleSession(self._lang, use_gpu=self._use_gpu)
