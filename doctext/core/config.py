from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3000

    # OCR provider: tesseract | paddleocr | mock
    ocr_provider: str = "tesseract"
    ocr_languages: str = "eng+por"
    tesseract_cmd: str | None = None

    # PaddleOCR (only needed when ocr_provider=paddleocr); "latin" covers eng + por
    paddle_lang: str = "latin"
    paddle_use_gpu: bool = False


settings = Settings()
