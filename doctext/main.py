from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from doctext.api.routes import router
from doctext.core.config import settings
from doctext.core.errors import MISSING_INPUT_MESSAGE, ErrorKind
from doctext.core.logging import configure_logging

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        logger.info("request_invalid", extra={"path": request.url.path, "errors": len(errors)})
        # a "file" field that is not a file payload counts as no upload
        if any(tuple(err.get("loc", ()))[:2] == ("body", "file") for err in errors):
            return _error(ErrorKind.MISSING_INPUT.status_code, MISSING_INPUT_MESSAGE)
        return _error(400, "Invalid upload request")

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error", extra={"path": request.url.path})
        return _error(500, "Internal server error")


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="Document Text Extraction", version="0.1.0")
    app.include_router(router)
    register_exception_handlers(app)

    @app.get("/")
    async def root():
        return {"status": "ok"}

    @app.on_event("startup")
    async def _startup() -> None:
        logger.info("startup", extra={"app_env": settings.app_env, "ocr_provider": settings.ocr_provider})

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("doctext.main:app", host=settings.host, port=settings.port)
