"""OCR engine and per-call session lifecycle.

An ``OCREngine`` holds configuration only. Each recognition happens inside a
fresh ``OCRSession`` obtained from ``engine.session()``, which is an async
context manager that always terminates the session, whether recognition
succeeds, fails, or the request is cancelled.

Session states::

    UNINITIALIZED -> INITIALIZING -> READY -> RECOGNIZING -> READY ... -> TERMINATED
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum

from doctext.core.errors import DocumentProcessingError, ErrorKind

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    RECOGNIZING = "recognizing"
    TERMINATED = "terminated"


class OCRSession:
    """A single initialized recognition engine instance.

    Subclasses implement the blocking hooks ``_start``, ``_recognize`` and
    ``_terminate``; they run in the default executor so the event loop keeps
    serving other requests.
    """

    def __init__(self, languages: str) -> None:
        self.languages = languages
        self.state = SessionState.UNINITIALIZED

    async def start(self) -> None:
        if self.state is not SessionState.UNINITIALIZED:
            raise RuntimeError(f"cannot start OCR session in state {self.state.value}")
        self.state = SessionState.INITIALIZING
        await self._run_blocking(self._start)
        self.state = SessionState.READY

    async def recognize(self, image_bytes: bytes) -> str:
        if self.state is not SessionState.READY:
            raise RuntimeError(f"cannot recognize in state {self.state.value}")
        self.state = SessionState.RECOGNIZING
        try:
            return await self._run_blocking(self._recognize, image_bytes)
        finally:
            if self.state is SessionState.RECOGNIZING:
                self.state = SessionState.READY

    async def terminate(self) -> None:
        if self.state is SessionState.TERMINATED:
            return
        try:
            if self.state is not SessionState.UNINITIALIZED:
                await self._run_blocking(self._terminate)
        finally:
            self.state = SessionState.TERMINATED

    async def _run_blocking(self, func, *args):
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, func, *args)

    def _start(self) -> None:
        raise NotImplementedError

    def _recognize(self, image_bytes: bytes) -> str:
        raise NotImplementedError

    def _terminate(self) -> None:
        raise NotImplementedError


class OCREngine:
    name = "base"

    def create_session(self) -> OCRSession:
        raise NotImplementedError

    @asynccontextmanager
    async def session(self) -> AsyncIterator[OCRSession]:
        """Yield a started session and terminate it on every exit path.

        Any failure while creating or starting the session is reported as
        ``ENGINE_INIT_FAILED``.
        """
        session: OCRSession | None = None
        try:
            session = self.create_session()
            await session.start()
        except Exception as exc:
            logger.exception("ocr_session_init_failed", extra={"engine": self.name})
            if session is not None:
                await self._release(session)
            raise DocumentProcessingError(ErrorKind.ENGINE_INIT_FAILED, "Error creating OCR worker") from exc
        except BaseException:
            # cancelled while starting
            if session is not None:
                await self._release(session)
            raise

        logger.debug("ocr_session_started", extra={"engine": self.name, "languages": session.languages})
        try:
            yield session
        finally:
            await self._release(session)

    async def _release(self, session: OCRSession) -> None:
        try:
            await session.terminate()
        except Exception:
            # termination errors must not mask the original outcome
            logger.exception("ocr_session_terminate_failed", extra={"engine": self.name})
        else:
            logger.debug("ocr_session_terminated", extra={"engine": self.name})
