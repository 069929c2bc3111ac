from __future__ import annotations

from pydantic import BaseModel


class TextResponse(BaseModel):
    text: str


class ErrorResponse(BaseModel):
    error: str


class StatusResponse(BaseModel):
    status: str
