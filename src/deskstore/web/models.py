"""Pydantic v2 response models for the local HTTP boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class InvokeResponse(BaseModel):
    data: Any = None


class ErrorDetail(BaseModel):
    kind: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail


class CommandListResponse(BaseModel):
    commands: list[str]
