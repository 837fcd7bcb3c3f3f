"""API route handlers for the local HTTP boundary."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from deskstore.commands import Stores, dispatch, registered_commands
from deskstore.errors import ErrorKind, StoreError
from deskstore.web.models import (
    CommandListResponse,
    ErrorDetail,
    ErrorResponse,
    InvokeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()
health_router = APIRouter()

_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONSTRAINT_VIOLATION: 409,
    ErrorKind.INVALID_INPUT: 422,
    ErrorKind.STORAGE_UNAVAILABLE: 503,
    ErrorKind.UNKNOWN: 500,
}


def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Render a StoreError as ``{"error": {"kind", "message"}}``."""
    body = ErrorResponse(error=ErrorDetail(**exc.to_dict()))
    return JSONResponse(body.model_dump(), status_code=_STATUS_BY_KIND[exc.kind])


@health_router.get("/health")
def health(request: Request) -> JSONResponse:
    """Check connectivity of both stores and return health status."""
    stores: Stores = request.app.state.stores
    status = {}
    healthy = True
    for name, db in (("notes", stores.notes), ("inventory", stores.inventory)):
        try:
            with db.transaction() as conn:
                conn.execute("SELECT 1")
            status[name] = "ok"
        except sqlite3.Error as exc:
            logger.warning("Health check failed for %s: %s", name, exc)
            status[name] = "error"
            healthy = False
    if healthy:
        return JSONResponse({"status": "healthy", **status})
    return JSONResponse({"status": "unhealthy", **status}, status_code=503)


@router.get("/commands", response_model=CommandListResponse)
def commands() -> CommandListResponse:
    return CommandListResponse(commands=registered_commands())


@router.post(
    "/invoke/{command}",
    response_model=InvokeResponse,
    responses={status: {"model": ErrorResponse} for status in _STATUS_BY_KIND.values()},
)
def invoke(
    request: Request,
    command: str,
    args: dict[str, Any] | None = Body(default=None),
) -> InvokeResponse:
    stores: Stores = request.app.state.stores
    return InvokeResponse(data=dispatch(stores, command, args))
