"""FastAPI application factory for the local command boundary."""

from __future__ import annotations

from fastapi import FastAPI

from deskstore.commands import Stores
from deskstore.errors import StoreError
from deskstore.web.routes import health_router, router, store_error_handler


def create_app(stores: Stores, lifespan=None) -> FastAPI:
    """Build and return a configured FastAPI application."""
    app = FastAPI(title="deskstore", docs_url="/api/docs", lifespan=lifespan)
    app.state.stores = stores
    app.add_exception_handler(StoreError, store_error_handler)
    app.include_router(health_router)
    app.include_router(router, prefix="/api/v1")
    return app
