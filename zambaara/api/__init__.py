"""HTTP surface: routers plus the envelope error handlers."""

from __future__ import annotations

from fastapi import FastAPI

from ..core.responses import install_error_handlers
from .routers import ALL_ROUTERS


def register_api(app: FastAPI) -> None:
    install_error_handlers(app)
    for router in ALL_ROUTERS:
        app.include_router(router)


__all__ = ["register_api"]
