"""FastAPI application factory and configuration."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api import register_api
from .core import (
    ALLOWED_CORS_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    STORE_BACKEND,
    configure_logging,
    get_logger,
    init_db,
    make_engine,
)
from .core.logging_config import bind_request_context, clear_request_context
from .services import AdminAuthConfig, SessionAuthGuard
from .store import DocumentStore, InMemoryDocumentStore, SqlDocumentStore

logger = get_logger(__name__)


def build_store(backend: str = STORE_BACKEND) -> DocumentStore:
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "sql":
        return SqlDocumentStore(make_engine())
    raise RuntimeError(f"Unknown STORE_BACKEND: {backend}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(level=LOG_LEVEL, json_format=LOG_FORMAT == "json")
    store = app.state.store
    if isinstance(store, SqlDocumentStore):
        init_db(store.engine)
    if app.state.guard.config.configuration_error():
        logger.warning("admin_login_not_configured")
    logger.info("application_started", store=type(store).__name__)
    yield
    logger.info("shutting_down")


def create_app(
    store: Optional[DocumentStore] = None,
    auth_config: Optional[AdminAuthConfig] = None,
) -> FastAPI:
    app = FastAPI(title="Zambaara API", version="1.0.0", lifespan=lifespan)
    app.state.store = store if store is not None else build_store()
    app.state.guard = SessionAuthGuard(auth_config or AdminAuthConfig.from_env())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        bind_request_context(request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers["X-Request-ID"] = request_id
        return response

    register_api(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("zambaara.app:app", host="127.0.0.1", port=3000, reload=True)
