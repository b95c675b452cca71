"""System-level API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core import StoreError, get_logger, isoformat, utcnow
from ...store import DocumentStore
from ..deps import get_store

router = APIRouter(tags=["system"])

logger = get_logger(__name__)


@router.get("/api/health")
def health(store: DocumentStore = Depends(get_store)) -> JSONResponse:
    """Readiness check that also pings the document store."""

    timestamp = isoformat(utcnow())
    try:
        store.ping()
    except StoreError as exc:
        logger.error("health_check_store_failed", error=exc.detail)
        return JSONResponse(
            {
                "status": "unhealthy",
                "timestamp": timestamp,
                "database": "disconnected",
            },
            status_code=503,
        )
    return JSONResponse(
        {"status": "healthy", "timestamp": timestamp, "database": "connected"}
    )


__all__ = ["router"]
