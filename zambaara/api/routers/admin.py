"""Admin session endpoints and the gated admin area."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from ...core import store_failure
from ...core.responses import success_response
from ...services import SessionAuthGuard, dashboard_summary, delete_all_data
from ...services.auth import COOKIE_NAME
from ...store import DocumentStore
from ..deps import (
    clear_session_cookie,
    get_guard,
    get_store,
    require_admin,
    require_admin_page,
    set_session_cookie,
)

router = APIRouter(tags=["admin"])

ADMIN_HOME = "/admin"


def _safe_redirect(target: Optional[str]) -> str:
    """Only send the admin back into the admin area of this site."""

    if target and target.startswith(ADMIN_HOME) and not target.startswith("//"):
        return target
    return ADMIN_HOME


@router.post("/api/admin/login")
def admin_login(body: Dict[str, Any], guard: SessionAuthGuard = Depends(get_guard)):
    token = guard.login(body.get("email"), body.get("password"))
    response = success_response(None, "Logged in")
    set_session_cookie(response, guard, token)
    return response


@router.post("/api/admin/logout")
def admin_logout(guard: SessionAuthGuard = Depends(get_guard)):
    guard.logout()
    response = success_response(None, "Logged out")
    clear_session_cookie(response, guard)
    return response


@router.post("/api/admin/delete-all-data")
def admin_delete_all_data(
    store: DocumentStore = Depends(get_store),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to delete all data"):
        result = delete_all_data(store)
    return success_response(
        result, f"Deleted {result['totalDeleted']} document(s) from all collections"
    )


@router.get("/admin/login")
def admin_login_page(
    request: Request,
    redirect: Optional[str] = None,
    guard: SessionAuthGuard = Depends(get_guard),
):
    """Login entry point; an admin with a live session goes straight in."""

    if guard.verify(request.cookies.get(COOKIE_NAME)).authenticated:
        return RedirectResponse(ADMIN_HOME, status_code=302)
    return success_response(
        {"loginUrl": "/api/admin/login", "redirect": _safe_redirect(redirect)}
    )


@router.get("/admin")
def admin_dashboard(
    store: DocumentStore = Depends(get_store),
    identity: Dict[str, Any] = Depends(require_admin_page),
):
    with store_failure("Failed to load dashboard"):
        summary = dashboard_summary(store)
    return success_response({"admin": identity.get("email"), "summary": summary})


__all__ = ["router"]
