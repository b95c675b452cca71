"""Uniform ``{success, data?, error?, message?}`` response envelope."""

from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ApiError, LoginRedirect, StoreError
from .logging_config import get_logger

logger = get_logger(__name__)

LOGIN_PATH = "/admin/login"


def success_response(
    data: Any = None, message: Optional[str] = None, status_code: int = 200
) -> JSONResponse:
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return JSONResponse(body, status_code=status_code)


def error_response(error: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code=status_code)


def login_redirect_url(next_path: str) -> str:
    return f"{LOGIN_PATH}?redirect={quote(next_path or '/admin', safe='')}"


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error(
            "store_error",
            path=request.url.path,
            method=request.method,
            error=exc.detail,
        )
    return error_response(exc.message, exc.status_code)


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        {"success": False, "error": detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, errors=exc.errors())
    return error_response("Malformed request body", 400)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
    )
    return error_response("Internal server error", 500)


async def _login_redirect_handler(
    request: Request, exc: LoginRedirect
) -> RedirectResponse:
    return RedirectResponse(login_redirect_url(exc.next_path), status_code=302)


def install_error_handlers(app: FastAPI) -> None:
    """Map every error raised by routes onto the envelope."""

    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(LoginRedirect, _login_redirect_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


__all__ = [
    "LOGIN_PATH",
    "error_response",
    "install_error_handlers",
    "login_redirect_url",
    "success_response",
]
