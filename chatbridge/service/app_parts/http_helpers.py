"""Cross-cutting HTTP behavior: CORS, bearer auth, request logging, errors.

Purpose
-------
Everything here runs around the routes rather than inside them:

- ``OPTIONS`` on any path is answered with an empty 204 before auth.
- Every ``/v1/`` path (matched or not) requires ``Authorization: Bearer``;
  a missing/malformed header is ``unauthorized`` (401), a wrong token is
  ``invalid_api_key`` (403).
- Every response, including errors, carries permissive CORS headers.
- Failures are rendered as ``{"error": {"message", "type", "code"}}``.

Starlette's ``CORSMiddleware`` only decorates requests that send an
``Origin`` header, while clients here expect the headers unconditionally, so
the headers are applied by the gateway middleware itself.
"""

from __future__ import annotations

import hmac
import logging
import time
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatbridge.base.errors import ErrorCode, GatewayError, classify_exception
from chatbridge.base.logging import LogContext, get_logger, log_event
from chatbridge.config import GatewayConfig

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
}
AUTH_PREFIX = "/v1/"
_BEARER = "Bearer "

_logger = get_logger("chatbridge.service")


def error_response(err: GatewayError) -> JSONResponse:
    """Render a :class:`GatewayError` into its JSON envelope (CORS headers included)."""
    return JSONResponse(
        status_code=err.status_code,
        content=err.to_envelope(),
        headers=dict(CORS_HEADERS),
    )


def check_bearer(authorization: Optional[str], secret: str) -> Optional[GatewayError]:
    """Validate an ``Authorization`` header against the shared secret.

    Returns ``None`` when the token matches, otherwise the error to answer with.
    """
    if not authorization or not authorization.startswith(_BEARER):
        return GatewayError(
            code=ErrorCode.UNAUTHORIZED,
            message="Missing or invalid Authorization header.",
        )
    token = authorization[len(_BEARER):]
    if not hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8")):
        return GatewayError(code=ErrorCode.INVALID_API_KEY, message="Invalid API Key.")
    return None


def not_found(path: str) -> GatewayError:
    return GatewayError(code=ErrorCode.NOT_FOUND, message=f"Path not found: {path}")


async def gateway_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Preflight, auth and CORS for every request, plus an access log line."""
    start = time.perf_counter()
    path = request.url.path
    config: GatewayConfig = request.app.state.config
    if request.method == "OPTIONS":
        response: Response = Response(status_code=204)
    else:
        rejection = None
        if path.startswith(AUTH_PREFIX):
            rejection = check_bearer(request.headers.get("Authorization"), config.shared_secret)
        if rejection is not None:
            log_event(
                _logger,
                "auth.rejected",
                LogContext(path=path),
                level=logging.WARNING,
                code=rejection.code.value,
            )
            response = error_response(rejection)
        else:
            response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    log_event(
        _logger,
        "http.request",
        LogContext(path=path),
        method=request.method,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - start) * 1000.0, 1),
    )
    return response


async def _handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.code is ErrorCode.INTERNAL_SERVER_ERROR:
        log_event(
            _logger,
            "request.internal_error",
            LogContext(path=request.url.path),
            level=logging.ERROR,
            error=exc.message,
        )
    return error_response(exc)


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown path or unsupported method on a known path.
    if exc.status_code in (404, 405):
        return error_response(not_found(request.url.path))
    err = GatewayError(
        code=ErrorCode.INTERNAL_SERVER_ERROR,
        message=str(exc.detail),
        status_code=exc.status_code,
    )
    return error_response(err)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed inbound body: reported as an internal error, not a 4xx.
    return await _handle_gateway_error(request, classify_exception(exc))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    return await _handle_gateway_error(request, classify_exception(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error envelope for every failure the app can raise."""
    app.add_exception_handler(GatewayError, _handle_gateway_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected)


__all__ = [
    "CORS_HEADERS",
    "AUTH_PREFIX",
    "error_response",
    "check_bearer",
    "not_found",
    "gateway_middleware",
    "register_exception_handlers",
]
