"""
Exception classification helpers mapping failures to a `GatewayError`.

Only structural failures reach this layer: malformed event lines are dropped
by the decoder long before and never surface as request errors.
"""
from __future__ import annotations

from .error_code import ErrorCode
from .gateway_error import GatewayError


def classify_exception(exc: BaseException) -> GatewayError:
    """Map an exception raised while serving a request to a :class:`GatewayError`.

    Precedence:
        1. ``GatewayError`` passthrough.
        2. Everything else collapses to ``internal_server_error`` (HTTP 500),
           including unreachable upstreams and malformed inbound bodies.
    """
    if isinstance(exc, GatewayError):
        return exc
    detail = str(exc) or exc.__class__.__name__
    return GatewayError(
        code=ErrorCode.INTERNAL_SERVER_ERROR,
        message=f"Internal Server Error: {detail}",
        raw=exc,
    )


def upstream_error(status_code: int) -> GatewayError:
    """Build the error returned when the upstream answered with a non-2xx status."""
    return GatewayError(
        code=ErrorCode.UPSTREAM_ERROR,
        message=f"Upstream error: {status_code}",
        status_code=status_code,
    )


__all__ = ["classify_exception", "upstream_error"]
