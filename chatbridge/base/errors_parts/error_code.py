"""
Gateway error codes (taxonomy).

Defines the `ErrorCode` enumeration surfaced in the ``code`` field of every
error envelope. Values are lowercase snake_case and are considered a stable
public contract for clients and log analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated error codes representing request-level failure categories."""

    UNAUTHORIZED = "unauthorized"
    INVALID_API_KEY = "invalid_api_key"  # pragma: allowlist secret - code name
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    INTERNAL_SERVER_ERROR = "internal_server_error"


DEFAULT_STATUS = {
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.INVALID_API_KEY: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.UPSTREAM_ERROR: 502,
    ErrorCode.INTERNAL_SERVER_ERROR: 500,
}


__all__ = ["ErrorCode", "DEFAULT_STATUS"]
