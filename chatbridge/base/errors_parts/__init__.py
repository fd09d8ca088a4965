"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatbridge.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, DEFAULT_STATUS
from .gateway_error import GatewayError, ERROR_TYPE
from .classification import classify_exception, upstream_error

__all__ = [
    "ErrorCode",
    "DEFAULT_STATUS",
    "GatewayError",
    "ERROR_TYPE",
    "classify_exception",
    "upstream_error",
]
