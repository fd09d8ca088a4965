"""Gateway error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatbridge.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, DEFAULT_STATUS
from .errors_parts.gateway_error import GatewayError, ERROR_TYPE
from .errors_parts.classification import classify_exception, upstream_error

__all__ = [
    "ErrorCode",
    "DEFAULT_STATUS",
    "GatewayError",
    "ERROR_TYPE",
    "classify_exception",
    "upstream_error",
]
