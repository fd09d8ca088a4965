"""
Structured gateway error exception type.

Carries a normalized `ErrorCode`, a client-facing message and the HTTP status
to answer with. Raised anywhere in the request path and rendered into the
uniform JSON envelope by the service layer's exception handlers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import DEFAULT_STATUS, ErrorCode

ERROR_TYPE = "api_error"


@dataclass(eq=False)
class GatewayError(Exception):
    """Represents a request-level failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable message returned to the client.
        status_code: HTTP status; defaults to the code's canonical status.
        raw: Optional original exception for diagnostics (never serialized).
    """

    code: ErrorCode
    message: str
    status_code: Optional[int] = None
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        if self.status_code is None:
            self.status_code = DEFAULT_STATUS[self.code]

    def __str__(self) -> str:
        return f"{self.code.value} ({self.status_code}): {self.message}"

    def to_envelope(self) -> Dict[str, Any]:
        """Return the ``{"error": {...}}`` body sent to clients."""
        return {
            "error": {
                "message": self.message,
                "type": ERROR_TYPE,
                "code": self.code.value,
            }
        }


__all__ = ["GatewayError", "ERROR_TYPE"]
