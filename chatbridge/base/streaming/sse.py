"""Server-sent events framing for the client dialect."""

from __future__ import annotations

import json
from typing import Any, Mapping

SSE_SENTINEL = b"data: [DONE]\n\n"


def encode_sse(payload: Mapping[str, Any]) -> bytes:
    """Frame one JSON object as ``data: <json>\\n\\n``."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n".encode("utf-8")


__all__ = ["SSE_SENTINEL", "encode_sse"]
