"""
ClientStreamChunk DTO: one incremental unit of a streamed chat completion.

Chunks of a single response share ``id``, ``created`` and ``model``. The
delta is either ``{"content": text}`` or empty; the empty form is paired with
``finish_reason="stop"`` to close the answer. The sequence itself is closed by
the SSE sentinel, never by an extra chunk.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

CHUNK_OBJECT = "chat.completion.chunk"


@dataclass(frozen=True)
class ClientStreamChunk:
    """Streamed chat completion chunk.

    Attributes:
        id: Response identifier shared by every chunk of one response.
        created: Unix timestamp (seconds) of the response.
        model: Model name echoed back to the client.
        content: Text delta; ``None`` yields an empty delta.
        finish_reason: ``"stop"`` on the terminal chunk, otherwise ``None``.
    """

    id: str
    created: int
    model: str
    content: Optional[str] = None
    finish_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        delta: Dict[str, Any] = {"content": self.content} if self.content else {}
        return {
            "id": self.id,
            "object": CHUNK_OBJECT,
            "created": self.created,
            "model": self.model,
            "choices": [
                {
                    "index": 0,
                    "delta": delta,
                    "finish_reason": self.finish_reason,
                }
            ],
        }


__all__ = ["ClientStreamChunk", "CHUNK_OBJECT"]
