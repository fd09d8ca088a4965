"""
ClientAggregateResponse DTO: the non-streaming chat completion body.

Built by the aggregate transcoder once the whole upstream body is available.
Usage is always reported as zero.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .usage_record import UsageRecord

COMPLETION_OBJECT = "chat.completion"


@dataclass(frozen=True)
class ClientAggregateResponse:
    """Single chat completion response.

    Attributes:
        id: Response identifier.
        created: Unix timestamp (seconds).
        model: Model name echoed back to the client.
        content: Full assistant answer.
        finish_reason: Always ``"stop"`` once the upstream call succeeded.
        usage: Zeroed usage record.
    """

    id: str
    created: int
    model: str
    content: str
    finish_reason: str = "stop"
    usage: UsageRecord = field(default_factory=UsageRecord)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "object": COMPLETION_OBJECT,
            "created": self.created,
            "model": self.model,
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": self.content},
                    "finish_reason": self.finish_reason,
                }
            ],
            "usage": self.usage.to_dict(),
        }


__all__ = ["ClientAggregateResponse", "COMPLETION_OBJECT"]
