"""
Token usage record reported in aggregate responses.

The gateway performs no token accounting, so every field defaults to zero.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class UsageRecord:
    """Usage accounting block of a chat completion response."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


__all__ = ["UsageRecord"]
