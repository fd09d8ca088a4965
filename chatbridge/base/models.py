"""Client-dialect DTO public surface.

Re-exports the dataclasses under ``chatbridge.base.models_parts``.
"""

from .models_parts import (
    CHUNK_OBJECT,
    COMPLETION_OBJECT,
    ClientAggregateResponse,
    ClientStreamChunk,
    ModelCard,
    ModelList,
    UsageRecord,
)

__all__ = [
    "CHUNK_OBJECT",
    "COMPLETION_OBJECT",
    "ClientAggregateResponse",
    "ClientStreamChunk",
    "ModelCard",
    "ModelList",
    "UsageRecord",
]
