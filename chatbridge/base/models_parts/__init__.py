"""Client-dialect DTOs (one class family per file)."""

from .client_aggregate_response import ClientAggregateResponse, COMPLETION_OBJECT
from .client_stream_chunk import ClientStreamChunk, CHUNK_OBJECT
from .model_card import ModelCard, ModelList
from .usage_record import UsageRecord

__all__ = [
    "ClientAggregateResponse",
    "COMPLETION_OBJECT",
    "ClientStreamChunk",
    "CHUNK_OBJECT",
    "ModelCard",
    "ModelList",
    "UsageRecord",
]
