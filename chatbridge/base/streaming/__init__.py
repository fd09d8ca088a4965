"""Streaming package: upstream event decoding and client-dialect transcoding.

Exposes the line reassembler, event decoder and both transcoders under a
single namespace.
"""

from .events import (
    UNRECOGNIZED,
    CompleteEvent,
    DoneEvent,
    TokenEvent,
    Unrecognized,
    UpstreamEvent,
    is_terminal,
)
from .line_reassembler import LineReassembler
from .decoder import EVENT_PREFIX, decode_event_line, decode_event_payload, decode_event_text
from .answer import FINISH_STOP, AnswerAccumulator, FoldStep
from .sse import SSE_SENTINEL, encode_sse
from .stream_transcoder import StreamTranscoder
from .aggregate_transcoder import fold_body, iter_embedded_events, transcode_aggregate

__all__ = [
    "UNRECOGNIZED",
    "CompleteEvent",
    "DoneEvent",
    "TokenEvent",
    "Unrecognized",
    "UpstreamEvent",
    "is_terminal",
    "LineReassembler",
    "EVENT_PREFIX",
    "decode_event_line",
    "decode_event_payload",
    "decode_event_text",
    "FINISH_STOP",
    "AnswerAccumulator",
    "FoldStep",
    "SSE_SENTINEL",
    "encode_sse",
    "StreamTranscoder",
    "fold_body",
    "iter_embedded_events",
    "transcode_aggregate",
]
