"""Decode upstream ``data:`` lines into :mod:`events` variants.

The upstream interleaves noise, keep-alives and partial writes with real
events. Decoding therefore never raises: every input maps to an event, with
:data:`UNRECOGNIZED` as the catch-all.

Recognized payload shapes::

    {"type": "token", "token": "<non-empty text>"}
    {"type": "done"}
    {"type": "complete", "text": "<answer>"}      # "content" accepted too
"""

from __future__ import annotations

import json
from typing import Any

from .events import (
    UNRECOGNIZED,
    CompleteEvent,
    DoneEvent,
    TokenEvent,
    UpstreamEvent,
)

EVENT_PREFIX = "data:"


def decode_event_payload(payload: Any) -> UpstreamEvent:
    """Classify an already-parsed JSON value by its ``type`` discriminator."""
    if not isinstance(payload, dict):
        return UNRECOGNIZED
    kind = payload.get("type")
    if kind == "token":
        token = payload.get("token")
        if isinstance(token, str) and token:
            return TokenEvent(text=token)
        return UNRECOGNIZED
    if kind == "done":
        return DoneEvent()
    if kind == "complete":
        text = payload.get("text", payload.get("content"))
        if isinstance(text, str):
            return CompleteEvent(text=text)
        return UNRECOGNIZED
    return UNRECOGNIZED


def decode_event_text(text: str) -> UpstreamEvent:
    """Parse the text following the prefix marker and classify it."""
    text = text.strip()
    if not text:
        return UNRECOGNIZED
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        return UNRECOGNIZED
    return decode_event_payload(payload)


def decode_event_line(line: str) -> UpstreamEvent:
    """Decode one logical line; lines without the ``data:`` marker are not events."""
    if not line.startswith(EVENT_PREFIX):
        return UNRECOGNIZED
    return decode_event_text(line[len(EVENT_PREFIX):])


__all__ = [
    "EVENT_PREFIX",
    "decode_event_payload",
    "decode_event_text",
    "decode_event_line",
]
