"""Fold a complete upstream body into one chat completion response.

Used when the client did not ask for streaming. The body is scanned for the
``data:`` marker anywhere (not only at line starts) and each JSON object that
follows is decoded with :meth:`json.JSONDecoder.raw_decode`, so re-wrapped,
concatenated or partially garbled lines still yield their events. Payloads
are classified by the same :func:`decode_event_payload` used for streaming.

The transcoder is a pure function of its input: the same body always yields
the same answer.
"""

from __future__ import annotations

import json
import re
import time
from typing import Iterator, Optional, Union

from ...config import CompletionPolicy
from ..models import ClientAggregateResponse
from .answer import FINISH_STOP, AnswerAccumulator
from .decoder import EVENT_PREFIX, decode_event_payload
from .events import UNRECOGNIZED, UpstreamEvent

_EVENT_MARKER = re.compile(re.escape(EVENT_PREFIX) + r"\s*(?=\{)")
_JSON = json.JSONDecoder()


def iter_embedded_events(body: str) -> Iterator[UpstreamEvent]:
    """Yield every recognized event embedded in ``body``, in order of occurrence.

    Markers that appear inside an object already decoded are skipped so a
    token whose text contains ``data: {`` is not decoded twice.
    """
    resume_at = 0
    for match in _EVENT_MARKER.finditer(body):
        if match.start() < resume_at:
            continue
        try:
            payload, end = _JSON.raw_decode(body, match.end())
        except (ValueError, RecursionError):
            continue
        resume_at = end
        event = decode_event_payload(payload)
        if event is not UNRECOGNIZED:
            yield event


def fold_body(body: Union[str, bytes], policy: CompletionPolicy = CompletionPolicy.REPLACE) -> AnswerAccumulator:
    """Fold all events of ``body`` into an :class:`AnswerAccumulator`."""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    answer = AnswerAccumulator(policy)
    for event in iter_embedded_events(body):
        answer.apply(event)
    return answer


def transcode_aggregate(
    body: Union[str, bytes],
    *,
    response_id: str,
    model: str,
    policy: CompletionPolicy = CompletionPolicy.REPLACE,
    created: Optional[int] = None,
) -> ClientAggregateResponse:
    """Build the single client response for a fully received upstream body."""
    answer = fold_body(body, policy)
    return ClientAggregateResponse(
        id=response_id,
        created=int(time.time()) if created is None else created,
        model=model,
        content=answer.text,
        finish_reason=FINISH_STOP,
    )


__all__ = ["iter_embedded_events", "fold_body", "transcode_aggregate"]
