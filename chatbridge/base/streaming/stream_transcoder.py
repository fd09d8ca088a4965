"""Incremental upstream-to-client stream transcoder.

Purpose
-------
Convert the upstream's ``data:`` event stream, delivered as byte chunks with
arbitrary boundaries, into client-dialect SSE frames as soon as each event is
complete. No output is buffered: every derivable chunk is returned from the
``process`` call that completed it, which keeps token-by-token latency low.

Mapping
-------
- token    -> chunk with ``delta={"content": text}``
- done     -> chunk with empty delta and ``finish_reason="stop"``
- complete -> one chunk carrying any not-yet-sent text and ``"stop"``
  (see :class:`~chatbridge.config.CompletionPolicy`)
- noise    -> nothing

After the first terminal event further events are still consumed (the
answer keeps folding) but no more chunks are emitted. ``close`` returns the
``data: [DONE]`` sentinel exactly once; nothing is produced after it.
"""

from __future__ import annotations

import logging
import time
from typing import Iterable, Iterator, List, Optional

from ...config import CompletionPolicy
from ..logging import LogContext, get_logger, log_event
from ..models import ClientStreamChunk
from .answer import AnswerAccumulator
from .decoder import decode_event_line
from .events import UpstreamEvent
from .line_reassembler import LineReassembler
from .sse import SSE_SENTINEL, encode_sse


class StreamTranscoder:
    """Stateful per-response transcoder (not shared between requests)."""

    def __init__(
        self,
        *,
        response_id: str,
        model: str,
        policy: CompletionPolicy = CompletionPolicy.REPLACE,
        created: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
        ctx: Optional[LogContext] = None,
    ) -> None:
        self.response_id = response_id
        self.model = model
        self.created = int(time.time()) if created is None else created
        self._lines = LineReassembler()
        self._answer = AnswerAccumulator(policy)
        self._closed = False
        self._logger = logger or get_logger("chatbridge.streaming")
        self._ctx = ctx or LogContext(request_id=response_id, model=model)
        self.chunks_emitted = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def terminated(self) -> bool:
        """True once a done/complete event has been seen."""
        return self._answer.terminated

    @property
    def answer(self) -> str:
        return self._answer.text

    def process(self, data: bytes) -> List[ClientStreamChunk]:
        """Ingest one upstream chunk and return the client chunks it produced."""
        if self._closed:
            raise RuntimeError("StreamTranscoder is closed")
        out: List[ClientStreamChunk] = []
        for line in self._lines.feed(data):
            chunk = self._chunk_for(decode_event_line(line))
            if chunk is not None:
                out.append(chunk)
        self.chunks_emitted += len(out)
        return out

    def _chunk_for(self, event: UpstreamEvent) -> Optional[ClientStreamChunk]:
        already_terminated = self._answer.terminated
        step = self._answer.apply(event)
        if already_terminated or not step.emits:
            return None
        if step.diverged:
            log_event(
                self._logger,
                "stream.complete_diverged",
                self._ctx,
                level=logging.WARNING,
                sent_chars=len(self._answer.text),
            )
        return ClientStreamChunk(
            id=self.response_id,
            created=self.created,
            model=self.model,
            content=step.delta,
            finish_reason=step.finish_reason,
        )

    def close(self) -> List[bytes]:
        """End the stream; returns ``[SSE_SENTINEL]`` the first time, ``[]`` after."""
        if self._closed:
            return []
        self._closed = True
        discarded = self._lines.close()
        log_event(
            self._logger,
            "stream.complete",
            self._ctx,
            chunks=self.chunks_emitted,
            terminal_seen=self._answer.terminated,
            discarded_chars=len(discarded) or None,
        )
        return [SSE_SENTINEL]

    def iter_sse(self, byte_chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Yield SSE frames for ``byte_chunks`` followed by the sentinel."""
        for data in byte_chunks:
            for chunk in self.process(data):
                yield encode_sse(chunk.to_dict())
        yield from self.close()


__all__ = ["StreamTranscoder"]
