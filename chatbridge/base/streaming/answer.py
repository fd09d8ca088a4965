"""Fold upstream events into a running answer.

Shared by the streaming and aggregate transcoders so both apply the same
token/complete semantics. The accumulator keeps folding after the first
terminal event; it is up to the caller whether later steps are emitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ...config import CompletionPolicy
from .events import CompleteEvent, TokenEvent, UpstreamEvent, is_terminal

FINISH_STOP = "stop"


@dataclass(frozen=True)
class FoldStep:
    """Outcome of folding one event.

    Attributes:
        delta: Text newly added to what the client has seen, if any.
        finish_reason: ``"stop"`` when the event ends the answer.
        diverged: True when a replacing ``complete`` payload does not extend
            the text accumulated so far (already-sent text cannot be retracted).
    """

    delta: Optional[str] = None
    finish_reason: Optional[str] = None
    diverged: bool = False

    @property
    def emits(self) -> bool:
        return self.delta is not None or self.finish_reason is not None


class AnswerAccumulator:
    """Running answer built from token and complete events."""

    def __init__(self, policy: CompletionPolicy = CompletionPolicy.REPLACE) -> None:
        self.policy = policy
        self._parts: List[str] = []
        self.terminated = False
        self.events_seen = 0

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def apply(self, event: UpstreamEvent) -> FoldStep:
        """Fold ``event`` into the answer and describe what changed."""
        if isinstance(event, TokenEvent):
            self.events_seen += 1
            self._parts.append(event.text)
            return FoldStep(delta=event.text)
        if not is_terminal(event):
            return FoldStep()
        self.events_seen += 1
        self.terminated = True
        if isinstance(event, CompleteEvent):
            return self._apply_complete(event.text)
        return FoldStep(finish_reason=FINISH_STOP)

    def _apply_complete(self, text: str) -> FoldStep:
        if self.policy is CompletionPolicy.APPEND:
            self._parts.append(text)
            return FoldStep(delta=text or None, finish_reason=FINISH_STOP)
        current = self.text
        self._parts = [text]
        if text.startswith(current):
            return FoldStep(delta=text[len(current):] or None, finish_reason=FINISH_STOP)
        return FoldStep(finish_reason=FINISH_STOP, diverged=True)


__all__ = ["FINISH_STOP", "FoldStep", "AnswerAccumulator"]
