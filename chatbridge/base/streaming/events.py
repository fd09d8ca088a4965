"""Upstream event vocabulary.

Every logical line (or embedded ``data:`` occurrence) of the upstream body
decodes to exactly one of these variants. The set is closed: anything that is
not a token, done or complete event collapses to :data:`UNRECOGNIZED`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TokenEvent:
    """A chunk of assistant text to append to the running answer."""

    text: str


@dataclass(frozen=True)
class DoneEvent:
    """Upstream finished producing output. Carries no payload."""


@dataclass(frozen=True)
class CompleteEvent:
    """A single event carrying the entire final answer."""

    text: str


class Unrecognized:
    """Marker for lines that are noise, keep-alives or unknown shapes."""

    _instance: "Unrecognized | None" = None

    def __new__(cls) -> "Unrecognized":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNRECOGNIZED"


UNRECOGNIZED = Unrecognized()

UpstreamEvent = Union[TokenEvent, DoneEvent, CompleteEvent, Unrecognized]


def is_terminal(event: UpstreamEvent) -> bool:
    """Return True for events that end the answer (done/complete)."""
    return isinstance(event, (DoneEvent, CompleteEvent))


__all__ = [
    "TokenEvent",
    "DoneEvent",
    "CompleteEvent",
    "Unrecognized",
    "UNRECOGNIZED",
    "UpstreamEvent",
    "is_terminal",
]
