"""Reassemble newline-terminated lines from arbitrary byte chunks.

Network reads do not respect line boundaries: one read may carry half a line,
several lines, or split a multi-byte UTF-8 sequence. :class:`LineReassembler`
decodes incrementally (so split characters are joined before decoding) and
keeps the unterminated tail until more data arrives.

Invariants
----------
- The sequence of lines produced is independent of how the input was chunked.
- A trailing partial line is dropped at end-of-stream; it is incomplete and
  cannot be decoded safely.
- No line length limit is imposed; an unterminated stream grows the pending
  buffer without bound.
"""

from __future__ import annotations

import codecs
from typing import List


class LineReassembler:
    """Incremental bytes-to-lines splitter.

    Lines are split on ``\\n``; one trailing ``\\r`` is removed from each
    line so CRLF upstreams yield the same lines as LF upstreams.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._closed = False

    @property
    def pending(self) -> str:
        """Text received after the last newline (not yet a complete line)."""
        return self._pending

    def feed(self, data: bytes) -> List[str]:
        """Ingest one chunk and return the lines it completed, in order."""
        if self._closed:
            raise RuntimeError("LineReassembler is closed")
        if not data:
            return []
        self._pending += self._decoder.decode(data)
        if "\n" not in self._pending:
            return []
        *lines, self._pending = self._pending.split("\n")
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def close(self) -> str:
        """Mark end-of-stream and return the discarded partial tail (if any)."""
        if self._closed:
            return ""
        self._closed = True
        discarded = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return discarded


__all__ = ["LineReassembler"]
