"""Shared HTTP client pool for outbound upstream calls.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances so every inbound request does not pay for a fresh connection
    pool. Requests handled concurrently share a client; ``httpx.Client`` is
    safe for use from multiple threads.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - The gateway imposes no upstream timeout unless one is configured
      (``UPSTREAM_TIMEOUT_SECONDS``). ``None`` disables httpx's default.

Lifecycle & cleanup:
    - Clients are cached by ``(purpose, timeout)``.
    - All clients are closed at interpreter exit via ``atexit``. The service
      shutdown hook and tests may also call :func:`close_all_clients`.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

_CLIENTS: Dict[Tuple[str, Optional[float]], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(purpose: str, timeout: Optional[float] = None) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``purpose`` and ``timeout``.

    Parameters:
        purpose: A short string discriminating separate pools (e.g.
            ``"upstream"``). Keep stable to maximize reuse.
        timeout: Seconds applied to connect/read/write/pool phases, or
            ``None`` for no timeout.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (purpose, timeout)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        client = httpx.Client(timeout=httpx.Timeout(timeout), follow_redirects=False)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Pool teardown failures at shutdown are not actionable.
            with contextlib.suppress(Exception):  # nosec B110
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
