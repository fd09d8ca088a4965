"""Outbound client for the upstream chat service.

Purpose
-------
Translate one client-dialect chat request into the single POST the upstream
expects and hand back the (still open) streaming response once its status
has been checked.

Request shape
-------------
``{"message": <latest user text>, "modelIds": [<model>], "deepSearchEnabled": false}``
with a browser-like ``User-Agent``, an ``Origin``/``Referer`` pair matching
the upstream site and an ``X-Request-ID`` trace header.

Failure modes
-------------
- Non-2xx upstream status: the body is read and logged at ERROR, the
  response is closed and :class:`GatewayError` ``upstream_error`` is raised
  carrying the upstream status. The upstream body is never forwarded.
- Transport failures (DNS, refused connection, ...) propagate as
  ``httpx.TransportError`` and are classified by the service layer.
- No retries are performed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from ..base.errors import upstream_error
from ..base.logging import LogContext, get_logger, log_event
from ..config import GatewayConfig
from ..config.defaults import FALLBACK_USER_MESSAGE, UPSTREAM_USER_AGENT

_logger = get_logger("chatbridge.upstream")

# Upstream error bodies can be whole HTML pages; keep log lines bounded.
_MAX_LOGGED_BODY_CHARS = 2000


def flatten_content(content: Any) -> str:
    """Return a plain-text view of a message ``content`` value.

    Strings are returned unchanged. Lists of content parts are flattened to
    their ``text`` values joined by newlines; parts without text are skipped.
    ``None`` becomes an empty string and any other value is stringified.
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts: List[str] = []
        for part in content:
            if isinstance(part, str):
                texts.append(part)
            elif isinstance(part, Mapping) and isinstance(part.get("text"), str):
                texts.append(part["text"])
        return "\n".join(texts)
    return str(content)


def latest_user_message(messages: Iterable[Mapping[str, Any]]) -> str:
    """Return the text of the last ``user`` message, or the fallback greeting."""
    last: Optional[Mapping[str, Any]] = None
    for message in messages:
        if message.get("role") == "user":
            last = message
    if last is None:
        return FALLBACK_USER_MESSAGE
    return flatten_content(last.get("content"))


def build_upstream_payload(messages: Iterable[Mapping[str, Any]], model: str) -> Dict[str, Any]:
    """Build the upstream JSON body for one chat request."""
    return {
        "message": latest_user_message(messages),
        "modelIds": [model],
        "deepSearchEnabled": False,
    }


def build_upstream_headers(config: GatewayConfig, request_id: str) -> Dict[str, str]:
    """Headers making the call look like the upstream's own web client."""
    return {
        "Content-Type": "application/json",
        "Accept": "*/*",
        "Origin": config.upstream_origin,
        "Referer": config.upstream_referer,
        "User-Agent": UPSTREAM_USER_AGENT,
        "X-Request-ID": request_id,
    }


class UpstreamClient:
    """Thin wrapper around a shared ``httpx.Client`` bound to one config."""

    def __init__(self, config: GatewayConfig, http_client: httpx.Client) -> None:
        self._config = config
        self._http = http_client

    def open_chat(
        self,
        payload: Dict[str, Any],
        *,
        request_id: str,
        ctx: Optional[LogContext] = None,
    ) -> httpx.Response:
        """POST ``payload`` upstream and return the open streaming response.

        The caller owns the returned response and must close it (iterate it
        fully, call ``read()`` or ``close()``).

        Raises:
            GatewayError: ``upstream_error`` when the upstream status is not 2xx.
            httpx.TransportError: When the upstream cannot be reached.
        """
        request = self._http.build_request(
            "POST",
            self._config.upstream_url,
            json=payload,
            headers=build_upstream_headers(self._config, request_id),
        )
        log_event(_logger, "upstream.request", ctx, url=self._config.upstream_url)
        response = self._http.send(request, stream=True)
        if response.is_success:
            return response
        try:
            body = response.read().decode("utf-8", errors="replace")
        finally:
            response.close()
        log_event(
            _logger,
            "upstream.error",
            ctx,
            level=logging.ERROR,
            status=response.status_code,
            body=body[:_MAX_LOGGED_BODY_CHARS],
        )
        raise upstream_error(response.status_code)


__all__ = [
    "flatten_content",
    "latest_user_message",
    "build_upstream_payload",
    "build_upstream_headers",
    "UpstreamClient",
]
