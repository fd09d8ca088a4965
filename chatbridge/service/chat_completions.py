from __future__ import annotations

"""
Chat completion handling for the gateway.

Purpose
-------
Serve ``POST /v1/chat/completions`` by forwarding the latest user message
upstream and transcoding the upstream's event stream into either an SSE
stream of ``chat.completion.chunk`` objects or one ``chat.completion``.

Fallback semantics
------------------
- Upstream non-2xx: ``upstream_error`` with the upstream status, before any
  byte is streamed to the client.
- Unreachable upstream or any other failure before the response starts:
  ``internal_server_error`` (500).
- Transport failure after streaming started: logged, then the stream is
  closed with the ``data: [DONE]`` sentinel so the client terminates cleanly.

Timeout strategy
----------------
No timeouts are enforced here; the pooled client uses the configured
``upstream_timeout_seconds`` (unbounded by default).
"""

import logging
from typing import Iterator

import httpx
from fastapi.responses import JSONResponse, Response, StreamingResponse

from chatbridge.base.errors import classify_exception
from chatbridge.base.logging import LogContext, get_logger, log_event
from chatbridge.base.streaming import StreamTranscoder, transcode_aggregate
from chatbridge.config import GatewayConfig
from chatbridge.service.app_parts.app_core import ChatCompletionBody, new_request_id
from chatbridge.upstream import UpstreamClient, build_upstream_payload

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}

_logger = get_logger("chatbridge.service.chat")


def _iter_stream(
    upstream_response: httpx.Response,
    transcoder: StreamTranscoder,
    ctx: LogContext,
) -> Iterator[bytes]:
    """Yield SSE frames while reading the upstream body incrementally."""
    try:
        yield from transcoder.iter_sse(upstream_response.iter_bytes())
    except httpx.HTTPError as exc:
        log_event(
            _logger,
            "stream.upstream_error",
            ctx,
            level=logging.ERROR,
            error=str(exc) or exc.__class__.__name__,
        )
        yield from transcoder.close()
    finally:
        upstream_response.close()


def handle_chat_completion(
    body: ChatCompletionBody,
    config: GatewayConfig,
    upstream: UpstreamClient,
) -> Response:
    """Execute one chat completion request.

    Raises:
        GatewayError: ``upstream_error`` or ``internal_server_error``; rendered
            by the app's exception handlers.
    """
    request_id = new_request_id()
    model = body.resolve_model(config)
    ctx = LogContext(request_id=request_id, model=model, path="/v1/chat/completions")

    try:
        payload = build_upstream_payload(body.message_dicts(), model)
        upstream_response = upstream.open_chat(payload, request_id=request_id, ctx=ctx)
    except Exception as exc:
        raise classify_exception(exc) from exc

    if body.wants_stream:
        transcoder = StreamTranscoder(
            response_id=request_id,
            model=model,
            policy=config.completion_policy,
            ctx=ctx,
        )
        return StreamingResponse(
            _iter_stream(upstream_response, transcoder, ctx),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )

    try:
        raw = upstream_response.read()
        result = transcode_aggregate(
            raw,
            response_id=request_id,
            model=model,
            policy=config.completion_policy,
        )
    except Exception as exc:
        raise classify_exception(exc) from exc
    finally:
        upstream_response.close()
    log_event(_logger, "aggregate.complete", ctx, answer_chars=len(result.content))
    return JSONResponse(content=result.to_dict())


__all__ = ["SSE_HEADERS", "handle_chat_completion"]
