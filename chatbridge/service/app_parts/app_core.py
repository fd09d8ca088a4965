from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

from fastapi import Request
from pydantic import BaseModel, ConfigDict

from chatbridge.config import GatewayConfig
from chatbridge.upstream import UpstreamClient

REQUEST_ID_PREFIX = "chatcmpl-"


class ChatMessage(BaseModel):
    """A single chat message with a role and content.

    Content is left untyped: plain strings and lists of content parts are
    both accepted and flattened when the upstream payload is built.
    """

    model_config = ConfigDict(extra="allow")

    role: str
    content: Any = None


class ChatCompletionBody(BaseModel):
    """Body of ``POST /v1/chat/completions``.

    Unknown sampling parameters (temperature, max_tokens, ...) are accepted
    and ignored; the upstream has no equivalent for them.
    """

    model_config = ConfigDict(extra="allow")

    model: Optional[str] = None
    messages: List[ChatMessage] = []
    stream: Any = False

    @property
    def wants_stream(self) -> bool:
        """Streaming is used only when the client sent a JSON ``true``."""
        return self.stream is True

    def resolve_model(self, config: GatewayConfig) -> str:
        return self.model or config.default_model

    def message_dicts(self) -> List[Dict[str, Any]]:
        return [m.model_dump() for m in self.messages]


def new_request_id() -> str:
    """Return a fresh ``chatcmpl-<uuid4>`` identifier."""
    return f"{REQUEST_ID_PREFIX}{uuid.uuid4()}"


def get_config(request: Request) -> GatewayConfig:
    """FastAPI dependency returning the app's immutable configuration."""
    return request.app.state.config


def get_upstream_client(request: Request) -> UpstreamClient:
    """FastAPI dependency returning the app's upstream client."""
    return request.app.state.upstream


__all__ = [
    "REQUEST_ID_PREFIX",
    "ChatMessage",
    "ChatCompletionBody",
    "new_request_id",
    "get_config",
    "get_upstream_client",
]
