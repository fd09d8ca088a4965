from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import Response

from chatbridge import __version__
from chatbridge.base.http import close_all_clients, get_httpx_client
from chatbridge.base.logging import configure_logger
from chatbridge.base.models import ModelList
from chatbridge.config import GatewayConfig, load_config
from chatbridge.upstream import UpstreamClient

from .app_parts.app_core import (
    ChatCompletionBody,
    get_config,
    get_upstream_client,
)
from .app_parts.http_helpers import gateway_middleware, register_exception_handlers
from .chat_completions import handle_chat_completion

router = APIRouter()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get("/health")
def health() -> Dict[str, Any]:
    """Liveness probe; not behind auth."""
    return {"ok": True}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


@router.get("/v1/models")
def list_models(config: GatewayConfig = Depends(get_config)) -> Dict[str, Any]:
    """Return the statically configured model catalog in configured order."""
    catalog = ModelList.from_ids(
        config.models, created=int(time.time()), owned_by=config.owned_by
    )
    return catalog.to_dict()


# ---------------------------------------------------------------------------
# Chat completions
# ---------------------------------------------------------------------------


@router.post("/v1/chat/completions")
def chat_completions(
    body: ChatCompletionBody,
    config: GatewayConfig = Depends(get_config),
    upstream: UpstreamClient = Depends(get_upstream_client),
) -> Response:
    """Translate a chat completion request to the upstream and back.

    Declared as a sync route so the blocking upstream call runs in the
    threadpool and never stalls the event loop.
    """
    return handle_chat_completion(body, config, upstream)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    close_all_clients()


def create_app(config: GatewayConfig, http_client: Optional[httpx.Client] = None) -> FastAPI:
    """Build the gateway application around an explicit configuration.

    Parameters:
        config: Immutable process configuration.
        http_client: Optional client for upstream calls; defaults to the
            shared pool. Tests inject one backed by ``httpx.MockTransport``.
    """
    app = FastAPI(title="chatbridge", version=__version__, lifespan=_lifespan)
    app.state.config = config
    client = http_client
    if client is None:
        client = get_httpx_client("upstream", config.upstream_timeout_seconds)
    app.state.upstream = UpstreamClient(config, client)
    app.middleware("http")(gateway_middleware)
    register_exception_handlers(app)
    app.include_router(router)
    return app


def get_app() -> FastAPI:
    """Return an app configured from the process environment (uvicorn factory)."""
    config = load_config()
    configure_logger(level=config.log_level)
    return create_app(config)


__all__ = ["router", "create_app", "get_app"]
