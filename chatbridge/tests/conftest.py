"""Pytest fixtures for the gateway test suite.

Upstream calls never leave the process: ``make_client`` builds the FastAPI app
around an ``httpx.Client`` backed by ``httpx.MockTransport`` so each test
supplies its own upstream behavior.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from chatbridge.base.logging import get_logger
from chatbridge.config import GatewayConfig
from chatbridge.service.app import create_app

TEST_SECRET = "sk-test-secret"  # pragma: allowlist secret - test stub

UpstreamHandler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture()
def gateway_config() -> GatewayConfig:
    return GatewayConfig(
        shared_secret=TEST_SECRET,
        upstream_url="https://upstream.test/api/chat/stream",
        upstream_origin="https://upstream.test",
        models=("alpha/one", "beta/two", "gamma/three"),
        default_model="beta/two",
        owned_by="chatbridge-tests",
    )


@pytest.fixture()
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {TEST_SECRET}"}


@pytest.fixture()
def make_client(gateway_config: GatewayConfig) -> Iterator[Callable[..., TestClient]]:
    """Factory returning a ``TestClient`` whose upstream is ``handler``."""
    http_clients: List[httpx.Client] = []

    def _make(handler: UpstreamHandler, config: Optional[GatewayConfig] = None) -> TestClient:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        http_clients.append(http)
        return TestClient(create_app(config or gateway_config, http_client=http))

    yield _make
    for http in http_clients:
        http.close()


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Capture records reaching the shared ``chatbridge`` logger."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = records.append  # type: ignore[method-assign]
    base = get_logger()
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)


def _events(records: List[logging.LogRecord]) -> List[dict]:
    out = []
    for record in records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict):
            out.append(payload)
    return out


@pytest.fixture()
def logged_events() -> Callable[[List[logging.LogRecord]], List[dict]]:
    """Decode structured ``log_event`` payloads from captured records."""
    return _events


@pytest.fixture()
def parse_sse() -> Callable[[str], List[str]]:
    """Split an SSE body into the payloads of its ``data:`` frames."""

    def _parse(body: str) -> List[str]:
        frames = [frame for frame in body.split("\n\n") if frame]
        assert all(frame.startswith("data: ") for frame in frames)  # nosec B101
        return [frame[len("data: "):] for frame in frames]

    return _parse
