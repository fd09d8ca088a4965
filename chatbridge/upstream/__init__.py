"""Upstream chat service client."""

from .client import (
    UpstreamClient,
    build_upstream_headers,
    build_upstream_payload,
    flatten_content,
    latest_user_message,
)

__all__ = [
    "UpstreamClient",
    "build_upstream_headers",
    "build_upstream_payload",
    "flatten_content",
    "latest_user_message",
]
