"""chatbridge.config.defaults
==========================

Central place for small, stable default values used by the gateway. These
defaults can be overridden via environment variables or a ``.env`` file but
provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other chatbridge packages to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----
DEFAULT_HOST = "0.0.0.0"  # nosec B104 - gateway is meant to be reachable
DEFAULT_PORT = 3000
# Shared secret expected in ``Authorization: Bearer <secret>``.
DEFAULT_SHARED_SECRET = "1"  # pragma: allowlist secret - development default
DEFAULT_OWNED_BY = "chatbridge"
DEFAULT_LOG_LEVEL = "INFO"

# ---- Upstream chat service ----
DEFAULT_UPSTREAM_URL = "https://www.gptanon.com/api/chat/stream"
DEFAULT_UPSTREAM_ORIGIN = "https://www.gptanon.com"
UPSTREAM_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36"
)
# Message forwarded when the client sent no user turn at all.
FALLBACK_USER_MESSAGE = "Hello"

# ---- Model catalog ----
DEFAULT_MODELS = (
    "openai/gpt-5.1-chat",
    "x-ai/grok-4.1-fast",
    "x-ai/grok-3-mini",
    "deepseek/deepseek-prover-v2",
    "openai/gpt-4.1",
    "openai/o1-pro",
    "google/gemini-2.0-flash-001",
    "perplexity/sonar-reasoning",
    "perplexity/sonar",
    "perplexity/sonar-deep-research",
)
DEFAULT_MODEL = "x-ai/grok-4.1-fast"


__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_SHARED_SECRET",
    "DEFAULT_OWNED_BY",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_UPSTREAM_URL",
    "DEFAULT_UPSTREAM_ORIGIN",
    "UPSTREAM_USER_AGENT",
    "FALLBACK_USER_MESSAGE",
    "DEFAULT_MODELS",
    "DEFAULT_MODEL",
]
