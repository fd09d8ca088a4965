"""Gateway configuration layer.

Goals
-----
* Build one immutable :class:`GatewayConfig` at process start and pass it
  explicitly to every component that needs it (no ambient global lookups).
* Merge sources in a predictable order:
    1. Built-in defaults (``chatbridge.config.defaults``)
    2. Optional ``.env`` file pointed to by ``DOTENV_FILE`` (default ``.env``)
    3. Process environment variables

Environment Variable Conventions
--------------------------------
PORT, HOST, API_MASTER_KEY, UPSTREAM_URL, UPSTREAM_ORIGIN, MODELS (comma
separated), DEFAULT_MODEL, MODELS_OWNED_BY, COMPLETION_POLICY
(``replace``/``append``), UPSTREAM_TIMEOUT_SECONDS, CHATBRIDGE_LOG_LEVEL.

Public API
----------
* load_config(environ: Mapping | None = None) -> GatewayConfig
* GatewayConfig, CompletionPolicy
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Tuple

from .defaults import (
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MODEL,
    DEFAULT_MODELS,
    DEFAULT_OWNED_BY,
    DEFAULT_PORT,
    DEFAULT_SHARED_SECRET,
    DEFAULT_UPSTREAM_ORIGIN,
    DEFAULT_UPSTREAM_URL,
)
from .env import (
    ENV_COMPLETION_POLICY,
    ENV_DEFAULT_MODEL,
    ENV_DOTENV_FILE,
    ENV_HOST,
    ENV_LOG_LEVEL,
    ENV_MODELS,
    ENV_OWNED_BY,
    ENV_PORT,
    ENV_SHARED_SECRET,
    ENV_UPSTREAM_ORIGIN,
    ENV_UPSTREAM_TIMEOUT,
    ENV_UPSTREAM_URL,
    get_str,
    parse_csv,
    parse_port,
    parse_positive_float,
    read_dotenv,
)


class CompletionPolicy(str, Enum):
    """How a ``complete`` upstream event relates to previously seen tokens.

    ``REPLACE``: the complete payload is the authoritative final answer and
    supersedes accumulated tokens. ``APPEND``: the payload is treated as one
    more text segment appended after the tokens.
    """

    REPLACE = "replace"
    APPEND = "append"

    @classmethod
    def parse(cls, value: Optional[str]) -> "CompletionPolicy":
        """Return the policy named by ``value`` (case-insensitive).

        Raises:
            ValueError: When ``value`` names no known policy.
        """
        if not value:
            return cls.REPLACE
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(
                f"unknown completion policy {value!r}; expected one of: {allowed}"
            ) from exc


@dataclass(frozen=True)
class GatewayConfig:
    """Immutable process configuration for the gateway.

    Attributes:
        host: Interface the dev server binds to.
        port: TCP port the dev server listens on.
        shared_secret: Bearer token every ``/v1/*`` request must present.
        upstream_url: Endpoint receiving one POST per chat request.
        upstream_origin: Value for the ``Origin`` header; ``Referer`` is
            derived as ``<origin>/chat``.
        models: Model identifiers advertised by ``GET /v1/models``, in order.
        default_model: Model used when a request omits ``model``.
        owned_by: Ownership label reported for every model.
        completion_policy: Treatment of ``complete`` events (see
            :class:`CompletionPolicy`).
        upstream_timeout_seconds: Optional HTTP timeout for upstream calls;
            ``None`` leaves the call unbounded.
        log_level: Level name applied to the base logger.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    shared_secret: str = DEFAULT_SHARED_SECRET
    upstream_url: str = DEFAULT_UPSTREAM_URL
    upstream_origin: str = DEFAULT_UPSTREAM_ORIGIN
    models: Tuple[str, ...] = field(default=DEFAULT_MODELS)
    default_model: str = DEFAULT_MODEL
    owned_by: str = DEFAULT_OWNED_BY
    completion_policy: CompletionPolicy = CompletionPolicy.REPLACE
    upstream_timeout_seconds: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def upstream_referer(self) -> str:
        return f"{self.upstream_origin.rstrip('/')}/chat"


def _merged_environment(environ: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Overlay process (or supplied) environment on top of the ``.env`` file."""
    base = dict(os.environ if environ is None else environ)
    dotenv_path = base.get(ENV_DOTENV_FILE, ".env")
    merged = read_dotenv(dotenv_path)
    merged.update(base)
    return merged


def load_config(environ: Optional[Mapping[str, str]] = None) -> GatewayConfig:
    """Build a :class:`GatewayConfig` from defaults, ``.env`` and environment.

    Parameters:
        environ: Mapping to read instead of ``os.environ`` (tests).

    Raises:
        ValueError: When ``COMPLETION_POLICY`` names an unknown policy.
    """
    env = _merged_environment(environ)
    return GatewayConfig(
        host=get_str(env, ENV_HOST, DEFAULT_HOST),
        port=parse_port(env.get(ENV_PORT), DEFAULT_PORT),
        shared_secret=get_str(env, ENV_SHARED_SECRET, DEFAULT_SHARED_SECRET),
        upstream_url=get_str(env, ENV_UPSTREAM_URL, DEFAULT_UPSTREAM_URL),
        upstream_origin=get_str(env, ENV_UPSTREAM_ORIGIN, DEFAULT_UPSTREAM_ORIGIN),
        models=parse_csv(env.get(ENV_MODELS), DEFAULT_MODELS),
        default_model=get_str(env, ENV_DEFAULT_MODEL, DEFAULT_MODEL),
        owned_by=get_str(env, ENV_OWNED_BY, DEFAULT_OWNED_BY),
        completion_policy=CompletionPolicy.parse(env.get(ENV_COMPLETION_POLICY)),
        upstream_timeout_seconds=parse_positive_float(env.get(ENV_UPSTREAM_TIMEOUT), None),
        log_level=get_str(env, ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
    )


__all__ = ["CompletionPolicy", "GatewayConfig", "load_config"]
