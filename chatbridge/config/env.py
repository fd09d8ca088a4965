"""chatbridge.config.env
=====================

Environment variable names and small parsing helpers used by
:func:`chatbridge.config.load_config`.

Design Notes
------------
- Helpers never read ``os.environ`` themselves; callers pass the mapping they
  want parsed. This keeps configuration loading a pure function of its inputs
  and lets tests supply plain dictionaries.
- Parsing is forgiving: malformed numeric values fall back to the default
  rather than preventing the process from starting.

Failure Modes
-------------
- ``read_dotenv`` returns an empty mapping when the file does not exist.
- Numeric helpers return the supplied default on unset/invalid input.
"""

from __future__ import annotations

import os
from typing import Dict, Mapping, Optional, Tuple

ENV_HOST = "HOST"
ENV_PORT = "PORT"
ENV_SHARED_SECRET = "API_MASTER_KEY"  # pragma: allowlist secret - variable name only
ENV_UPSTREAM_URL = "UPSTREAM_URL"
ENV_UPSTREAM_ORIGIN = "UPSTREAM_ORIGIN"
ENV_MODELS = "MODELS"
ENV_DEFAULT_MODEL = "DEFAULT_MODEL"
ENV_OWNED_BY = "MODELS_OWNED_BY"
ENV_COMPLETION_POLICY = "COMPLETION_POLICY"
ENV_UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "CHATBRIDGE_LOG_LEVEL"
ENV_DOTENV_FILE = "DOTENV_FILE"


def read_dotenv(path: str) -> Dict[str, str]:
    """Parse a ``.env`` file into a dictionary.

    Parses ``KEY=VALUE`` lines, ignoring comments and blank lines. Surrounding
    single or double quotes are stripped from values. No variable expansion is
    performed.

    Parameters
    ----------
    path: str
        Location of the file. A missing file yields an empty mapping.

    Returns
    -------
    Dict[str, str]
        Parsed key/value pairs in file order (later duplicates win).
    """
    values: Dict[str, str] = {}
    if not path or not os.path.isfile(path):
        return values
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            if k.startswith("export "):
                k = k[len("export "):].strip()
            v = v.strip().strip('"').strip("'")
            if k:
                values[k] = v
    return values


def get_str(env: Mapping[str, str], name: str, default: str) -> str:
    """Return a stripped, non-empty string from ``env`` or ``default``."""
    raw = env.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    return raw or default


def parse_port(value: Optional[str], default: int) -> int:
    """Best-effort parse of a port from string, falling back to a sane default."""
    if not value:
        return default
    try:
        port = int(value)
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


def parse_positive_float(value: Optional[str], default: Optional[float]) -> Optional[float]:
    """Parse a positive float; unset, invalid or non-positive values yield ``default``."""
    if not value:
        return default
    try:
        val = float(value)
    except ValueError:
        return default
    return val if val > 0 else default


def parse_csv(value: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Split a comma-separated list, dropping blanks and keeping order.

    An unset variable, or one that contains only separators, yields ``default``.
    """
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


__all__ = [
    "ENV_HOST",
    "ENV_PORT",
    "ENV_SHARED_SECRET",
    "ENV_UPSTREAM_URL",
    "ENV_UPSTREAM_ORIGIN",
    "ENV_MODELS",
    "ENV_DEFAULT_MODEL",
    "ENV_OWNED_BY",
    "ENV_COMPLETION_POLICY",
    "ENV_UPSTREAM_TIMEOUT",
    "ENV_LOG_LEVEL",
    "ENV_DOTENV_FILE",
    "read_dotenv",
    "get_str",
    "parse_port",
    "parse_positive_float",
    "parse_csv",
]
