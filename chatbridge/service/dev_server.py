from __future__ import annotations

import uvicorn

from chatbridge.base.logging import get_logger, log_event
from chatbridge.config import load_config


def main() -> None:
    """Start the gateway with uvicorn.

    Host and port come from the same configuration the app uses (``HOST``,
    ``PORT``); the app itself is built through the ``get_app`` factory so the
    configuration is read once at process start.
    """
    config = load_config()
    log_event(
        get_logger("chatbridge.server"),
        "server.start",
        url=f"http://{config.host}:{config.port}",
        models=len(config.models),
        completion_policy=config.completion_policy.value,
    )
    uvicorn.run(
        "chatbridge.service.app:get_app",
        factory=True,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
