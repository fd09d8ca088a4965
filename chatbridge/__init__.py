"""chatbridge: chat-completion dialect gateway.

Accepts OpenAI-style chat completion requests, forwards the latest user
message to an upstream chat service, and transcodes the upstream's
``data:`` event stream back into chat completion chunks or a single
aggregate response.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
