"""FastAPI service exposing the chat completion dialect."""
