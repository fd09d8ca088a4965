"""Building blocks for the FastAPI app (models, dependencies, HTTP helpers)."""
