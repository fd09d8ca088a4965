"""Core building blocks shared by the service layer.

Contains the upstream event vocabulary, the client-dialect DTOs, the
streaming/aggregate transcoders, the error taxonomy, logging helpers and the
pooled HTTP client.
"""
