"""API module for the proxy."""

from .routes import error_response_for, health, messages_endpoint

__all__ = [
    "error_response_for",
    "health",
    "messages_endpoint",
]
