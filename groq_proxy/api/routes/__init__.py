"""API routes for the proxy."""

from .health import health
from .messages import error_response_for, messages_endpoint

__all__ = [
    "error_response_for",
    "health",
    "messages_endpoint",
]
