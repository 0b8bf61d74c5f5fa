"""Core module initialization."""

from .exceptions import (
    MalformedToolArgumentsError,
    MissingCredentialError,
    ProxyError,
    UpstreamError,
    ValidationError,
)
from .upstream import GroqClient, format_httpx_error

__all__ = [
    "GroqClient",
    "MalformedToolArgumentsError",
    "MissingCredentialError",
    "ProxyError",
    "UpstreamError",
    "ValidationError",
    "format_httpx_error",
]
