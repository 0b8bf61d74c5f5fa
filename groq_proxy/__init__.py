"""groq-proxy - Anthropic Messages API on top of Groq

A small proxy that accepts Anthropic-format ``/v1/messages`` requests,
flattens them into OpenAI chat completions for Groq, and translates the
completion (including tool calls) back into an Anthropic message.

Example:
    >>> from groq_proxy import create_app
    >>> import uvicorn
    >>> uvicorn.run(create_app(), host="0.0.0.0", port=8000)
"""

from .config_loader import ProxySettings, load_config
from .core import (
    GroqClient,
    MalformedToolArgumentsError,
    MissingCredentialError,
    ProxyError,
    UpstreamError,
    ValidationError,
)
from .logging import logger, setup_logging
from .main import create_app

__all__ = [
    "GroqClient",
    "MalformedToolArgumentsError",
    "MissingCredentialError",
    "ProxyError",
    "ProxySettings",
    "UpstreamError",
    "ValidationError",
    "create_app",
    "load_config",
    "logger",
    "setup_logging",
]
