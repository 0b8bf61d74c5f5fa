"""Main FastAPI application for the Groq proxy."""

import logging
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, messages_endpoint
from .config_loader import ProxySettings, load_config

logger = logging.getLogger("groq-proxy")


def create_app(
    settings: Optional[ProxySettings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Factory function to create the FastAPI application.

    Args:
        settings: Deployment settings. Loaded from the YAML config when omitted.
        transport: Optional httpx transport used for upstream calls (tests
            inject ``httpx.MockTransport`` here).

    Returns:
        The configured FastAPI application instance.
    """
    if settings is None:
        settings = ProxySettings.from_config(load_config())

    app = FastAPI(title="Groq Anthropic Tool Proxy")
    app.state.settings = settings
    app.state.upstream_transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.get("/")(health)
    app.post("/v1/messages")(messages_endpoint)

    logger.info(
        "Proxy configured: upstream=%s model=%s max_output_tokens=%s",
        settings.base_url,
        settings.model,
        settings.max_output_tokens,
    )
    return app


__all__ = ["create_app"]
