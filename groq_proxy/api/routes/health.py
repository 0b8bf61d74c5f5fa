"""Liveness endpoint."""

HEALTH_MESSAGE = "Groq Anthropic Tool Proxy is alive"


async def health() -> dict:
    """GET / - static acknowledgement, no business logic."""
    return {"message": HEALTH_MESSAGE}
