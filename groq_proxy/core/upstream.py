"""HTTP client for Groq's OpenAI-compatible chat completions endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from ..types.chat import ChatCompletionRequest, ChatCompletionResponse
from .exceptions import UpstreamError

logger = logging.getLogger("groq-proxy")

DEFAULT_TIMEOUT = 60.0


def format_httpx_error(exc: httpx.HTTPError, timeout: Optional[float] = None) -> str:
    """Produce a detailed, user-facing description of an httpx error."""
    parts = [exc.__class__.__name__]
    message = str(exc).strip()
    if message:
        parts.append(message)

    try:
        request = exc.request
    except RuntimeError:
        request = None
    if request is not None:
        parts.append(f"request={request.method} {request.url}")

    if isinstance(exc, httpx.TimeoutException) and timeout:
        parts.append(f"timeout={timeout}s")

    return "; ".join(parts)


def _extract_error_message(resp: httpx.Response) -> Optional[str]:
    """Pull ``error.message`` out of an OpenAI-style error body, if present."""
    try:
        payload = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = resp.text.strip()
        return text or None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
    return None


class GroqClient:
    """Posts translated requests to the upstream and returns the raw completion.

    One call, one request: no retries, no streaming.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept-Encoding": "identity",
        }

    async def create_chat_completion(
        self, body: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        """Send a chat completion request.

        Raises:
            UpstreamError: on transport failures, non-2xx statuses, or a body
                that is not a JSON object.
        """
        url = self.completions_url
        content = json.dumps(body, ensure_ascii=False).encode("utf-8")
        logger.debug(f"Executing request to {url} with timeout {self.timeout}s")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(url, headers=self._headers(), content=content)
        except httpx.HTTPError as exc:
            detail = format_httpx_error(exc, self.timeout)
            logger.error("Groq request error: %s", detail)
            raise UpstreamError(f"Groq request error: {detail}") from exc

        logger.debug(f"Received response from {url}: status {resp.status_code}")

        if resp.status_code >= 400:
            message = _extract_error_message(resp)
            logger.error(
                "Groq returned status %s: %s", resp.status_code, message or "<no message>"
            )
            raise UpstreamError(
                message or f"Groq API returned status {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload: Any = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise UpstreamError(f"Groq API returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise UpstreamError("Groq API returned a non-object response body")
        return payload
