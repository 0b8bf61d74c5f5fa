"""Anthropic-compatible Messages API endpoint."""

import json
import logging
import time
import uuid
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from ...config_loader import ProxySettings
from ...core import (
    GroqClient,
    MalformedToolArgumentsError,
    MissingCredentialError,
    UpstreamError,
    ValidationError,
)
from ...messages import build_chat_request, build_messages_response
from ...types import parse_messages_request

logger = logging.getLogger("groq-proxy")

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _anthropic_error_response(
    message: str,
    *,
    error_type: str = "invalid_request_error",
    status_code: int = 400,
) -> JSONResponse:
    payload = {"type": "error", "error": {"type": error_type, "message": message}}
    return JSONResponse(payload, status_code=status_code)


def error_response_for(exc: Exception) -> JSONResponse:
    """Map a failure to exactly one Anthropic error body and status code."""
    if isinstance(exc, (ValidationError, MissingCredentialError, MalformedToolArgumentsError)):
        return _anthropic_error_response(exc.message)
    if isinstance(exc, UpstreamError) and exc.message:
        return _anthropic_error_response(exc.message)
    return _anthropic_error_response(
        GENERIC_ERROR_MESSAGE,
        error_type="internal_server_error",
        status_code=500,
    )


async def _read_payload(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Invalid JSON payload: {exc}") from exc


async def _translate_and_forward(
    request: Request, settings: ProxySettings, req_id: str
) -> dict[str, Any]:
    api_key = settings.resolve_api_key()

    payload = await _read_payload(request)
    model_hint = payload.get("model") if isinstance(payload, dict) else None
    logger.info(f"[{req_id}] Anthropic -> Groq | Model: {model_hint}")

    messages_request = parse_messages_request(payload)
    if messages_request.stream:
        logger.debug(f"[{req_id}] stream=true requested; answering non-streamed")

    chat_body = build_chat_request(
        messages_request,
        model=settings.model,
        max_output_tokens=settings.max_output_tokens,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"[{req_id}] Translated to OpenAI format: model={chat_body['model']}, "
            f"messages_count={len(chat_body['messages'])}, "
            f"tools_count={len(chat_body.get('tools', []))}"
        )

    client = GroqClient(
        settings.base_url,
        api_key,
        timeout=settings.request_timeout,
        transport=getattr(request.app.state, "upstream_transport", None),
    )
    completion = await client.create_chat_completion(chat_body)
    return build_messages_response(completion, model_label=settings.model_label)


async def messages_endpoint(request: Request) -> Response:
    """POST /v1/messages - Anthropic Messages API compatible endpoint."""
    # Generate request ID for log correlation
    req_id = uuid.uuid4().hex[:8]
    start_time = time.perf_counter()
    settings: ProxySettings = request.app.state.settings

    try:
        envelope = await _translate_and_forward(request, settings, req_id)
    except ClientDisconnect:
        elapsed = time.perf_counter() - start_time
        logger.warning(f"[{req_id}] ClientDisconnect after {elapsed:.3f}s")
        return Response(status_code=499)  # Client Closed Request
    except (ValidationError, MissingCredentialError, MalformedToolArgumentsError, UpstreamError) as exc:
        elapsed = time.perf_counter() - start_time
        logger.error(
            f"[{req_id}] {exc.__class__.__name__} after {elapsed:.3f}s: {exc.message}"
        )
        return error_response_for(exc)
    except Exception as exc:
        logger.exception(f"[{req_id}] Unexpected proxy error")
        return error_response_for(exc)

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"[{req_id}] Completed response {envelope['id']}, "
        f"stop_reason={envelope['stop_reason']}, took {elapsed:.3f}s"
    )
    return JSONResponse(envelope)
