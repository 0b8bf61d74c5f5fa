"""Anthropic Messages translation helpers.

Provides translation between Anthropic Messages API format and the flat
OpenAI Chat Completions format, enabling the proxy to route Anthropic-format
requests to Groq.
"""

from .constants import (
    GROQ_BASE_URL,
    GROQ_MAX_OUTPUT_TOKENS,
    GROQ_MODEL,
    generate_message_id,
)
from .translator import (
    build_chat_request,
    build_messages_response,
    cap_max_tokens,
    convert_messages,
    convert_tool_calls,
    convert_tools,
)

__all__ = [
    "GROQ_BASE_URL",
    "GROQ_MAX_OUTPUT_TOKENS",
    "GROQ_MODEL",
    "build_chat_request",
    "build_messages_response",
    "cap_max_tokens",
    "convert_messages",
    "convert_tool_calls",
    "convert_tools",
    "generate_message_id",
]
