"""Anthropic <-> OpenAI Messages translation.

This module translates between Anthropic Messages API format and the flat
OpenAI Chat Completions format served by Groq.

Key mappings:
- Anthropic content blocks -> one newline-joined string per message
- Anthropic tool_use blocks -> "[Tool Use: name] {json}" lines
- Anthropic tool_result blocks -> "<tool_result>{json}</tool_result>" lines
- Anthropic tools -> OpenAI function tools
- OpenAI tool_calls -> Anthropic tool_use blocks

The destination format has no structured slot for ``tool_use_id``, so tool
results are flattened without it. The upstream model can only pair results
with calls from conversation order.

Reference:
- Anthropic Messages API: https://docs.anthropic.com/en/api/messages
- OpenAI Chat Completions: https://platform.openai.com/docs/api-reference/chat
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping, Optional, Sequence, Union

from ..core.exceptions import MalformedToolArgumentsError, UpstreamError
from ..types.chat import (
    AnthropicContentBlock,
    AnthropicMessage,
    AnthropicToolUseBlock,
    ChatCompletionRequest,
    FlatMessage,
    FunctionTool,
    ToolCall,
)
from ..types.messages import (
    ContentBlock,
    Message,
    MessagesRequest,
    TextBlock,
    ToolDeclaration,
    ToolResultBlock,
    ToolUseBlock,
)
from .constants import GROQ_MAX_OUTPUT_TOKENS, GROQ_MODEL, generate_message_id

logger = logging.getLogger("groq-proxy")


def _js_numbers(value: Any) -> Any:
    """Rewrite floats the way JSON.stringify prints them.

    Integral floats below 1e21 print without a fraction (``1.0`` -> ``1``) and
    non-finite floats become ``null``.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_js_numbers(item) for item in value]
    return value


def _compact_json(value: Any) -> str:
    return json.dumps(_js_numbers(value), separators=(",", ":"), ensure_ascii=False)


def _malformed_completion(detail: str) -> UpstreamError:
    return UpstreamError(f"Groq API returned a malformed completion: {detail}")


def _flatten_block(block: ContentBlock) -> str:
    if isinstance(block, TextBlock):
        return block.text
    if isinstance(block, ToolUseBlock):
        return f"[Tool Use: {block.name}] {_compact_json(block.input)}"
    if isinstance(block, ToolResultBlock):
        # tool_use_id has nowhere to go in the flat format
        logger.debug(
            "Tool result for %s: %s", block.tool_use_id, _compact_json(block.content)
        )
        return f"<tool_result>{_compact_json(block.content)}</tool_result>"
    raise TypeError(f"Unsupported content block: {type(block).__name__}")


def convert_messages(messages: Sequence[Message]) -> list[FlatMessage]:
    """Convert Anthropic messages to flat OpenAI messages, preserving order.

    String content passes through untouched. Block content becomes one line per
    block, joined with newlines. Roles are never remapped.
    """
    converted: list[FlatMessage] = []
    for message in messages:
        if isinstance(message.content, str):
            converted.append({"role": message.role, "content": message.content})
            continue
        lines = [_flatten_block(block) for block in message.content]
        converted.append({"role": message.role, "content": "\n".join(lines)})
    return converted


def convert_tools(tools: Sequence[ToolDeclaration]) -> list[FunctionTool]:
    """Convert Anthropic tools to OpenAI format.

    Anthropic: {"name": "...", "description": "...", "input_schema": {...}}
    OpenAI: {"type": "function", "function": {"name": "...", "description": "...", "parameters": {...}}}

    Order is kept and duplicate names are passed through as-is.
    """
    return [
        {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description or "",
                "parameters": tool.input_schema,
            },
        }
        for tool in tools
    ]


def convert_tool_calls(tool_calls: Sequence[ToolCall]) -> list[AnthropicToolUseBlock]:
    """Convert OpenAI tool calls back to Anthropic tool_use blocks.

    Raises:
        MalformedToolArgumentsError: if any call's arguments are not valid
            JSON. Arguments are never guessed.
        UpstreamError: if a call or its ``function`` is not an object.
    """
    blocks: list[AnthropicToolUseBlock] = []
    for index, call in enumerate(tool_calls):
        if not isinstance(call, Mapping):
            raise _malformed_completion(f"tool_calls[{index}] is not an object")
        call_id = call.get("id", "")
        function = call.get("function") or {}
        if not isinstance(function, Mapping):
            raise _malformed_completion(f"tool_calls[{index}].function is not an object")
        name = function.get("name", "")
        raw_arguments = function.get("arguments")
        try:
            arguments = json.loads(raw_arguments)
        except (TypeError, json.JSONDecodeError) as exc:
            raise MalformedToolArgumentsError(
                f"Tool call {call_id or '<unknown>'} ({name}) has invalid JSON arguments: {exc}",
                tool_call_id=call_id or None,
            ) from exc
        if not isinstance(arguments, dict):
            raise MalformedToolArgumentsError(
                f"Tool call {call_id or '<unknown>'} ({name}) arguments must be a JSON object",
                tool_call_id=call_id or None,
            )

        logger.info("Tool call: %s(%s)", name, _compact_json(arguments))
        blocks.append({
            "type": "tool_use",
            "id": call_id,
            "name": name,
            "input": arguments,
        })
    return blocks


def cap_max_tokens(
    requested: Optional[Union[int, float]], cap: int = GROQ_MAX_OUTPUT_TOKENS
) -> Union[int, float]:
    """Clamp the requested output budget to the upstream hard cap.

    A missing or zero request falls back to the cap itself.
    """
    effective = min(requested or cap, cap)
    if requested and requested > cap:
        logger.warning("Capping max_tokens from %s to %s", requested, cap)
    return effective


def build_chat_request(
    request: MessagesRequest,
    *,
    model: str = GROQ_MODEL,
    max_output_tokens: int = GROQ_MAX_OUTPUT_TOKENS,
) -> ChatCompletionRequest:
    """Translate a validated Messages request into a Chat Completions body.

    The caller's ``model`` is replaced by the configured upstream model.
    ``tools`` and ``tool_choice`` are only sent when tools were declared.
    """
    body: ChatCompletionRequest = {
        "model": model,
        "messages": convert_messages(request.messages),
        "temperature": request.temperature,
        "max_tokens": cap_max_tokens(request.max_tokens, max_output_tokens),
    }
    if request.tools:
        body["tools"] = convert_tools(request.tools)
        body["tool_choice"] = request.tool_choice
    return body


def build_messages_response(
    completion: Mapping[str, Any],
    *,
    model_label: str = f"groq/{GROQ_MODEL}",
) -> AnthropicMessage:
    """Translate a Chat Completions response into an Anthropic message.

    ``stop_reason`` is derived only from the presence of tool calls; the
    upstream ``finish_reason`` is ignored. When tool calls are present any
    text in the same choice is dropped.

    Raises:
        UpstreamError: if the completion has no choices or any part of it
            that is read here has the wrong shape.
        MalformedToolArgumentsError: propagated from ``convert_tool_calls``.
    """
    choices = completion.get("choices") or []
    if not isinstance(choices, list):
        raise _malformed_completion("choices is not a list")
    if not choices:
        raise UpstreamError("Groq API returned a completion without choices")
    choice = choices[0]
    if not isinstance(choice, Mapping):
        raise _malformed_completion("choices[0] is not an object")
    message = choice.get("message") or {}
    if not isinstance(message, Mapping):
        raise _malformed_completion("choices[0].message is not an object")

    tool_calls = message.get("tool_calls")
    content: list[AnthropicContentBlock]
    if tool_calls:
        if not isinstance(tool_calls, list):
            raise _malformed_completion("tool_calls is not a list")
        content = list(convert_tool_calls(tool_calls))
        stop_reason = "tool_use"
    else:
        text = message.get("content") or ""
        if not isinstance(text, str):
            raise _malformed_completion("message content is not a string")
        content = [{"type": "text", "text": text}]
        stop_reason = "end_turn"

    usage = completion.get("usage") or {}
    if not isinstance(usage, Mapping):
        raise _malformed_completion("usage is not an object")
    return {
        "id": generate_message_id(),
        "type": "message",
        "role": "assistant",
        "model": model_label,
        "content": content,
        "stop_reason": stop_reason,
        "stop_sequence": None,
        "usage": {
            "input_tokens": usage.get("prompt_tokens") or 0,
            "output_tokens": usage.get("completion_tokens") or 0,
        },
    }
