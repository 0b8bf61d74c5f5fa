"""Schema for inbound Anthropic Messages requests."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Mapping, Optional, Union

import pydantic
from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    Tag,
)

from ..core.exceptions import ValidationError


class TextBlock(BaseModel):
    type: Literal["text"]
    text: str


class ToolUseBlock(BaseModel):
    """An assistant's request to invoke a tool."""

    type: Literal["tool_use"]
    id: str
    name: str
    input: dict[str, Any]


class ToolResultBlock(BaseModel):
    """The result of a previously requested tool invocation.

    ``tool_use_id`` should reference an earlier ``tool_use`` block, but the
    pairing is not checked.
    """

    type: Literal["tool_result"]
    tool_use_id: str
    content: Any = None


ContentBlock = Annotated[
    Union[TextBlock, ToolUseBlock, ToolResultBlock],
    Field(discriminator="type"),
]


def _content_kind(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return "text"
    if isinstance(value, (list, tuple)):
        return "blocks"
    return None


MessageContent = Annotated[
    Union[
        Annotated[str, Tag("text")],
        Annotated[list[ContentBlock], Tag("blocks")],
    ],
    Discriminator(
        _content_kind,
        custom_error_type="invalid_content",
        custom_error_message="content must be a string or a list of content blocks",
    ),
]


# Any JSON number; strings and booleans are not coerced.
Number = Union[StrictInt, StrictFloat]


class Message(BaseModel):
    role: Literal["user", "assistant"]
    content: MessageContent


class ToolDeclaration(BaseModel):
    name: str
    description: Optional[str] = None
    input_schema: dict[str, Any]


class MessagesRequest(BaseModel):
    """A validated ``POST /v1/messages`` body. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    model: str
    messages: list[Message]
    max_tokens: Number = 1024
    temperature: Number = 0.7
    stream: StrictBool = False
    tools: Optional[list[ToolDeclaration]] = None
    tool_choice: Union[str, dict[str, str]] = "auto"


def _describe_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{location}: {message}" if location else message


def parse_messages_request(payload: Any) -> MessagesRequest:
    """Validate a parsed JSON body against the Messages request schema.

    Raises:
        ValidationError: describing the first schema violation found, e.g.
            ``"messages.0.role: Input should be 'user' or 'assistant'"``.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return MessagesRequest.model_validate(payload)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        description = _describe_error(errors[0]) if errors else str(exc)
        raise ValidationError(description) from exc
