"""Wire types for both sides of the proxy.

Types are separated into:
- OpenAI-compatible types: the flat chat-completion format sent to Groq
- Anthropic types: the message envelope returned to the caller

Inbound Anthropic requests are validated separately by the pydantic models in
``groq_proxy.types.messages``.
"""

from typing import Any, Union
from typing_extensions import Literal, TypedDict


# =============================================================================
# OpenAI-Compatible Types
# =============================================================================
# These types follow the OpenAI API format used by Groq's chat completions
# endpoint.


class FlatMessage(TypedDict):
    """A message in a chat conversation (OpenAI format).

    Block-structured Anthropic content is always serialized into a single
    string before it lands here.

    Attributes:
        role: "user", "assistant" or "system".
        content: Text content of the message.
    """
    role: str
    content: str


class FunctionDefinition(TypedDict):
    """A function declaration inside a function tool."""
    name: str
    description: str
    parameters: dict[str, Any]


class FunctionTool(TypedDict):
    """A tool declared to the upstream (OpenAI format)."""
    type: Literal["function"]
    function: FunctionDefinition


class FunctionCall(TypedDict, total=False):
    """A function call within a tool call (OpenAI format).

    Attributes:
        name: Name of the function to call.
        arguments: JSON string containing the arguments to pass to the
            function. Note this is a string, not a mapping.
    """
    name: str
    arguments: str


class ToolCall(TypedDict, total=False):
    """A tool call in a chat response (OpenAI format).

    Attributes:
        id: Unique identifier for this tool call.
        type: Type of tool call. Typically "function".
        function: The function to call with its arguments.
    """
    id: str
    type: str
    function: FunctionCall


class ChatMessage(TypedDict, total=False):
    """The assistant message of a completion choice."""
    role: str
    content: str | None
    tool_calls: list[ToolCall] | None


class Choice(TypedDict, total=False):
    """A choice in a chat completion response (OpenAI format).

    Attributes:
        index: Zero-based index of this choice in the choices array.
        message: The complete message for non-streaming responses.
        finish_reason: Reason why the model stopped generating. Reported by
            the upstream but not used to derive ``stop_reason``.
    """
    index: int
    message: ChatMessage
    finish_reason: str | None


class Usage(TypedDict, total=False):
    """Token usage information from a completion response (OpenAI format)."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


class ChatCompletionRequest(TypedDict, total=False):
    """The body posted to ``/chat/completions``."""
    model: str
    messages: list[FlatMessage]
    temperature: float
    max_tokens: Union[int, float]
    tools: list[FunctionTool]
    tool_choice: str | dict[str, Any]


class ChatCompletionResponse(TypedDict, total=False):
    """A complete (non-streaming) chat completion response (OpenAI format)."""
    id: str
    object: str
    created: int
    model: str
    choices: list[Choice]
    usage: Usage | None


# =============================================================================
# Anthropic Types
# =============================================================================
# The envelope handed back to the caller of /v1/messages.


class AnthropicTextBlock(TypedDict):
    type: Literal["text"]
    text: str


class AnthropicToolUseBlock(TypedDict):
    type: Literal["tool_use"]
    id: str
    name: str
    input: dict[str, Any]


AnthropicContentBlock = Union[AnthropicTextBlock, AnthropicToolUseBlock]


class AnthropicUsage(TypedDict):
    """Token usage information in Anthropic format."""
    input_tokens: int
    output_tokens: int


class AnthropicMessage(TypedDict):
    """A message in Anthropic Claude format.

    Attributes:
        id: Freshly generated message identifier (never the upstream's).
        type: Always "message".
        role: Always "assistant".
        content: Text block or tool_use blocks.
        model: Model label reported to the caller.
        stop_reason: Why generation stopped:
            - "end_turn": No tool calls were requested
            - "tool_use": The model wants to use a tool
            - "max_tokens" / "stop_sequence": Declared but never produced
        stop_sequence: Always None.
        usage: Token usage information.
    """
    id: str
    type: Literal["message"]
    role: Literal["assistant"]
    content: list[AnthropicContentBlock]
    model: str
    stop_reason: Literal["tool_use", "end_turn", "max_tokens", "stop_sequence"]
    stop_sequence: str | None
    usage: AnthropicUsage
