"""Type definitions for the proxy."""

from .chat import (
    AnthropicContentBlock,
    AnthropicMessage,
    AnthropicTextBlock,
    AnthropicToolUseBlock,
    AnthropicUsage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    Choice,
    FlatMessage,
    FunctionCall,
    FunctionDefinition,
    FunctionTool,
    ToolCall,
    Usage,
)
from .messages import (
    ContentBlock,
    Message,
    MessagesRequest,
    TextBlock,
    ToolDeclaration,
    ToolResultBlock,
    ToolUseBlock,
    parse_messages_request,
)

__all__ = [
    "AnthropicContentBlock",
    "AnthropicMessage",
    "AnthropicTextBlock",
    "AnthropicToolUseBlock",
    "AnthropicUsage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "ChatMessage",
    "Choice",
    "ContentBlock",
    "FlatMessage",
    "FunctionCall",
    "FunctionDefinition",
    "FunctionTool",
    "Message",
    "MessagesRequest",
    "TextBlock",
    "ToolCall",
    "ToolDeclaration",
    "ToolResultBlock",
    "ToolUseBlock",
    "Usage",
    "parse_messages_request",
]
