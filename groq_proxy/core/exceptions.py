"""Core exceptions for the proxy."""

from typing import Optional


class ProxyError(Exception):
    """Base exception for proxy errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ProxyError):
    """Raised when an inbound Messages request fails schema validation."""
    pass


class MissingCredentialError(ProxyError):
    """Raised when the upstream API key is not available at request time."""
    pass


class MalformedToolArgumentsError(ProxyError):
    """Raised when an upstream tool call carries arguments that are not JSON."""

    def __init__(self, message: str, tool_call_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.tool_call_id = tool_call_id


class UpstreamError(ProxyError):
    """Raised for any failure reported by (or while talking to) the upstream API."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
