"""
Custom exceptions for the chat relay.

Each exception carries the HTTP status code and a message that is safe to show
to the caller. Provider payloads and tracebacks stay in the server logs.
"""
from typing import Optional

from fastapi import status


class BizBotError(Exception):
    """Base exception for all BizBot errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the JSON error envelope."""
        return {"success": False, "error": self.message}


class AuthenticationError(BizBotError):
    """Raised when no caller identity could be resolved."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class ValidationError(BizBotError):
    """Raised when the request body is unusable."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Message is required"


class ConfigurationError(BizBotError):
    """Raised when the deployment is missing required configuration."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "OpenAI API key is missing"


class UpstreamError(BizBotError):
    """Raised when the completion provider fails or returns nothing usable."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "OpenAI API request failed. Check server logs."


class UnknownError(BizBotError):
    """Any other failure while generating a reply."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to generate response"
