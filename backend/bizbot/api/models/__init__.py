from .chat import BusinessData, ChatRequest, ChatResponse
from .error import ErrorResponse

__all__ = [
    "BusinessData",
    "ErrorResponse",
    "ChatRequest",
    "ChatResponse",
]
