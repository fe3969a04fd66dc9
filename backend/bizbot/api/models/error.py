from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: bool = False
    error: str
