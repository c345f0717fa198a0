"""
Common schemas shared across API endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Failure envelope."""

    success: bool = False
    message: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Underlying store error, on 500s")


class MessageResponse(BaseModel):
    """Success envelope carrying only a message."""

    success: bool = True
    message: str
