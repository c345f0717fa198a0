"""
Review-related Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Request to add a review. Required fields are checked by the handler."""

    username: Optional[str] = None
    review: Optional[str] = None
    rating: Optional[float] = None


class ReviewResponse(BaseModel):
    """A stored review."""

    id: str = Field(..., alias="_id")
    movie_id: str = Field(..., alias="movieId")
    username: Optional[str] = None
    review: Optional[str] = None
    rating: Optional[float] = None

    class Config:
        populate_by_name = True


class ReviewEnvelope(BaseModel):
    """Envelope around a created review."""

    success: bool = True
    message: Optional[str] = None
    review: ReviewResponse
