"""Pydantic schemas for API request and response validation."""

from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.movie import (
    ActorSchema,
    MovieCreate,
    MovieEnvelope,
    MovieResponse,
    MovieUpdate,
)
from api.schemas.review import ReviewCreate, ReviewEnvelope, ReviewResponse
from api.schemas.user import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "MessageResponse",
    # Movie
    "ActorSchema",
    "MovieCreate",
    "MovieEnvelope",
    "MovieResponse",
    "MovieUpdate",
    # Review
    "ReviewCreate",
    "ReviewEnvelope",
    "ReviewResponse",
    # User
    "SigninRequest",
    "SigninResponse",
    "SignupRequest",
    "SignupResponse",
]
