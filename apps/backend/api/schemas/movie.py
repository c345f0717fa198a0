"""
Movie-related Pydantic schemas.

Wire names are camelCase (releaseDate, imageUrl, actorName...); the
Python attributes are snake_case with aliases.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from api.schemas.review import ReviewResponse


class ActorSchema(BaseModel):
    """Actor and the character they play."""

    actor_name: Optional[str] = Field(None, alias="actorName")
    character_name: Optional[str] = Field(None, alias="characterName")

    class Config:
        populate_by_name = True


class MovieCreate(BaseModel):
    """Request to create a movie. Required fields are checked by the handler."""

    title: Optional[str] = None
    release_date: Optional[Union[int, float, str]] = Field(None, alias="releaseDate")
    genre: Optional[str] = None
    actors: Optional[List[ActorSchema]] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")

    class Config:
        populate_by_name = True

    def actor_dicts(self) -> Optional[List[dict]]:
        """Actors in stored (camelCase) form, preserving order."""
        if self.actors is None:
            return None
        return [actor.model_dump(by_alias=True) for actor in self.actors]


class MovieUpdate(MovieCreate):
    """Request to replace a movie's fields."""


class MovieResponse(BaseModel):
    """A stored movie, optionally joined with its reviews."""

    id: str = Field(..., alias="_id")
    title: Optional[str] = None
    release_date: Optional[int] = Field(None, alias="releaseDate")
    genre: Optional[str] = None
    actors: List[ActorSchema] = []
    image_url: Optional[str] = Field(None, alias="imageUrl")
    avg_rating: Optional[float] = Field(None, alias="avgRating")
    reviews: Optional[List[ReviewResponse]] = None

    class Config:
        populate_by_name = True


class MovieEnvelope(BaseModel):
    """Envelope around a single movie."""

    success: bool = True
    message: Optional[str] = None
    movie: MovieResponse
