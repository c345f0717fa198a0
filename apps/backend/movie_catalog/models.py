"""
Data models for the movie catalog.

Provides dataclasses for type-safe handling of users, movies and reviews
between the API layer and the document store.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bson import ObjectId

GENRES = [
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Fantasy",
    "Horror",
    "Mystery",
    "Thriller",
    "Western",
    "Science Fiction",
]

MIN_RELEASE_YEAR = 1900
MAX_RELEASE_YEAR = 2100


def is_valid_object_id(value: Any) -> bool:
    """Check whether a value can be used as a document identifier."""
    return ObjectId.is_valid(value)


def serialize_document(doc: Optional[dict]) -> Optional[dict]:
    """
    Convert a stored document into a JSON-friendly dict.

    ObjectId values (top level, nested dicts and lists) become hex strings.
    """
    if doc is None:
        return None
    return {key: _serialize_value(value) for key, value in doc.items()}


def _serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return serialize_document(value)
    if isinstance(value, list):
        return [_serialize_value(v) for v in value]
    return value


@dataclass
class Actor:
    """A cast entry on a movie."""

    actor_name: Optional[str] = None
    character_name: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for document insertion."""
        return {
            "actorName": self.actor_name,
            "characterName": self.character_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Actor":
        return cls(
            actor_name=data.get("actorName"),
            character_name=data.get("characterName"),
        )


@dataclass
class UserData:
    """A registered user. The password is always a bcrypt hash."""

    username: str
    password: str
    name: Optional[str] = None
    id: Optional[ObjectId] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for document insertion."""
        doc = {
            "name": self.name,
            "username": self.username,
            "password": self.password,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "UserData":
        return cls(
            id=doc.get("_id"),
            name=doc.get("name"),
            username=doc["username"],
            password=doc["password"],
        )


@dataclass
class MovieData:
    """A movie in the catalog."""

    title: str
    release_date: int
    genre: str
    actors: List[Actor] = field(default_factory=list)
    image_url: Optional[str] = None
    avg_rating: Optional[float] = None  # Static field, not the review aggregate
    id: Optional[ObjectId] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for document insertion."""
        doc: Dict[str, Any] = {
            "title": self.title,
            "releaseDate": self.release_date,
            "genre": self.genre,
            "actors": [actor.to_dict() for actor in self.actors],
        }
        if self.image_url is not None:
            doc["imageUrl"] = self.image_url
        if self.avg_rating is not None:
            doc["avgRating"] = self.avg_rating
        if self.id is not None:
            doc["_id"] = self.id
        return doc


def parse_release_year(value: Any) -> int:
    """
    Coerce a releaseDate value (number or numeric string) to a year.

    Raises:
        ValueError: If the value is missing, non-numeric, fractional or
            outside MIN_RELEASE_YEAR..MAX_RELEASE_YEAR
    """
    if value is None or isinstance(value, bool) or value == "":
        raise ValueError("A valid releaseDate is required!")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError("A valid releaseDate is required!")
    if not number.is_integer():
        raise ValueError("A valid releaseDate is required!")

    year = int(number)
    if year < MIN_RELEASE_YEAR or year > MAX_RELEASE_YEAR:
        raise ValueError(
            f"releaseDate must be between {MIN_RELEASE_YEAR} and {MAX_RELEASE_YEAR}."
        )
    return year


def movie_from_fields(
    title: Optional[str],
    release_date: Any,
    genre: Optional[str],
    actors: Optional[List[dict]],
    image_url: Optional[str] = None,
    avg_rating: Optional[float] = None,
) -> MovieData:
    """
    Validate raw movie fields and build a MovieData.

    Checks run in field order so the first problem is the one reported.

    Raises:
        ValueError: With a client-facing message for the first invalid field
    """
    if not isinstance(title, str) or not title.strip():
        raise ValueError("Title is required!")

    year = parse_release_year(release_date)

    if not isinstance(genre, str) or not genre.strip():
        raise ValueError("Genre is required!")
    if genre not in GENRES:
        raise ValueError(f"Genre must be one of: {', '.join(GENRES)}.")

    if not actors or not isinstance(actors, list):
        raise ValueError("A movie must contain at least one actor!")
    if not all(isinstance(a, dict) for a in actors):
        raise ValueError("Each actor must have an actorName and characterName.")

    if avg_rating is not None and not 0 <= avg_rating <= 10:
        raise ValueError("avgRating must be between 0 and 10.")

    return MovieData(
        title=title,
        release_date=year,
        genre=genre,
        actors=[Actor.from_dict(a) for a in actors],
        image_url=image_url,
        avg_rating=avg_rating,
    )


@dataclass
class ReviewData:
    """A user review of a movie."""

    movie_id: ObjectId
    username: str
    review: str
    rating: float
    id: Optional[ObjectId] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for document insertion."""
        doc = {
            "movieId": self.movie_id,
            "username": self.username,
            "review": self.review,
            "rating": self.rating,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc
