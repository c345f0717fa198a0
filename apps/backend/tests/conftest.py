"""
Shared fixtures for movie review API tests.

Provides an in-memory mock database, a token service, sample data and a
FastAPI test client wired through dependency overrides.
"""

import copy
from typing import Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from movie_catalog.config import Config
from movie_catalog.models import Actor, MovieData, ReviewData, UserData, serialize_document
from movie_catalog.security import TokenService, TokenSubject, hash_password

TEST_SECRET = "test-secret-key"


# =============================================================================
# SAMPLE DATA
# =============================================================================

def create_sample_movie(
    title: str,
    release_date: int = 2010,
    genre: str = "Drama",
    actors: Optional[List[tuple]] = None,
) -> MovieData:
    """Create a sample MovieData for testing."""
    actors = actors or [("Lead Actor", f"Hero of {title}")]
    return MovieData(
        title=title,
        release_date=release_date,
        genre=genre,
        actors=[Actor(actor_name=a, character_name=c) for a, c in actors],
    )


SAMPLE_MOVIES = [
    create_sample_movie(
        "Inception", 2010, "Science Fiction",
        [("Leonardo DiCaprio", "Cobb"), ("Elliot Page", "Ariadne"), ("Tom Hardy", "Eames")],
    ),
    create_sample_movie("Alien", 1979, "Horror", [("Sigourney Weaver", "Ripley")]),
    create_sample_movie("Heat", 1995, "Thriller", [("Al Pacino", "Hanna"), ("Robert De Niro", "McCauley")]),
]

# (movie title, username, rating)
SAMPLE_REVIEWS = [
    ("Inception", "alice", 8),
    ("Inception", "bob", 6),
    ("Alien", "carol", 9),
]


def movie_payload(**overrides) -> dict:
    """A valid POST /movies body, with optional field overrides."""
    payload = {
        "title": "Arrival",
        "releaseDate": 2016,
        "genre": "Science Fiction",
        "actors": [
            {"actorName": "Amy Adams", "characterName": "Louise Banks"},
            {"actorName": "Jeremy Renner", "characterName": "Ian Donnelly"},
        ],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# MOCK DATABASE
# =============================================================================

class MockDatabaseManager:
    """In-memory stand-in for DatabaseManager."""

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.movies: Dict[ObjectId, dict] = {}
        self.reviews: List[dict] = []
        self.indexes_created = False
        self.closed = False

    def reset(self):
        """Reset all data."""
        self.users.clear()
        self.movies.clear()
        self.reviews.clear()
        self.indexes_created = False

    # Setup & Status
    def ping(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    def check_and_create_indexes(self) -> dict:
        if self.indexes_created:
            return {"created": [], "existing": ["users.username_1", "movies.title_1", "reviews.movieId_1"]}
        self.indexes_created = True
        return {"created": ["users.username_1", "movies.title_1", "reviews.movieId_1"], "existing": []}

    def get_status(self) -> dict:
        return {
            "users": len(self.users),
            "movies": len(self.movies),
            "reviews": len(self.reviews),
        }

    # Users
    def create_user(self, user: UserData) -> bool:
        if user.username in self.users:
            return False
        doc = user.to_dict()
        doc["_id"] = ObjectId()
        self.users[user.username] = doc
        return True

    def find_user_by_username(self, username: str) -> Optional[UserData]:
        doc = self.users.get(username)
        return UserData.from_document(doc) if doc else None

    # Movies
    def insert_movie(self, movie: MovieData) -> dict:
        doc = copy.deepcopy(movie.to_dict())
        doc["_id"] = ObjectId()
        self.movies[doc["_id"]] = doc
        return serialize_document(doc)

    def get_movies(self) -> List[dict]:
        return [serialize_document(doc) for doc in self.movies.values()]

    def get_movie(self, movie_id: str) -> Optional[dict]:
        return serialize_document(self.movies.get(ObjectId(movie_id)))

    def movie_exists(self, movie_id: str) -> bool:
        return ObjectId(movie_id) in self.movies

    def update_movie(self, movie_id: str, fields: dict) -> Optional[dict]:
        doc = self.movies.get(ObjectId(movie_id))
        if not doc:
            return None
        doc.update(copy.deepcopy(fields))
        return serialize_document(doc)

    def delete_movie(self, movie_id: str) -> Optional[dict]:
        return serialize_document(self.movies.pop(ObjectId(movie_id), None))

    # Reviews
    def insert_review(self, review: ReviewData) -> dict:
        doc = review.to_dict()
        doc["_id"] = ObjectId()
        self.reviews.append(doc)
        return serialize_document(doc)

    def get_movies_with_reviews(self) -> List[dict]:
        joined = [self._join_reviews(doc) for doc in self.movies.values()]
        rated = sorted(
            (m for m in joined if m["avgRating"] is not None),
            key=lambda m: (-m["avgRating"], m["title"]),
        )
        unrated = sorted(
            (m for m in joined if m["avgRating"] is None),
            key=lambda m: m["title"],
        )
        return [serialize_document(m) for m in rated + unrated]

    def get_movie_with_reviews(self, movie_id: str) -> Optional[dict]:
        doc = self.movies.get(ObjectId(movie_id))
        if not doc:
            return None
        return serialize_document(self._join_reviews(doc))

    # Helper methods
    def _join_reviews(self, doc: dict) -> dict:
        reviews = [r for r in self.reviews if r["movieId"] == doc["_id"]]
        avg = sum(r["rating"] for r in reviews) / len(reviews) if reviews else None
        return {**doc, "reviews": reviews, "avgRating": avg}

    def movie_id_for(self, title: str) -> str:
        for movie_id, doc in self.movies.items():
            if doc["title"] == title:
                return str(movie_id)
        raise KeyError(title)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def mock_db():
    """Provide a fresh mock database for each test."""
    return MockDatabaseManager()


@pytest.fixture
def mock_db_with_data(mock_db):
    """Mock database pre-populated with a user, sample movies and reviews."""
    mock_db.create_user(UserData(name="Test User", username="tester", password=hash_password("s3cret")))
    for movie in SAMPLE_MOVIES:
        mock_db.insert_movie(movie)
    for title, username, rating in SAMPLE_REVIEWS:
        mock_db.insert_review(ReviewData(
            movie_id=ObjectId(mock_db.movie_id_for(title)),
            username=username,
            review=f"{username} on {title}",
            rating=rating,
        ))
    return mock_db


@pytest.fixture
def test_config(tmp_path):
    """Configuration that never touches a real server."""
    return Config(
        db_uri="mongodb://localhost:27017/movies_test",
        jwt_secret_key=TEST_SECRET,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def token_service():
    """Token service signing with the test secret."""
    return TokenService(TEST_SECRET)


@pytest.fixture
def auth_headers(token_service):
    """Authorization header carrying a valid token."""
    token = token_service.issue(TokenSubject(id=str(ObjectId()), username="tester"))
    return {"Authorization": f"JWT {token}"}


@pytest.fixture
def api_client(mock_db_with_data, test_config, token_service):
    """Provide FastAPI test client with mocked dependencies."""
    from api.main import app
    from api import dependencies

    # Clear any cached config/db from previous runs
    dependencies.get_config.cache_clear()
    dependencies.get_db.cache_clear()
    dependencies.get_token_service.cache_clear()

    app.dependency_overrides[dependencies.get_db] = lambda: mock_db_with_data
    app.dependency_overrides[dependencies.get_config] = lambda: test_config
    app.dependency_overrides[dependencies.get_token_service] = lambda: token_service

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
