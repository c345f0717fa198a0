"""
Movie Catalog - document store access for the movie review API.

This package provides:
- Configuration loaded from the environment
- Dataclasses for users, movies and reviews
- A MongoDB-backed DatabaseManager (credential and catalog stores)
- Password hashing and signed token handling
- Admin CLI for index setup, status and seeding
"""

from .config import Config
from .models import GENRES, Actor, MovieData, ReviewData, UserData
from .database import DatabaseManager
from .security import InvalidTokenError, TokenService, TokenSubject

__version__ = "1.0.0"
__all__ = [
    "Config",
    "GENRES",
    "Actor",
    "MovieData",
    "ReviewData",
    "UserData",
    "DatabaseManager",
    "InvalidTokenError",
    "TokenService",
    "TokenSubject",
]
