"""
Dependency injection for the API.

Provides the configuration, the store handle and the token service.
Each is constructed once per process and shared across requests.
"""

from functools import lru_cache

from movie_catalog.config import Config
from movie_catalog.database import DatabaseManager
from movie_catalog.security import TokenService


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()


@lru_cache()
def get_db() -> DatabaseManager:
    """Get cached DatabaseManager instance."""
    return DatabaseManager(get_config())


@lru_cache()
def get_token_service() -> TokenService:
    """Get cached TokenService instance."""
    return TokenService.from_config(get_config())


def close_db() -> None:
    """Close the store handle if one was created."""
    if get_db.cache_info().currsize:
        get_db().close()
        get_db.cache_clear()
