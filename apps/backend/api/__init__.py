"""
Movie Review REST API.

This module provides a FastAPI-based REST API for signing users up and
in, managing movies, and posting reviews with average ratings.
"""

from api.main import app

__all__ = ["app"]
