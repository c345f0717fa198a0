"""
Movie endpoints.

CRUD over the movies collection plus the review-joined read path that
computes each movie's average rating.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pymongo.errors import PyMongoError

from api.auth import get_current_user, route_auth
from api.dependencies import get_db
from api.exceptions import (
    InvalidIdError,
    NotFoundError,
    StoreError,
    UnsupportedOperationError,
    ValidationError,
)
from api.schemas.common import ErrorResponse, MessageResponse
from api.schemas.movie import MovieCreate, MovieEnvelope, MovieUpdate
from movie_catalog.database import DatabaseManager
from movie_catalog.models import is_valid_object_id, movie_from_fields
from movie_catalog.security import TokenSubject

router = APIRouter()
logger = logging.getLogger("api.movies")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def check_movie_id(movie_id: str) -> None:
    """Reject ids that cannot be document identifiers."""
    if not is_valid_object_id(movie_id):
        raise InvalidIdError()


@router.post(
    "/movies",
    response_model=MovieEnvelope,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def create_movie(
    request: MovieCreate,
    db: DatabaseManager = Depends(get_db),
    user: TokenSubject = Depends(get_current_user),
):
    """
    Add a movie.

    Requires a title, a numeric releaseDate, a genre and at least one actor.
    """
    try:
        movie = movie_from_fields(
            title=request.title,
            release_date=request.release_date,
            genre=request.genre,
            actors=request.actor_dicts(),
            image_url=request.image_url,
        )
    except ValueError as e:
        raise ValidationError(str(e))

    try:
        created = db.insert_movie(movie)
    except PyMongoError as e:
        logger.error(f"Error saving movie: title={movie.title} error={e}")
        raise StoreError("Error saving movie", e)

    logger.info(f"Movie created: id={created['_id']} user={user.username}")
    return {
        "success": True,
        "message": f'The movie "{movie.title}" has been successfully saved!',
        "movie": created,
    }


@router.get("/movies", responses=ERROR_RESPONSES)
def list_movies(
    reviews: Optional[str] = Query(None, description="'true' to join reviews and compute avgRating"),
    db: DatabaseManager = Depends(get_db),
    user: TokenSubject = Depends(get_current_user),
):
    """
    List all movies.

    Without the reviews flag this returns a bare list of movies. With
    reviews=true it returns {"success": true, "movies": [...]}, each movie
    carrying its reviews and avgRating, ordered by avgRating (highest
    first, unrated last) then title.
    """
    try:
        if reviews == "true":
            return {"success": True, "movies": db.get_movies_with_reviews()}
        return db.get_movies()
    except PyMongoError as e:
        logger.error(f"Error fetching movies: {e}")
        raise StoreError("Error retrieving movies", e)


@router.put("/movies", responses=ERROR_RESPONSES)
def update_movies_collection(user: TokenSubject = Depends(get_current_user)):
    """Not supported on the collection."""
    raise UnsupportedOperationError("PUT")


@router.delete("/movies", responses=ERROR_RESPONSES)
def delete_movies_collection(user: TokenSubject = Depends(get_current_user)):
    """Not supported on the collection."""
    raise UnsupportedOperationError("DELETE")


@router.get(
    "/movies/{movie_id}",
    response_model=MovieEnvelope,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def get_movie(
    movie_id: str,
    reviews: Optional[str] = Query(None, description="'true' to join reviews and compute avgRating"),
    db: DatabaseManager = Depends(get_db),
    user: Optional[TokenSubject] = Depends(route_auth("get_movie")),
):
    """
    Get a single movie, optionally with its reviews and avgRating.

    Token enforcement on this route is deployment configuration
    (PROTECTED_ROUTES=get_movie).
    """
    check_movie_id(movie_id)

    try:
        if reviews == "true":
            movie = db.get_movie_with_reviews(movie_id)
        else:
            movie = db.get_movie(movie_id)
    except PyMongoError as e:
        logger.error(f"Error fetching movie: id={movie_id} error={e}")
        raise StoreError("Error retrieving movie", e)

    if not movie:
        raise NotFoundError("Movie", movie_id)

    return {"success": True, "movie": movie}


@router.put(
    "/movies/{movie_id}",
    response_model=MovieEnvelope,
    response_model_exclude_unset=True,
    responses=ERROR_RESPONSES,
)
def update_movie(
    movie_id: str,
    request: MovieUpdate,
    db: DatabaseManager = Depends(get_db),
    user: TokenSubject = Depends(get_current_user),
):
    """
    Replace a movie's title, releaseDate, genre and actors.

    All four are required; the stored record is untouched on any
    validation failure.
    """
    if not request.title or not request.release_date or not request.genre or not request.actors:
        raise ValidationError("Title, releaseDate, genre, and at least one actor are required.")

    check_movie_id(movie_id)

    try:
        movie = movie_from_fields(
            title=request.title,
            release_date=request.release_date,
            genre=request.genre,
            actors=request.actor_dicts(),
            image_url=request.image_url,
        )
    except ValueError as e:
        raise ValidationError(str(e))

    try:
        updated = db.update_movie(movie_id, movie.to_dict())
    except PyMongoError as e:
        logger.error(f"Error updating movie: id={movie_id} error={e}")
        raise StoreError("Error updating movie", e)

    if not updated:
        raise NotFoundError("Movie", movie_id)

    logger.info(f"Movie updated: id={movie_id} user={user.username}")
    return {
        "success": True,
        "message": f'Movie with id "{movie_id}" has been updated.',
        "movie": updated,
    }


@router.delete(
    "/movies/{movie_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
)
def delete_movie(
    movie_id: str,
    db: DatabaseManager = Depends(get_db),
    user: TokenSubject = Depends(get_current_user),
):
    """
    Delete a movie.

    Reviews that reference it are left in place.
    """
    check_movie_id(movie_id)

    try:
        deleted = db.delete_movie(movie_id)
    except PyMongoError as e:
        logger.error(f"Error deleting movie: id={movie_id} error={e}")
        raise StoreError("Error deleting movie", e)

    if not deleted:
        raise NotFoundError("Movie", movie_id)

    logger.info(f"Movie deleted: id={movie_id} user={user.username}")
    return MessageResponse(message=f'Movie with id "{movie_id}" has been deleted.')


@router.post("/movies/{movie_id}", responses=ERROR_RESPONSES)
def post_to_movie(movie_id: str, user: TokenSubject = Depends(get_current_user)):
    """Not supported on a single movie."""
    raise UnsupportedOperationError("POST")
