"""
Review endpoints.

Reviews can only be created; reading, replacing and deleting them
through this route are answered as unsupported.
"""

import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from api.auth import get_current_user, route_auth
from api.dependencies import get_db
from api.exceptions import NotFoundError, StoreError, UnsupportedOperationError, ValidationError
from api.routers.movies import ERROR_RESPONSES, check_movie_id
from api.schemas.review import ReviewCreate, ReviewEnvelope
from movie_catalog.database import DatabaseManager
from movie_catalog.models import ReviewData
from movie_catalog.security import TokenSubject

router = APIRouter()
logger = logging.getLogger("api.reviews")


@router.post(
    "/movies/{movie_id}/review",
    response_model=ReviewEnvelope,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def add_review(
    movie_id: str,
    request: ReviewCreate,
    db: DatabaseManager = Depends(get_db),
    user: TokenSubject = Depends(get_current_user),
):
    """
    Add a review to a movie.

    The movie must exist when the review is written. The username is
    taken from the body as given.
    """
    if not request.username or not request.review or request.rating is None:
        raise ValidationError("username, review, and rating are required.")

    check_movie_id(movie_id)

    try:
        if not db.movie_exists(movie_id):
            logger.warning(f"Review rejected: movie_id={movie_id} does not exist")
            raise NotFoundError("Movie", movie_id, suffix="does not exist in the movie collection.")

        created = db.insert_review(ReviewData(
            movie_id=ObjectId(movie_id),
            username=request.username,
            review=request.review,
            rating=request.rating,
        ))
    except PyMongoError as e:
        logger.error(f"Error adding review: movie_id={movie_id} error={e}")
        raise StoreError("Error adding review", e)

    logger.info(f"Review added: movie_id={movie_id} review_id={created['_id']} user={user.username}")
    return {
        "success": True,
        "message": "Review added successfully.",
        "review": created,
    }


@router.get("/movies/{movie_id}/review", responses=ERROR_RESPONSES)
def get_reviews(
    movie_id: str,
    user: Optional[TokenSubject] = Depends(route_auth("get_review")),
):
    """Not supported; use GET /movies/{movie_id}?reviews=true."""
    raise UnsupportedOperationError("GET")


@router.put("/movies/{movie_id}/review", responses=ERROR_RESPONSES)
def update_review(movie_id: str):
    """Not supported."""
    raise UnsupportedOperationError("PUT")


@router.delete("/movies/{movie_id}/review", responses=ERROR_RESPONSES)
def delete_review(movie_id: str):
    """Not supported."""
    raise UnsupportedOperationError("DELETE")
