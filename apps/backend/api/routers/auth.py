"""
Account endpoints.

Handles user signup and signin (token issuance).
"""

import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from api.dependencies import get_db, get_token_service
from api.exceptions import APIError, AuthenticationError, ConflictError, ValidationError
from api.schemas.common import ErrorResponse
from api.schemas.user import SigninRequest, SigninResponse, SignupRequest, SignupResponse
from movie_catalog.database import DatabaseManager
from movie_catalog.models import UserData
from movie_catalog.security import TokenService, TokenSubject, hash_password, verify_password

router = APIRouter()
logger = logging.getLogger("api.auth")

GENERIC_FAILURE = "Something went wrong. Please try again later."


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def signup(
    request: SignupRequest,
    db: DatabaseManager = Depends(get_db),
):
    """
    Register a new user.

    The password is stored as a bcrypt hash. Usernames are unique.
    """
    if not request.username or not request.password:
        raise ValidationError(
            "Please include both username and password to signup.",
            message_key="msg",
        )

    user = UserData(
        name=request.name,
        username=request.username,
        password=hash_password(request.password),
    )

    try:
        created = db.create_user(user)
    except PyMongoError as e:
        logger.error(f"Signup failed: username={request.username} error={e}")
        raise APIError(status_code=500, message=GENERIC_FAILURE)

    if not created:
        logger.warning(f"Signup conflict: username={request.username} already exists")
        raise ConflictError("A user with that username already exists.")

    logger.info(f"User created: username={request.username}")
    return SignupResponse(msg="Successfully created new user.")


@router.post(
    "/signin",
    response_model=SigninResponse,
    responses={401: {"model": ErrorResponse}},
)
def signin(
    request: SigninRequest,
    db: DatabaseManager = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange a username and password for a token.

    The token is returned with its scheme prefix ("JWT <token>") so the
    client can send it back verbatim in the Authorization header.
    """
    try:
        user = db.find_user_by_username(request.username) if request.username else None
    except PyMongoError as e:
        logger.error(f"Signin lookup failed: username={request.username} error={e}")
        raise APIError(status_code=500, message=GENERIC_FAILURE)

    if not user:
        logger.warning(f"Signin failed: username={request.username} not found")
        raise AuthenticationError("Authentication failed. User not found.")

    if not verify_password(user, request.password):
        logger.warning(f"Signin failed: username={request.username} wrong password")
        raise AuthenticationError("Authentication failed. Incorrect password.")

    token = tokens.issue(TokenSubject(id=str(user.id), username=user.username))

    logger.info(f"User signed in: username={user.username}")
    return SigninResponse(
        token=f"JWT {token}",
        username=user.username,
        name=user.name,
    )
