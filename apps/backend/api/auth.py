"""
Token authentication for protected routes.

Protected routes declare one of these dependencies explicitly:

- get_current_user: always requires "Authorization: JWT <token>"
- route_auth(name): requires a token only when the deployment lists
  ``name`` in PROTECTED_ROUTES

When a token is missing or rejected the request is answered with 401
and the handler never runs.
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Header, Request

from api.dependencies import get_config, get_token_service
from api.exceptions import UnauthorizedError
from movie_catalog.config import Config
from movie_catalog.security import InvalidTokenError, TokenService, TokenSubject

logger = logging.getLogger("api.auth")

AUTH_SCHEME = "JWT"


def extract_token(authorization: Optional[str]) -> str:
    """Pull the signed token out of an "Authorization: JWT <token>" header."""
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.upper() != AUTH_SCHEME or not token.strip():
        raise UnauthorizedError()
    return token.strip()


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenSubject:
    """Require a valid token and attach its subject to the request."""
    token = extract_token(authorization)
    try:
        subject = tokens.verify(token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected token on {request.method} {request.url.path}: {e}")
        raise UnauthorizedError()

    request.state.user = subject
    return subject


def route_auth(route_name: str) -> Callable[..., Optional[TokenSubject]]:
    """
    Build a dependency for a route whose gating is deployment configuration.

    Returns None when the route is open, otherwise behaves like
    get_current_user.
    """

    def dependency(
        request: Request,
        authorization: Optional[str] = Header(None),
        config: Config = Depends(get_config),
        tokens: TokenService = Depends(get_token_service),
    ) -> Optional[TokenSubject]:
        if not config.is_route_protected(route_name):
            return None
        return get_current_user(request, authorization, tokens)

    dependency.__name__ = f"route_auth_{route_name}"
    return dependency
