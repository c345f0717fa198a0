"""
User-related Pydantic schemas.

Fields are optional at the schema level so that missing credentials
are answered by the handlers with the envelope messages.
"""

from typing import Optional

from pydantic import BaseModel


class SignupRequest(BaseModel):
    """Request to register a user."""

    name: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class SigninRequest(BaseModel):
    """Request to sign in."""

    username: Optional[str] = None
    password: Optional[str] = None


class SignupResponse(BaseModel):
    """Response after registering a user."""

    success: bool = True
    msg: str


class SigninResponse(BaseModel):
    """Token issued on a successful sign-in."""

    success: bool = True
    token: str
    username: str
    name: Optional[str] = None
