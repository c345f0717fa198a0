"""
Custom exceptions and error handlers for the API.

Every error is rendered into the response envelope:
{"success": false, "<message key>": "...", ["error": "..."]}
"""

from typing import Any, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class APIError(HTTPException):
    """Base API error with an envelope response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        message_key: str = "message",
        error: Optional[str] = None,
    ):
        self.message = message
        self.message_key = message_key
        self.error = error
        super().__init__(status_code=status_code, detail=message)


class ValidationError(APIError):
    """Missing or malformed request field."""

    def __init__(self, message: str, message_key: str = "message"):
        super().__init__(status_code=400, message=message, message_key=message_key)


class InvalidIdError(ValidationError):
    """Path identifier is not a valid document id."""

    def __init__(self):
        super().__init__("Invalid movieId format.")


class AuthenticationError(APIError):
    """Sign-in failed: unknown user or wrong password."""

    def __init__(self, message: str):
        super().__init__(status_code=401, message=message, message_key="msg")


class UnauthorizedError(APIError):
    """Bearer token missing, malformed or rejected."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(status_code=401, message=message)


class ConflictError(APIError):
    """Unique key already taken."""

    def __init__(self, message: str):
        super().__init__(status_code=409, message=message)


class NotFoundError(APIError):
    """Referenced record does not exist."""

    def __init__(self, resource: str, identifier: Any, suffix: str = "not found."):
        super().__init__(
            status_code=404,
            message=f'{resource} with id "{identifier}" {suffix}',
        )


class UnsupportedOperationError(APIError):
    """Method not implemented for a route. Answered with 500, not 405."""

    def __init__(self, method: str):
        super().__init__(status_code=500, message=f"{method} request not supported")


class StoreError(APIError):
    """Unexpected document store failure; surfaces the underlying message."""

    def __init__(self, message: str, error: Any):
        super().__init__(status_code=500, message=message, error=str(error))


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions and return the envelope."""
    content = {
        "success": False,
        exc.message_key: exc.message,
    }
    if exc.error:
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer unparseable request bodies with a 400 envelope."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"success": False, "message": message})
