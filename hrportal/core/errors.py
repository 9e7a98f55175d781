# hrportal/core/errors.py
from __future__ import annotations

import logging
from typing import Iterable, Tuple

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.requests import Request

from hrportal.core.cookies import clear_cookie

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"


class AuthError(Exception):
    """Authentication failure normalised to an HTTP status, an error code and a message."""

    status_code: int = status.HTTP_401_UNAUTHORIZED
    code: str = "UNAUTHENTICATED"
    message: str = "Authentication required."

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        clear_cookies: Iterable[str] = (),
    ) -> None:
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        # which credential cookies ("access", "refresh") to drop on the response
        self.clear_cookies: Tuple[str, ...] = tuple(clear_cookies)
        super().__init__(self.message)


class InvalidCredentials(AuthError):
    code = "INVALID_CREDENTIALS"
    message = "Invalid credentials."


class MissingToken(AuthError):
    code = "MISSING_TOKEN"
    message = "Authentication required: no token provided."


class InvalidOrExpiredToken(AuthError):
    code = "INVALID_TOKEN"
    message = "Invalid or expired token."


class UserNotFound(AuthError):
    code = "USER_NOT_FOUND"
    message = "Authenticated user not found."


class Forbidden(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "You do not have permission to perform this action."


def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.code)
    response = JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
    )
    for kind in exc.clear_cookies:
        clear_cookie(response, kind)
    return response
