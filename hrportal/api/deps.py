from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from hrportal.core.config import settings
from hrportal.core.errors import ACCESS, InvalidOrExpiredToken, MissingToken, UserNotFound
from hrportal.core.tokens import decode_access
from hrportal.crud.user import user_crud
from hrportal.db.session import get_db
from hrportal.models.user import User

__all__ = ["get_db", "get_access_token", "get_current_user"]


# ----------------------------------------------------------------------
# Access token is read from its HTTP-only cookie, never from a header
# ----------------------------------------------------------------------
def get_access_token(
    token: str | None = Cookie(default=None, alias=settings.ACCESS_COOKIE_NAME),
) -> str:
    if not token:
        raise MissingToken()
    return token


# ----------------------------------------------------------------------
# Expired or forged access tokens answer 401 and drop the access cookie
# ----------------------------------------------------------------------
def get_current_user(
    token: str = Depends(get_access_token),
    db: Session = Depends(get_db),
) -> User:
    payload = decode_access(token)
    if payload is None:
        raise InvalidOrExpiredToken(
            "Authentication failed: invalid or expired token.",
            clear_cookies=[ACCESS],
        )

    user = user_crud.get(db, payload.user_id)
    if user is None:
        raise UserNotFound(clear_cookies=[ACCESS])
    return user
