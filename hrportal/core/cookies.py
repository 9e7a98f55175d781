# hrportal/core/cookies.py
from starlette.responses import Response

from hrportal.core.config import settings
from hrportal.core.tokens import TokenPair


def _cookie_params(kind: str) -> tuple[str, str, int]:
    """(name, path, max_age) for the "access" or "refresh" cookie."""
    if kind == "access":
        return settings.ACCESS_COOKIE_NAME, "/", settings.ACCESS_TOKEN_EXPIRE_SECONDS
    if kind == "refresh":
        return settings.REFRESH_COOKIE_NAME, settings.refresh_cookie_path, settings.REFRESH_TOKEN_EXPIRE_SECONDS
    raise ValueError(f"Unknown cookie kind: {kind}")


def set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    for kind, value in (("access", tokens.access_token), ("refresh", tokens.refresh_token)):
        name, path, max_age = _cookie_params(kind)
        response.set_cookie(
            name,
            value,
            max_age=max_age,
            path=path,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
        )


def clear_cookie(response: Response, kind: str) -> None:
    # path must equal the one used in set_auth_cookies
    name, path, _ = _cookie_params(kind)
    response.delete_cookie(
        name,
        path=path,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_auth_cookies(response: Response) -> None:
    clear_cookie(response, "access")
    clear_cookie(response, "refresh")
