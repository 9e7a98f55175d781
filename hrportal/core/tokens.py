# hrportal/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Literal, Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from hrportal.core.config import settings

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    user_id: int
    jti: str
    issued_at: datetime
    expires_at: datetime


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _encode(*, user_id: int, token_type: TokenType, secret: str, lifetime_seconds: int) -> str:
    issued = _now()
    payload: Dict[str, Any] = {
        "type": token_type,
        "sub": str(user_id),
        "jti": uuid.uuid4().hex,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=lifetime_seconds)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=settings.ALGORITHM)


def create_access_token(*, user_id: int) -> str:
    """Short-lived access token, signed with ACCESS_TOKEN_SECRET."""
    return _encode(
        user_id=user_id,
        token_type="access",
        secret=settings.ACCESS_TOKEN_SECRET,
        lifetime_seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS,
    )


def create_refresh_token(*, user_id: int) -> str:
    """Long-lived refresh token, signed with REFRESH_TOKEN_SECRET."""
    return _encode(
        user_id=user_id,
        token_type="refresh",
        secret=settings.REFRESH_TOKEN_SECRET,
        lifetime_seconds=settings.REFRESH_TOKEN_EXPIRE_SECONDS,
    )


def issue_token_pair(user_id: int) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id=user_id),
        refresh_token=create_refresh_token(user_id=user_id),
    )


def verify_token(token: str, secret: str, *, expected_type: TokenType) -> Optional[TokenPayload]:
    """
    Decode and validate a token in one step.

    Signature, expiry, token type and subject are all checked; any failure
    returns None. Malformed, forged and expired tokens are not distinguished.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get("type") != expected_type:
        return None
    if not payload.get("jti") or "exp" not in payload or "iat" not in payload:
        return None
    try:
        user_id = int(payload.get("sub") or "")
    except (TypeError, ValueError):
        return None
    return TokenPayload(
        user_id=user_id,
        jti=payload["jti"],
        issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def decode_access(token: str) -> Optional[TokenPayload]:
    return verify_token(token, settings.ACCESS_TOKEN_SECRET, expected_type="access")


def decode_refresh(token: str) -> Optional[TokenPayload]:
    return verify_token(token, settings.REFRESH_TOKEN_SECRET, expected_type="refresh")
