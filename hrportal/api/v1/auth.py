# hrportal/api/v1/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from hrportal.api.deps import get_current_user, get_db
from hrportal.core.config import settings
from hrportal.core.cookies import clear_auth_cookies, set_auth_cookies
from hrportal.core.errors import REFRESH, InvalidCredentials, InvalidOrExpiredToken, MissingToken
from hrportal.core.security_password import verify_and_maybe_upgrade, verify_password
from hrportal.core.tokens import decode_refresh, issue_token_pair
from hrportal.crud.company import company_crud
from hrportal.crud.invitation import invitation_crud
from hrportal.crud.user import normalize_email, user_crud
from hrportal.models.role import ROLE_ADMIN
from hrportal.models.user import User
from hrportal.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterAdminRequest,
    RegisterRequest,
    StatusResponse,
)
from hrportal.schemas.invitation import InvitationValidationResponse
from hrportal.schemas.user import UserCreate, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------- helpers ----------
def ensure_password_policy(password: str):
    if len(password) < 6 or len(password) > 128:
        raise HTTPException(status_code=400, detail="Password must be between 6 and 128 characters.")


def _start_session(response: Response, user: User, message: str) -> AuthResponse:
    set_auth_cookies(response, issue_token_pair(user.id))
    return AuthResponse(message=message, user=UserOut.model_validate(user))


# ---------- endpoints ----------
@router.get("/status", response_model=StatusResponse)
def get_status(user: User = Depends(get_current_user)):
    return StatusResponse(user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    if not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Email and password are required.")

    user = user_crud.get_by_email(db, body.email)
    if user is None:
        verify_password(body.password, None)
        raise InvalidCredentials()

    ok, new_hash = verify_and_maybe_upgrade(body.password, user.hashed_password)
    if not ok:
        logger.info("Failed login for user %s", user.id)
        raise InvalidCredentials()
    if new_hash:
        user = user_crud.update(db, user, {"hashed_password": new_hash})

    logger.info("User %s logged in", user.id)
    return _start_session(response, user, "Login successful")


@router.post("/refresh", response_model=MessageResponse)
def refresh(
    response: Response,
    refresh_token: str | None = Cookie(default=None, alias=settings.REFRESH_COOKIE_NAME),
):
    if not refresh_token:
        raise MissingToken("Refresh token not found.")

    payload = decode_refresh(refresh_token)
    if payload is None:
        raise InvalidOrExpiredToken(
            "Invalid or expired refresh token.",
            status_code=status.HTTP_403_FORBIDDEN,
            clear_cookies=[REFRESH],
        )

    # rotation: both cookies are replaced; the old refresh token is not tracked
    set_auth_cookies(response, issue_token_pair(payload.user_id))
    logger.debug("Rotated tokens for user %s", payload.user_id)
    return MessageResponse(message="Access token refreshed successfully.")


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout():
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_auth_cookies(response)
    return response


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, response: Response, db: Session = Depends(get_db)):
    if not body.name or not body.email or not body.password:
        raise HTTPException(status_code=400, detail="Name, email, and password are required.")
    ensure_password_policy(body.password)

    if user_crud.get_by_email(db, body.email):
        raise HTTPException(status_code=400, detail="Email already in use.")

    user = user_crud.create(db, UserCreate(name=body.name, email=normalize_email(body.email), password=body.password))
    logger.info("Registered user %s", user.id)
    return _start_session(response, user, "Registration successful")


@router.get("/invitations/validate/{token}", response_model=InvitationValidationResponse)
def validate_invitation(token: str, db: Session = Depends(get_db)):
    invitation = invitation_crud.find_valid_by_token(db, token)
    if invitation is None:
        raise HTTPException(status_code=404, detail="Invitation is invalid, expired, or already used.")
    return InvitationValidationResponse(message="Invitation is valid.", email=invitation.invited_user_email)


@router.post("/register-admin", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_admin(body: RegisterAdminRequest, response: Response, db: Session = Depends(get_db)):
    if not body.name or not body.password or not body.token:
        raise HTTPException(status_code=400, detail="Name, password, and invitation token are required.")
    ensure_password_policy(body.password)

    invitation = invitation_crud.find_valid_by_token(db, body.token)
    if invitation is None:
        raise HTTPException(status_code=400, detail="Invalid or expired invitation token.")

    if user_crud.get_by_email(db, invitation.invited_user_email):
        raise HTTPException(
            status_code=409,
            detail="Email associated with this invitation is already registered.",
        )

    company = company_crud.get(db, invitation.company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company for this invitation no longer exists.")

    # user, company admin and invitation status are committed together
    user = user_crud.create(
        db,
        UserCreate(name=body.name, email=invitation.invited_user_email, password=body.password),
        role_name=ROLE_ADMIN,
        commit=False,
    )
    company_crud.update_admin(db, company, user.id, commit=False)
    invitation_crud.mark_accepted(db, invitation, commit=False)
    db.commit()
    db.refresh(user)

    logger.info("Admin %s registered for company %s", user.id, invitation.company_id)
    return _start_session(response, user, "Admin registration successful")
