# hrportal/api/v1/admin.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hrportal.api.deps import get_db
from hrportal.core.config import settings
from hrportal.core.rbac import require_admin
from hrportal.crud.company import company_crud
from hrportal.crud.invitation import invitation_crud
from hrportal.models.user import User
from hrportal.schemas.invitation import InviteRequest, InviteResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _announce_invitation(email: str, token: str, company_name: str) -> None:
    # email delivery lives outside this service; the link is logged instead
    registration_link = f"{settings.FRONTEND_URL}/register?token={token}"
    logger.info("Admin invitation for %s (company %s): %s", email, company_name, registration_link)


@router.post("/invite", response_model=InviteResponse, status_code=status.HTTP_201_CREATED)
def invite_admin(
    body: InviteRequest,
    db: Session = Depends(get_db),
    inviter: User = Depends(require_admin),
):
    company = company_crud.get(db, body.company_id)
    if company is None:
        raise HTTPException(status_code=404, detail="Company not found.")

    invitation = invitation_crud.create(
        db,
        invited_user_email=str(body.invited_user_email),
        company_id=company.id,
        invited_by_id=inviter.id,
        role_id=inviter.role_id,
    )
    _announce_invitation(invitation.invited_user_email, invitation.invitation_token, company.name)
    return InviteResponse(message="Admin invitation sent successfully.", invitation_id=invitation.id)
