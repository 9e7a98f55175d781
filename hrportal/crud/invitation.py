import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hrportal.core.config import settings
from hrportal.models.invitation import STATUS_ACCEPTED, STATUS_PENDING, AdminInvitation

logger = logging.getLogger(__name__)


def generate_invitation_token() -> str:
    return secrets.token_hex(32)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class CRUDInvitation:
    def create(
        self,
        db: Session,
        *,
        invited_user_email: str,
        company_id: int,
        invited_by_id: int,
        role_id: int,
    ) -> AdminInvitation:
        invitation = AdminInvitation(
            company_id=company_id,
            invited_user_email=invited_user_email.strip().lower(),
            invitation_token=generate_invitation_token(),
            expires_at=datetime.now(timezone.utc) + timedelta(hours=settings.INVITATION_EXPIRE_HOURS),
            invited_by_id=invited_by_id,
            role_id=role_id,
            status=STATUS_PENDING,
        )
        db.add(invitation); db.commit(); db.refresh(invitation)
        return invitation

    def find_valid_by_token(self, db: Session, token: str) -> Optional[AdminInvitation]:
        """Pending and not yet expired, else None."""
        if not token:
            return None
        invitation = db.execute(
            select(AdminInvitation).where(AdminInvitation.invitation_token == token)
        ).scalar_one_or_none()
        if invitation is None:
            return None
        if invitation.status != STATUS_PENDING:
            return None
        if _as_utc(invitation.expires_at) < datetime.now(timezone.utc):
            logger.info("Invitation %s expired", invitation.id)
            return None
        return invitation

    def mark_accepted(self, db: Session, invitation: AdminInvitation, *, commit: bool = True) -> AdminInvitation:
        invitation.status = STATUS_ACCEPTED
        invitation.updated_at = datetime.now(timezone.utc)
        db.add(invitation)
        if commit:
            db.commit(); db.refresh(invitation)
        return invitation


invitation_crud = CRUDInvitation()
