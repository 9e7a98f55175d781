# hrportal/schemas/invitation.py
from pydantic import BaseModel, EmailStr


class InviteRequest(BaseModel):
    company_id: int
    invited_user_email: EmailStr


class InviteResponse(BaseModel):
    message: str
    invitation_id: int


class InvitationValidationResponse(BaseModel):
    message: str
    email: str
