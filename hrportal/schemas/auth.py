# hrportal/schemas/auth.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, EmailStr

from hrportal.schemas.user import UserOut


# optional fields: missing values are reported as 400 by the handlers
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class RegisterAdminRequest(BaseModel):
    name: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class AuthResponse(BaseModel):
    message: str
    user: UserOut


class StatusResponse(BaseModel):
    user: UserOut
