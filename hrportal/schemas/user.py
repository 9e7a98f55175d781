# hrportal/schemas/user.py
from __future__ import annotations
from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=6)


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    is_admin: bool = False

    model_config = {"from_attributes": True}
