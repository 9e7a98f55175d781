from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hrportal.core.security_password import hash_password
from hrportal.crud.base import CRUDBase
from hrportal.models.role import ROLE_USER, Role
from hrportal.models.user import User
from hrportal.schemas.user import UserCreate


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CRUDUser(CRUDBase[User]):
    def create(self, db: Session, obj_in: UserCreate, role_name: str = ROLE_USER, *, commit: bool = True) -> User:
        role = db.execute(select(Role).where(Role.name == role_name)).scalar_one_or_none()
        if role is None:
            role = Role(name=role_name)
            db.add(role); db.flush()
        data = obj_in.model_dump()
        data["email"] = normalize_email(data["email"])
        data["hashed_password"] = hash_password(data.pop("password"))
        data["role_id"] = role.id
        user = User(**data)
        db.add(user)
        if commit:
            db.commit(); db.refresh(user)
        else:
            db.flush()
        return user

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Full row, password hash included; only the login path should need it."""
        return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()


user_crud = CRUDUser(User)
