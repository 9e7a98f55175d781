from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hrportal.db.base import Base
from hrportal.models.role import ROLE_ADMIN


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(Text)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id", ondelete="CASCADE"))

    role = relationship("Role", back_populates="users", lazy="joined")

    @property
    def is_admin(self) -> bool:
        return self.role is not None and self.role.name == ROLE_ADMIN
