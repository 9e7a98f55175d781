# hrportal/db/init_db.py
import logging
import os

from sqlalchemy import select
from sqlalchemy.orm import Session

from hrportal.core.security_password import hash_password
from hrportal.models.company import Company
from hrportal.models.role import ROLE_ADMIN, ROLE_USER, Role
from hrportal.models.user import User

logger = logging.getLogger(__name__)

ROLE_NAMES = [ROLE_ADMIN, ROLE_USER]


def init_db(db: Session) -> None:
    roles = {r.name: r for r in db.scalars(select(Role)).all()}
    for name in ROLE_NAMES:
        if name not in roles:
            r = Role(name=name)
            db.add(r); db.flush()
            roles[name] = r

    admin_email = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com").lower()
    admin = db.scalar(select(User).where(User.email == admin_email))
    if not admin:
        admin = User(
            name="Admin Demo",
            email=admin_email,
            hashed_password=hash_password(os.getenv("SEED_ADMIN_PASSWORD", "admin123")),
            role_id=roles[ROLE_ADMIN].id,
        )
        db.add(admin); db.flush()
        logger.info("Seeded admin user %s", admin_email)

    company = db.scalar(select(Company).where(Company.name == "Demo Company"))
    if not company:
        db.add(Company(name="Demo Company", admin_id=admin.id))

    db.commit()
