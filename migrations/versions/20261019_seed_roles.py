"""seed roles (Admin, User)

Revision ID: 20261019_seed_roles
Revises: 20261019_initial_schema
Create Date: 2026-10-19 09:05:00
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "20261019_seed_roles"
down_revision: Union[str, Sequence[str], None] = "20261019_initial_schema"
branch_labels = None
depends_on = None

ROLE_NAMES = ["Admin", "User"]


def _upsert_role(conn, name: str) -> None:
    bp = sa.bindparam("name", type_=sa.String(50))
    if conn.dialect.name == "postgresql":
        conn.execute(
            sa.text("INSERT INTO roles (name) VALUES (:name) ON CONFLICT (name) DO NOTHING").bindparams(bp),
            {"name": name},
        )
    else:
        conn.execute(
            sa.text(
                "INSERT INTO roles (name) "
                "SELECT :name WHERE NOT EXISTS (SELECT 1 FROM roles WHERE name=:name)"
            ).bindparams(bp),
            {"name": name},
        )

def upgrade() -> None:
    conn = op.get_bind()
    for r in ROLE_NAMES:
        _upsert_role(conn, r)

def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(
        sa.text("DELETE FROM roles WHERE name IN ('Admin', 'User')")
    )
