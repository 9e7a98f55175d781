# hrportal/db/bootstrap.py
import logging
import os

from alembic import command
from alembic.config import Config

from hrportal.db.init_db import init_db
from hrportal.db.session import SessionLocal

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def run_migrations_and_seed() -> None:
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))

    command.upgrade(cfg, "head")
    logger.info("Database migrated to head")

    with SessionLocal() as db:
        init_db(db)
