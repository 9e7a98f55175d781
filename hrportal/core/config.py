# hrportal/core/config.py
import os
from typing import ClassVar, List
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

PLACEHOLDER_ACCESS_SECRET = "CHANGE_ME_ACCESS_SECRET"
PLACEHOLDER_REFRESH_SECRET = "CHANGE_ME_REFRESH_SECRET"


def _default_database_url() -> str:
    url = os.getenv("DATABASE_URL", "").strip()
    if url:
        return url
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'hrportal.db')}"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings(BaseModel):
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    ENVIRONMENT: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))
    DATABASE_URL: str = Field(default_factory=_default_database_url)
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS_ON_STARTUP", "1"))

    # access and refresh tokens are signed with distinct secrets
    ACCESS_TOKEN_SECRET: str = Field(default_factory=lambda: os.getenv("ACCESS_TOKEN_SECRET", PLACEHOLDER_ACCESS_SECRET))
    REFRESH_TOKEN_SECRET: str = Field(default_factory=lambda: os.getenv("REFRESH_TOKEN_SECRET", PLACEHOLDER_REFRESH_SECRET))
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_SECONDS", str(15 * 60))))
    REFRESH_TOKEN_EXPIRE_SECONDS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_SECONDS", str(7 * 24 * 60 * 60))))

    ACCESS_COOKIE_NAME: str = Field(default_factory=lambda: os.getenv("ACCESS_COOKIE_NAME", "accessToken"))
    REFRESH_COOKIE_NAME: str = Field(default_factory=lambda: os.getenv("REFRESH_COOKIE_NAME", "refreshToken"))
    API_PREFIX: str = Field(default_factory=lambda: os.getenv("API_PREFIX", "").rstrip("/"))

    INVITATION_EXPIRE_HOURS: int = Field(default_factory=lambda: int(os.getenv("INVITATION_EXPIRE_HOURS", "24")))
    FRONTEND_URL: str = Field(default_factory=lambda: os.getenv("FRONTEND_URL", "http://localhost:5173"))
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:5173"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cookie_secure(self) -> bool:
        return self.is_production

    @property
    def refresh_cookie_path(self) -> str:
        return f"{self.API_PREFIX}/auth/refresh"

    def validate_secrets(self) -> None:
        """Refuse to run in production with the placeholder signing secrets."""
        if self.is_production and (
            self.ACCESS_TOKEN_SECRET == PLACEHOLDER_ACCESS_SECRET
            or self.REFRESH_TOKEN_SECRET == PLACEHOLDER_REFRESH_SECRET
        ):
            raise RuntimeError("JWT secrets are not set in environment variables for production.")


settings = Settings()
