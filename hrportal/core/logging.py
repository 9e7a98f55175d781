# hrportal/core/logging.py
import logging
import logging.config
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from hrportal.core.config import settings

logger = logging.getLogger("hrportal.request")


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL."""
    level_name = str(level or settings.LOG_LEVEL).upper()
    if not isinstance(getattr(logging, level_name, None), int):
        level_name = "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"},
            },
            "handlers": {
                "console": {"class": "logging.StreamHandler", "formatter": "default"},
            },
            "root": {"level": level_name, "handlers": ["console"]},
            "loggers": {
                "uvicorn.access": {"level": "WARNING"},
            },
        }
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        # cookies carry the credentials; only method/path/status are logged
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
