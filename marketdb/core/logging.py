from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from marketdb.core.config import settings

CONTEXT_KEY = "ctx"


def log_context(**fields: Any) -> dict[str, dict[str, Any]]:
    """Wrap structured fields for ``extra=``.

    Everything travels under a single ``ctx`` attribute, so field names such as
    ``created`` or ``name`` never collide with ``LogRecord`` attributes.
    """
    return {CONTEXT_KEY: fields}


class JsonFormatter(logging.Formatter):
    """JSON formatter; structured context comes from ``record.ctx``."""

    def format(self, record: logging.LogRecord) -> str:
        message: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, CONTEXT_KEY, None)
        if context:
            message["context"] = context
        if record.exc_info:
            message["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(message, default=str)


def setup_logging(level_name: str | None = None) -> None:
    """Apply centralized logging configuration."""
    level = getattr(logging, (level_name or settings.LOG_LEVEL).upper(), logging.INFO)
    logging_config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": JsonFormatter,
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            }
        },
        "root": {
            "handlers": ["default"],
            "level": level,
        },
        "loggers": {
            # El engine de SQLAlchemy es muy verboso en INFO.
            "sqlalchemy.engine": {"level": logging.WARNING},
            "alembic": {"level": level},
        },
    }

    logging.config.dictConfig(logging_config)