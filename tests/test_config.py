import json
import logging

import pytest
from pydantic import ValidationError

from marketdb.core.config import Settings
from marketdb.core.logging import JsonFormatter, log_context


@pytest.mark.parametrize(
    "sync_url, async_url",
    [
        ("sqlite:///./market.db", "sqlite+aiosqlite:///./market.db"),
        ("postgresql://u:p@db:5432/market", "postgresql+asyncpg://u:p@db:5432/market"),
        ("postgresql+psycopg://u:p@db/market", "postgresql+asyncpg://u:p@db/market"),
        ("mysql+pymysql://u:p@db:3306/market", "mysql+aiomysql://u:p@db:3306/market"),
    ],
)
def test_async_url_is_derived(sync_url, async_url):
    settings = Settings(DATABASE_URL=sync_url, ASYNC_DATABASE_URL=None)
    assert settings.ASYNC_DATABASE_URL == async_url


def test_admin_email_requires_password():
    with pytest.raises(ValidationError):
        Settings(ADMIN_EMAIL="admin@example.com", ADMIN_INITIAL_PASSWORD=None)


def test_admin_password_has_minimum_length():
    with pytest.raises(ValidationError):
        Settings(ADMIN_EMAIL="admin@example.com", ADMIN_INITIAL_PASSWORD="short")


def test_report_default_limit_cannot_exceed_max():
    with pytest.raises(ValidationError):
        Settings(REPORT_DEFAULT_LIMIT=20000, REPORT_MAX_LIMIT=10000)


def test_defaults():
    settings = Settings(ADMIN_EMAIL=None, ADMIN_INITIAL_PASSWORD=None, LEDGER_TABLE="SequelizeMeta")
    assert settings.LEDGER_TABLE == "SequelizeMeta"
    assert settings.REPORT_EXPIRY_HOURS == 24
    assert settings.admin_seed_enabled is False


def test_json_formatter_emits_context_with_reserved_names():
    logger = logging.getLogger("marketdb.schema.runner")
    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        __file__,
        1,
        "seed.apply.done",
        None,
        None,
        extra=log_context(unit_id="000_roles", created=3, name="roles"),
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "seed.apply.done"
    assert payload["logger"] == "marketdb.schema.runner"
    assert payload["context"] == {"unit_id": "000_roles", "created": 3, "name": "roles"}


def test_setup_logging_installs_json_handler():
    from marketdb.core.logging import setup_logging

    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
