"""Settings — driver rewrite and defaults."""

from restaurants.config import Settings


def test_plain_postgres_url_gets_async_driver():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///local.db")
    assert settings.database_url == "sqlite+aiosqlite:///local.db"


def test_slow_request_threshold_default():
    assert Settings().slow_request_threshold_ms == 1000
