from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.db import _engine_options


def test_log_level_is_case_insensitive() -> None:
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_unknown_timezone_rejected() -> None:
    with pytest.raises(ValidationError, match="unknown timezone"):
        Settings(timezone="Mars/Olympus_Mons")


def test_postgres_engine_is_pooled() -> None:
    options = _engine_options(Settings(database_url="postgresql+asyncpg://u:p@localhost/leave", database_pool_size=3))
    assert options["pool_size"] == 3
    assert options["pool_pre_ping"] is True


def test_sqlite_engine_has_no_pool_sizing() -> None:
    options = _engine_options(Settings(database_url="sqlite+aiosqlite://"))
    assert "pool_size" not in options
    assert "max_overflow" not in options
