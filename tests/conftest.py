from datetime import UTC, datetime, timedelta

import pytest

from userbase.adapters.auth.crypto import PasslibPasswordHasher
from userbase.adapters.sqlite.migrator import SQLiteMigrator
from userbase.adapters.sqlite.repos import SQLiteUserRepo

TEST_SECRET = "test-signing-secret"


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def fast_hasher() -> PasslibPasswordHasher:
    # Minimum bcrypt cost keeps the suite quick
    return PasslibPasswordHasher(scheme="bcrypt", rounds=4)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "data" / "userbase.db")


@pytest.fixture
def user_repo(db_path) -> SQLiteUserRepo:
    SQLiteMigrator(db_path).run_migrations()
    return SQLiteUserRepo(db_path)


@pytest.fixture
def signing_secret() -> str:
    return TEST_SECRET
