"""
Pytest fixtures and test configuration for hubstate tests.
"""

import pytest

from hubstate.config import get_settings
from hubstate.controller import PersistenceController
from hubstate.errors import StoreError
from hubstate.storage import MemoryStore, SQLiteStore

TEST_KEY = "test-hub-state"


class FlakyStore(MemoryStore):
    """MemoryStore whose reads/writes can be switched to fail."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key, default=None):
        if self.fail_reads:
            raise StoreError("disk I/O error")
        return super().get(key, default)

    def set(self, key, value):
        if self.fail_writes:
            raise StoreError("database or disk is full")
        self.writes += 1
        super().set(key, value)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point configuration at a temp home and drop any cached settings."""
    monkeypatch.setenv("HUBSTATE_HOME", str(tmp_path / "home"))
    for var in ("HUBSTATE_DB_PATH", "HUBSTATE_STATE_KEY", "HUBSTATE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def tmp_db(tmp_path):
    """Create a temporary database path."""
    return tmp_path / "state" / "test.db"


@pytest.fixture
def sqlite_store(tmp_db):
    store = SQLiteStore(db_path=tmp_db)
    yield store
    store.close()


@pytest.fixture
def controller(memory_store):
    return PersistenceController(store=memory_store, key=TEST_KEY)
