from pathlib import Path
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from hamfest.db.models import Base
from hamfest.storage import MemoryStorage
from hamfest.store import SqlMarketplaceStore
from tests.fake_store import FakeMarketplaceStore

sqlite_engine = create_engine(
    "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
)


@pytest.fixture
def test_db_session() -> Generator[sessionmaker[Session], None, None]:
    """
    Test fixture providing a clean in-memory SQLite session factory.
    DB is cleared after use.
    """
    sm = sessionmaker(sqlite_engine)

    Base.metadata.create_all(sqlite_engine)
    yield sm
    Base.metadata.drop_all(sqlite_engine)


@pytest.fixture
def sql_store(tmp_path: Path) -> Generator[SqlMarketplaceStore, None, None]:
    """
    A SQL-backed store on a file database.

    The store runs queries concurrently from worker threads, so each thread needs its own
    connection (which an in-memory StaticPool database cannot provide).
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'hamfest-test.db'}")
    Base.metadata.create_all(engine)
    yield SqlMarketplaceStore(sessionmaker(engine))
    engine.dispose()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def fake_store() -> FakeMarketplaceStore:
    return FakeMarketplaceStore()
