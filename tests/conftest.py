import os

# Keep settings independent of the developer's environment
os.environ.setdefault("DIRECTORY_PHONE_REGION", "CA")
os.environ.setdefault("DIRECTORY_SEARCH_LIMIT", "100")

from collections.abc import Iterator
from typing import Any
from unittest.mock import Mock

import pytest
from sqlalchemy.orm import Session, sessionmaker

from rider_directory.db.database import init_database
from rider_directory.db.repositories.rider_repository import RiderRepository
from rider_directory.pubsub.bus import NotificationBus
from rider_directory.settings import DirectorySettings
from tests.factories import RiderFactory


@pytest.fixture
def temp_sqlite_db(tmp_path):
    """Temporary SQLite database for persistence tests."""
    return tmp_path / "test_directory.db"


@pytest.fixture
def session_maker(temp_sqlite_db) -> sessionmaker[Any]:
    return init_database(f"sqlite:///{temp_sqlite_db}")


@pytest.fixture
def session(session_maker) -> Iterator[Session]:
    with session_maker() as session:
        yield session


@pytest.fixture
def bus() -> Iterator[NotificationBus]:
    with NotificationBus() as bus:
        yield bus


@pytest.fixture
def directory_settings() -> DirectorySettings:
    return DirectorySettings(phone_region="CA", search_limit=100)


@pytest.fixture
def repo(session, bus, directory_settings) -> RiderRepository:
    return RiderRepository(session, bus, directory_settings)


@pytest.fixture
def rider_factory() -> RiderFactory:
    """Factory for rider data with seeded Faker."""
    return RiderFactory(seed=42)


@pytest.fixture
def mock_redis_client():
    """Mock Redis client for pub/sub tests."""
    return Mock()
