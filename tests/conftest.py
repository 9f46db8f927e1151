"""
Pytest configuration and shared fixtures for MDB_FACADE tests.

This module provides:
- Mock Motor client/database/collection fixtures
- Connected Database facade fixtures
- Testcontainers MongoDB fixtures for integration tests
"""

import os
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mdb_facade.database import Database
from mdb_facade.observability import get_metrics_collector

TEST_MONGO_URI = "mongodb://localhost:27017"
TEST_DB_NAME = "test_db"


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless MDB_FACADE_INTEGRATION=1."""
    if os.environ.get("MDB_FACADE_INTEGRATION") == "1":
        return
    skip_integration = pytest.mark.skip(
        reason="integration tests need Docker; set MDB_FACADE_INTEGRATION=1 to run"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ============================================================================
# MOCK MOTOR FIXTURES
# ============================================================================


def make_mock_collection(name: str) -> MagicMock:
    """Create a mock Motor collection with async CRUD methods."""
    collection = MagicMock(name=f"collection[{name}]")
    collection.name = name
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id="test_id"))
    collection.insert_many = AsyncMock(return_value=MagicMock(inserted_ids=["id1", "id2"]))
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.update_many = AsyncMock(return_value=MagicMock(modified_count=2))
    collection.replace_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=2))
    collection.count_documents = AsyncMock(return_value=0)
    collection.create_indexes = AsyncMock(return_value=["test_index"])
    # find() and aggregate() return cursors synchronously in Motor
    collection.find = MagicMock(return_value=MagicMock(name="cursor"))
    collection.aggregate = MagicMock(return_value=MagicMock(name="command_cursor"))
    return collection


class MockMotorDatabase:
    """Database stand-in that hands out one mock collection per name."""

    def __init__(self, name: str):
        self.name = name
        self.collections: Dict[str, MagicMock] = {}
        self.drop_collection = AsyncMock()

    def __getitem__(self, name: str) -> MagicMock:
        if name not in self.collections:
            self.collections[name] = make_mock_collection(name)
        return self.collections[name]


@pytest.fixture
def mock_motor_client() -> MagicMock:
    """Create a mock AsyncIOMotorClient."""
    client = MagicMock(name="AsyncIOMotorClient")
    client.admin.command = AsyncMock(return_value={"ok": 1.0})
    client.drop_database = AsyncMock()

    databases: Dict[str, MockMotorDatabase] = {}

    def get_database(db_name: str) -> MockMotorDatabase:
        if db_name not in databases:
            databases[db_name] = MockMotorDatabase(db_name)
        return databases[db_name]

    client.__getitem__.side_effect = get_database
    return client


@pytest.fixture
def motor_client_factory(mock_motor_client: MagicMock):
    """Patch AsyncIOMotorClient in the facade module; yields the patched class."""
    with patch(
        "mdb_facade.database.facade.AsyncIOMotorClient", return_value=mock_motor_client
    ) as factory:
        yield factory


@pytest.fixture
def collection_mapping() -> Dict[str, str]:
    return {"a": "b", "c": "d"}


@pytest.fixture
async def connected_database(
    motor_client_factory: MagicMock, collection_mapping: Dict[str, str]
) -> Database:
    """A Database facade connected to the mock client."""
    database = Database(mapping=collection_mapping)
    await database.connect(TEST_MONGO_URI, TEST_DB_NAME)
    yield database
    await database.disconnect()


@pytest.fixture
def mock_db(mock_motor_client: MagicMock) -> MockMotorDatabase:
    """The mock database behind ``connected_database``."""
    return mock_motor_client[TEST_DB_NAME]


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with an empty metrics collector."""
    get_metrics_collector().reset()
    yield
    get_metrics_collector().reset()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove facade-related environment variables."""
    for var in [
        "MONGO_URI",
        "DB_NAME",
        "MONGO_ALLOW_DISK_USE",
        "MONGO_MAX_POOL_SIZE",
        "MONGO_MIN_POOL_SIZE",
        "MONGO_SERVER_SELECTION_TIMEOUT_MS",
        "MONGO_COLLECTION_MAPPING",
    ]:
        monkeypatch.delenv(var, raising=False)
    yield monkeypatch


# ============================================================================
# TESTCONTAINERS FIXTURES (Real MongoDB for Integration Tests)
# ============================================================================


@pytest.fixture(scope="session")
def mongodb_container():
    """
    Start a MongoDB container for integration tests.

    Session-scoped: the container starts once and is reused.
    """
    from testcontainers.mongodb import MongoDbContainer

    with MongoDbContainer(image="mongo:7.0") as container:
        yield container


@pytest.fixture
def mongodb_connection_string(mongodb_container) -> str:
    return mongodb_container.get_connection_url()


@pytest.fixture
async def real_database(mongodb_connection_string: str) -> Any:
    """
    A Database facade connected to the container.

    Uses a unique database name per test and drops it afterwards.
    """
    db_name = f"facade_test_{os.getpid()}_{id(mongodb_connection_string)}"
    database = Database(mapping={"people": "people_v2"})
    await database.connect(mongodb_connection_string, db_name)
    yield database
    if database.is_connected:
        await database.drop_database()
        await database.disconnect()
