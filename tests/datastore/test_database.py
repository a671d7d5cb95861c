"""Tests for the database wiring."""

from unittest.mock import AsyncMock, MagicMock

import pymongo
import pytest

from datastore.database import Database
from datastore.exceptions import DatabaseError
from datastore.model_store import ModelStore
from datastore.models import Dataset, TutorStudent


@pytest.fixture
def mock_db() -> MagicMock:
    """Mock MongoDB database whose collections accept index creation."""
    db = MagicMock()
    collections = {}

    def get_collection(name):
        if name not in collections:
            collection = MagicMock()
            collection.create_indexes = AsyncMock(return_value=[])
            collections[name] = collection
        return collections[name]

    db.get_collection.side_effect = get_collection
    return db


@pytest.fixture
def mock_client(mock_db: MagicMock) -> MagicMock:
    """Mock MongoDB client."""
    client = MagicMock()
    client.get_database.return_value = mock_db
    return client


@pytest.mark.asyncio
async def test_setup_creates_stores(mock_client: MagicMock, mock_db: MagicMock):
    database = await Database.setup(mock_client, "tutorhub_test")

    mock_client.get_database.assert_called_once_with("tutorhub_test")
    assert isinstance(database.datasets, ModelStore)
    assert database.datasets.model_cls is Dataset
    assert isinstance(database.tutor_students, ModelStore)
    assert database.tutor_students.model_cls is TutorStudent


@pytest.mark.asyncio
async def test_setup_indexes_tutor_students(mock_client: MagicMock, mock_db: MagicMock):
    await Database.setup(mock_client, "tutorhub_test")

    collection = mock_db.get_collection(Database.COLLECTION_TUTOR_STUDENTS)
    indexes = collection.create_indexes.await_args.args[0]
    assert all(isinstance(index, pymongo.IndexModel) for index in indexes)
    keys = [index.document["key"] for index in indexes]
    assert {"tutor_id": 1} in keys
    assert {"student_id": 1} in keys


@pytest.mark.asyncio
async def test_setup_failure_raises_database_error(mock_client: MagicMock, mock_db: MagicMock):
    collection = mock_db.get_collection(Database.COLLECTION_TUTOR_STUDENTS)
    collection.create_indexes.side_effect = Exception("not authorized")

    with pytest.raises(DatabaseError, match="not authorized"):
        await Database.setup(mock_client, "tutorhub_test")
