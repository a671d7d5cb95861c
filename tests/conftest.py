"""Shared fixtures."""

import copy
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest
from pymongo.errors import DuplicateKeyError

from datastore.model_store import ModelStore
from datastore.models import Dataset, TutorStudent


def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class InMemoryCollection:
    """Subset of AsyncIOMotorCollection backed by a dict keyed by ``_id``."""

    def __init__(self) -> None:
        self.docs: Dict[Any, Dict[str, Any]] = {}
        self.writes: List[str] = []

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        if document["_id"] in self.docs:
            raise DuplicateKeyError(f"duplicate key: {document['_id']}")
        self.writes.append("insert_one")
        self.docs[document["_id"]] = copy.deepcopy(document)
        return SimpleNamespace(inserted_id=document["_id"])

    async def find_one(self, query: Dict[str, Any]) -> Any:
        for doc in self.docs.values():
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def find(self, query: Dict[str, Any]):
        for doc in list(self.docs.values()):
            if _matches(doc, query):
                yield copy.deepcopy(doc)

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any], upsert: bool = False) -> SimpleNamespace:
        self.writes.append("update_one")
        existing = await self.find_one(query)
        if existing is None:
            if not upsert:
                return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=None)
            doc = {**query, **update.get("$setOnInsert", {}), **update.get("$set", {})}
            self.docs[doc["_id"]] = copy.deepcopy(doc)
            return SimpleNamespace(matched_count=0, modified_count=0, upserted_id=doc["_id"])

        existing.update(copy.deepcopy(update.get("$set", {})))
        self.docs[existing["_id"]] = existing
        return SimpleNamespace(matched_count=1, modified_count=1, upserted_id=None)

    async def replace_one(self, query: Dict[str, Any], replacement: Dict[str, Any]) -> SimpleNamespace:
        self.writes.append("replace_one")
        existing = await self.find_one(query)
        if existing is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        self.docs[existing["_id"]] = copy.deepcopy(replacement)
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        self.writes.append("delete_one")
        existing = await self.find_one(query)
        if existing is None:
            return SimpleNamespace(deleted_count=0)
        del self.docs[existing["_id"]]
        return SimpleNamespace(deleted_count=1)


@pytest.fixture
def datasets_collection() -> InMemoryCollection:
    return InMemoryCollection()


@pytest.fixture
def dataset_store(datasets_collection: InMemoryCollection) -> ModelStore[Dataset]:
    """Dataset store backed by an in-memory collection."""
    return ModelStore(datasets_collection, Dataset)


@pytest.fixture
def tutor_student_store() -> ModelStore[TutorStudent]:
    """TutorStudent store backed by an in-memory collection."""
    return ModelStore(InMemoryCollection(), TutorStudent)
