"""Async model store over a MongoDB collection."""

import asyncio
import inspect
from typing import Any, Callable, Dict, Generic, List, Optional, Set, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import ValidationError

from datastore.exceptions import DatabaseError, InvalidDocumentError
from datastore.models.base import BaseDocument, utc_now
from utils.logging import logger

ModelT = TypeVar("ModelT", bound=BaseDocument)

HookListener = Callable[[Any], Any]


def by_id(entity_id: str) -> Dict[str, Any]:
    """Query matching a single entity by its identifier."""
    return {"_id": entity_id}


class ModelStore(Generic[ModelT]):
    """CRUD operations and lifecycle hooks for one entity kind.

    Listeners registered with ``hook`` run after the write has completed. They
    are dispatched fire-and-forget: a failing listener is logged and never
    fails or delays the write that triggered it.
    """

    HOOKS = ("after_create", "after_update", "after_destroy")

    def __init__(self, collection: AsyncIOMotorCollection, model_cls: Type[ModelT]) -> None:
        self._collection = collection
        self.model_cls = model_cls
        self.name = model_cls.__name__
        self._hooks: Dict[str, List[HookListener]] = {hook_name: [] for hook_name in self.HOOKS}
        self._pending: Set[asyncio.Task] = set()

    def hook(self, hook_name: str, listener: HookListener) -> None:
        """Register a listener for a lifecycle hook."""
        if hook_name not in self._hooks:
            raise ValueError(f"Unknown hook '{hook_name}', expected one of {', '.join(self.HOOKS)}")
        self._hooks[hook_name].append(listener)

    def _run_hooks(self, hook_name: str, entity: ModelT) -> None:
        for listener in self._hooks[hook_name]:
            try:
                result = listener(entity)
            except Exception as e:
                logger.error(f"{self.name} {hook_name} listener failed for {entity.id}: {str(e)}")
                continue

            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._pending.add(task)
                task.add_done_callback(self._on_listener_done(hook_name, entity.id))

    def _on_listener_done(self, hook_name: str, entity_id: str) -> Callable[[asyncio.Task], None]:
        def done(task: asyncio.Task) -> None:
            self._pending.discard(task)
            if task.cancelled():
                return
            error = task.exception()
            if error is not None:
                logger.error(f"{self.name} {hook_name} listener failed for {entity_id}: {str(error)}")

        return done

    def _validate(self, body: Dict[str, Any]) -> ModelT:
        try:
            return self.model_cls.model_validate(body)
        except ValidationError as e:
            raise InvalidDocumentError(f"Invalid {self.name}: {str(e)}")

    async def find_all(self) -> List[ModelT]:
        """Lists every entity in the collection."""
        try:
            logger.debug(f"Listing {self.name} entities")
            entities = []
            async for doc in self._collection.find({}):
                entities.append(self.model_cls.model_validate(doc))
            return entities
        except Exception as e:
            raise DatabaseError(f"Failed to list {self.name} entities: {str(e)}")

    async def find(self, query: Dict[str, Any]) -> Optional[ModelT]:
        """Returns the first entity matching the query, or None."""
        try:
            logger.debug(f"Finding {self.name} matching {query}")
            doc = await self._collection.find_one(query)
        except Exception as e:
            raise DatabaseError(f"Failed to find {self.name}: {str(e)}")
        if not doc:
            return None
        return self.model_cls.model_validate(doc)

    async def create(self, body: Dict[str, Any]) -> ModelT:
        """Validates and inserts a new entity."""
        entity = self._validate(body)
        try:
            logger.info(f"Creating {self.name} {entity.id}")
            await self._collection.insert_one(entity.to_document())
        except Exception as e:
            raise DatabaseError(f"Failed to create {self.name}: {str(e)}")

        self._run_hooks("after_create", entity)
        return entity

    async def upsert(self, body: Dict[str, Any], query: Dict[str, Any]) -> ModelT:
        """Updates the entity identified by ``query`` with ``body``, inserting it when missing.

        The identifier always comes from ``query``; the body only supplies attributes.
        """
        entity_id = query["_id"]
        candidate = self._validate({**body, "_id": entity_id})

        changes = candidate.model_dump(by_alias=True, exclude_unset=True)
        changes.pop("_id", None)
        changes.pop("created_at", None)
        changes["updated_at"] = utc_now()

        try:
            logger.info(f"Upserting {self.name} {entity_id}")
            result = await self._collection.update_one(
                {"_id": entity_id},
                {"$set": changes, "$setOnInsert": {"created_at": candidate.created_at}},
                upsert=True,
            )
            doc = await self._collection.find_one({"_id": entity_id})
        except Exception as e:
            raise DatabaseError(f"Failed to upsert {self.name} {entity_id}: {str(e)}")

        if not doc:
            raise DatabaseError(f"{self.name} {entity_id} missing after upsert")

        entity = self.model_cls.model_validate(doc)
        self._run_hooks("after_create" if result.upserted_id is not None else "after_update", entity)
        return entity

    async def save(self, entity: ModelT) -> ModelT:
        """Persists the current state of an existing entity."""
        entity.updated_at = utc_now()
        try:
            logger.info(f"Saving {self.name} {entity.id}")
            result = await self._collection.replace_one({"_id": entity.id}, entity.to_document())
        except Exception as e:
            raise DatabaseError(f"Failed to save {self.name} {entity.id}: {str(e)}")

        if result.matched_count == 0:
            raise DatabaseError(f"{self.name} {entity.id} no longer exists")

        self._run_hooks("after_update", entity)
        return entity

    async def destroy(self, entity: ModelT) -> None:
        """Deletes an entity."""
        try:
            logger.info(f"Deleting {self.name} {entity.id}")
            await self._collection.delete_one({"_id": entity.id})
        except Exception as e:
            raise DatabaseError(f"Failed to delete {self.name} {entity.id}: {str(e)}")

        self._run_hooks("after_destroy", entity)
