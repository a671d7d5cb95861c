"""API dependencies."""

from fastapi import Depends, Request

from datastore.database import Database
from datastore.model_store import ModelStore
from datastore.models import Dataset
from events.lifecycle import LifecycleEventBroadcaster


async def get_database(request: Request) -> Database:
    """Database opened by the application lifespan."""
    return request.app.state.database


async def get_dataset_store(database: Database = Depends(get_database)) -> ModelStore[Dataset]:
    """Dependency for the Dataset store."""
    return database.datasets


async def get_tutor_student_events(request: Request) -> LifecycleEventBroadcaster:
    """Dependency for the TutorStudent lifecycle events."""
    return request.app.state.tutor_student_events
