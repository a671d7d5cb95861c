"""Datastore package."""

from datastore.database import Database
from datastore.exceptions import (
    DatabaseError,
    DocumentStoreError,
    InvalidDocumentError,
)
from datastore.model_store import ModelStore, by_id
from datastore.models import Dataset, TutorStudent

__all__ = [
    # Main classes
    "Database",
    "ModelStore",
    "by_id",
    # Models
    "Dataset",
    "TutorStudent",
    # Exceptions
    "DocumentStoreError",
    "DatabaseError",
    "InvalidDocumentError",
]
