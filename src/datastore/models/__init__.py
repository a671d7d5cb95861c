"""Models package for the datastore."""

from datastore.models.base import BaseDocument
from datastore.models.dataset import Dataset
from datastore.models.tutor_student import TutorStudent

__all__ = [
    "BaseDocument",
    "Dataset",
    "TutorStudent",
]
