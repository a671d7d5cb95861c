"""TutorStudent model."""

from typing import Optional

from datastore.models.base import BaseDocument


class TutorStudent(BaseDocument):
    """Link between a tutor and one of their students."""

    tutor_id: Optional[str] = None
    student_id: Optional[str] = None
