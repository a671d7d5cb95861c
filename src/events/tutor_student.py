"""TutorStudent model events."""

from datastore.database import Database
from events.lifecycle import LifecycleEventBroadcaster


def create_tutor_student_events(database: Database) -> LifecycleEventBroadcaster:
    """Publish TutorStudent creations, updates and deletions on their own hub."""
    return LifecycleEventBroadcaster(database.tutor_students)
