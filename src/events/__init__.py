"""Model lifecycle events."""

from events.hub import EventHub, Subscription
from events.lifecycle import LIFECYCLE_EVENTS, LifecycleEventBroadcaster, scoped_event
from events.tutor_student import create_tutor_student_events

__all__ = [
    "EventHub",
    "Subscription",
    "LIFECYCLE_EVENTS",
    "LifecycleEventBroadcaster",
    "scoped_event",
    "create_tutor_student_events",
]
