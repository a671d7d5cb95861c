"""Republishes model store lifecycle hooks as hub events."""

from typing import Any, Callable, Dict, Optional

from datastore.model_store import ModelStore
from events.hub import EventHandler, EventHub, Subscription
from utils.logging import logger

# Lifecycle hook -> event name. Creation and update are both published as "save".
LIFECYCLE_EVENTS: Dict[str, str] = {
    "after_create": "save",
    "after_update": "save",
    "after_destroy": "remove",
}


def scoped_event(event: str, entity_id: Any) -> str:
    """Name of the event that only concerns one entity, e.g. ``save:<id>``."""
    return f"{event}:{entity_id}"


class LifecycleEventBroadcaster:
    """Publishes ``save``/``remove`` events for every write made through a model store.

    Each write is published twice: once on the entity-scoped channel
    (``save:<id>``) and once on the general channel (``save``).
    """

    def __init__(self, store: ModelStore, hub: Optional[EventHub] = None) -> None:
        self.store = store
        self.hub = hub or EventHub(f"{store.name}Events")

        for hook_name, event in LIFECYCLE_EVENTS.items():
            store.hook(hook_name, self._emit_event(event))

        logger.info(f"Registered lifecycle events for {store.name}")

    def _emit_event(self, event: str) -> Callable[[Any], None]:
        def emit(entity: Any) -> None:
            self.hub.emit(scoped_event(event, entity.id), entity)
            self.hub.emit(event, entity)

        return emit

    def subscribe(self, event_name: str, handler: EventHandler) -> Subscription:
        return self.hub.subscribe(event_name, handler)

    def unsubscribe(self, subscription: Subscription) -> bool:
        return self.hub.unsubscribe(subscription)
