"""In-process publish/subscribe hub."""

import asyncio
import inspect
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Callable, Dict, List, Set

from utils.logging import logger

EventHandler = Callable[[Any], Any]

_subscription_ids = count(1)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by ``EventHub.subscribe``, used to unsubscribe."""

    event_name: str
    handler: EventHandler = field(compare=False)
    id: int = field(default_factory=lambda: next(_subscription_ids))


class EventHub:
    """Synchronous fan-out of named events to any number of subscribers.

    Events emitted while nobody is subscribed are dropped; there is no buffering
    or replay.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, event_name: str, handler: EventHandler) -> Subscription:
        subscription = Subscription(event_name=event_name, handler=handler)
        self._subscriptions.setdefault(event_name, []).append(subscription)
        logger.debug(f"{self.name}: subscribed #{subscription.id} to '{event_name}'")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Removes a subscription. Returns False if it was not registered."""
        subscriptions = self._subscriptions.get(subscription.event_name, [])
        if subscription not in subscriptions:
            return False
        subscriptions.remove(subscription)
        if not subscriptions:
            del self._subscriptions[subscription.event_name]
        logger.debug(f"{self.name}: unsubscribed #{subscription.id} from '{subscription.event_name}'")
        return True

    def listener_count(self, event_name: str) -> int:
        return len(self._subscriptions.get(event_name, []))

    def emit(self, event_name: str, payload: Any) -> int:
        """Delivers ``payload`` to the current subscribers of ``event_name``.

        Handlers run in subscription order. Coroutine handlers are scheduled on the
        running loop. A handler that raises is logged and the remaining handlers
        still receive the event. Returns the number of handlers invoked.
        """
        # Snapshot so handlers may (un)subscribe while being notified
        subscriptions = list(self._subscriptions.get(event_name, []))
        for subscription in subscriptions:
            try:
                result = subscription.handler(payload)
            except Exception as e:
                logger.error(f"{self.name}: handler #{subscription.id} for '{event_name}' failed: {str(e)}")
                continue

            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._pending.add(task)
                task.add_done_callback(self._on_handler_done(event_name, subscription.id))

        return len(subscriptions)

    def _on_handler_done(self, event_name: str, subscription_id: int) -> Callable[[asyncio.Task], None]:
        def done(task: asyncio.Task) -> None:
            self._pending.discard(task)
            if task.cancelled():
                return
            error = task.exception()
            if error is not None:
                logger.error(f"{self.name}: handler #{subscription_id} for '{event_name}' failed: {str(error)}")

        return done
