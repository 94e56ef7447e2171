"""In-process change feed used for record subscriptions."""

from collections import defaultdict
from enum import Enum
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


class Topic(str, Enum):
    """Kinds of records a subscriber can listen to."""

    TRANSACTIONS = "transactions"
    SUMMARY = "summary"
    SETTINGS = "settings"


Listener = Callable[[], None]


class ChangeFeed:
    """Registry of listeners keyed by (topic, owner).

    Listeners take no arguments; they re-read whatever they need, so every
    delivery reflects the latest committed state. A failing listener is
    logged and skipped: publishing happens after a write has committed and
    must not abort the operation that made it.
    """

    def __init__(self):
        self._listeners: dict[tuple[Topic, str], list[Listener]] = defaultdict(list)

    def subscribe(self, topic: Topic, owner_id: str, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a function that removes it."""
        key = (topic, owner_id)
        self._listeners[key].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def publish(self, topic: Topic, owner_id: str) -> None:
        """Notify every listener of a topic for an owner."""
        for listener in list(self._listeners.get((topic, owner_id), [])):
            try:
                listener()
            except Exception:
                logger.exception("listener_failed", topic=topic.value, owner_id=owner_id)
