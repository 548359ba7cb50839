"""
services.notifications - In-process publish/observe channel.

Listeners subscribe to a signal name and are called with no payload
every time the signal is published.  There is no queue and no
coalescing: two publishes mean two calls.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

CONTACT_CHANGED = "contact_changed"

Listener = Callable[[], None]


class NotificationChannel:

    def __init__(self):
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, name: str, listener: Listener) -> None:
        self._listeners[name].append(listener)

    def unsubscribe(self, name: str, listener: Listener) -> None:
        """Best-effort: removing a listener that is not registered is ignored."""
        try:
            self._listeners[name].remove(listener)
        except ValueError:
            pass

    def publish(self, name: str) -> int:
        """Call every listener of ``name``.  Returns how many were called."""
        listeners = list(self._listeners.get(name, ()))
        logger.debug(f"Publishing {name!r} to {len(listeners)} listener(s)")
        for listener in listeners:
            listener()
        return len(listeners)
