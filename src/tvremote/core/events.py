from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")
Listener = Callable[[StateT], None]


class Observable(Generic[StateT]):
    """Fan out state snapshots to subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener[StateT]] = []
        self._listeners_lock = threading.Lock()

    def subscribe(self, listener: Listener[StateT]) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        with self._listeners_lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def _publish(self, state: StateT) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)
