from __future__ import annotations

import logging
from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Signal(Generic[T]):
    """
    Minimal in-process signal/slot primitive.

    Subscribers are called synchronously, in connection order, on the emitting
    thread. A subscriber whose target has been garbage collected (weak proxies
    raise ReferenceError) is pruned instead of breaking the emit.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def connect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, payload: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        stale_callbacks: list[Callable[[T], None]] = []
        for callback in subscribers:
            try:
                callback(payload)
            except ReferenceError:
                stale_callbacks.append(callback)
        if stale_callbacks:
            logger.debug("Pruning %d dead subscriber(s) from %s", len(stale_callbacks), self.name or "signal")
            with self._lock:
                for callback in stale_callbacks:
                    if callback in self._subscribers:
                        self._subscribers.remove(callback)


__all__ = ["Signal"]
