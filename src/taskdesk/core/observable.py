# src/taskdesk/core/observable.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """Handle returned by ObservableValue.subscribe(); dispose() stops delivery."""

    __slots__ = ("_unsubscribe", "_disposed")

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe = unsubscribe
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._unsubscribe()


class ObservableValue(Generic[T]):
    """
    A current value plus a list of listeners.

    - subscribe() replays the current value right away, then every change
    - set() notifies only when the value actually changes
    - a failing listener is logged and does not stop delivery to the others
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener[T]] = []

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, listener: Listener[T]) -> Subscription:
        self._listeners.append(listener)
        sub = Subscription(lambda: self._remove(listener))
        self._deliver(listener, self._value)
        return sub

    def set(self, value: T) -> None:
        if value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            self._deliver(listener, value)

    def listener_count(self) -> int:
        return len(self._listeners)

    def _remove(self, listener: Listener[T]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @staticmethod
    def _deliver(listener: Listener[T], value: T) -> None:
        try:
            listener(value)
        except Exception:
            logger.exception("Observable listener failed")
