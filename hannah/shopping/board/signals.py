"""Payload-free change notification for the meal board."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeSignal:
    """A "subtree changed" signal.

    Subscribers are called synchronously, in subscription order, every
    time :meth:`emit` runs. They receive no payload: consumers re-derive
    whatever they need from the board itself.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug("unsubscribe: listener was not subscribed")

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Change listener %r failed", listener)
