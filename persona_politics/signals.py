"""In-memory pub/sub bus with flush-on-demand semantics.

The simulation publishes notifications (``world_event``,
``cabinet_resigned``, ``remark``, ``game_over``, ``term_over``) while it
mutates state; subscribers only see them on ``flush``, after the mutation
sequence that produced them has finished.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:
    """Queues game notifications until ``flush``.

    Carries ``world_event``, ``cabinet_resigned``, ``remark``,
    ``game_over`` and ``term_over``; any other name works the same way.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def pending(self) -> list[str]:
        return [name for name, _ in self._queue]

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for signal_name, data in snapshot:
            for handler in list(self._subscribers.get(signal_name, [])):
                try:
                    handler(signal_name, data)
                except Exception:
                    logger.exception("Handler for %r failed", signal_name)

    def clear(self) -> None:
        self._queue.clear()
