"""A thread-safe, double-buffered queue that dispatches messages to handlers."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence

from dgengine.message import Message, MessageFlag

Handler = Callable[[Message], object]


class MessageBus:
    """Collects messages from any thread and hands them to handlers in order.

    Messages posted while dispatching are queued for the next cycle.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: list[Message] = []

    def register(self, message: Message) -> None:
        """Queue a copy of ``message`` for later dispatch."""
        cpy = message.clone()
        with self._lock:
            self._pending.append(cpy)

    def message_count(self) -> int:
        """Return how many messages wait for the next dispatch."""
        with self._lock:
            return len(self._pending)

    def dispatch_messages(self, handlers: Sequence[Handler], cycles: int = 0) -> None:
        """Pass each queued message to ``handlers`` in order until one handles it.

        Dispatching may post new messages; these are dispatched in further
        cycles, up to ``cycles`` of them (0 means no limit).
        """
        remaining = cycles if cycles > 0 else None
        while remaining is None or remaining > 0:
            with self._lock:
                batch, self._pending = self._pending, []
            if not batch:
                break
            for message in batch:
                for handler in handlers:
                    handler(message)
                    if message.query_flag(MessageFlag.HANDLED):
                        break
            if remaining is not None:
                remaining -= 1


_instance: MessageBus | None = None


def init() -> MessageBus:
    """Create the shared bus, replacing any previous one."""
    global _instance
    _instance = MessageBus()
    return _instance


def shut_down() -> None:
    """Drop the shared bus."""
    global _instance
    _instance = None


def instance() -> MessageBus | None:
    """Return the shared bus, or None if it has not been created."""
    return _instance


def post(message: Message) -> None:
    """Queue ``message`` on the shared bus."""
    if _instance is None:
        raise RuntimeError("message bus has not been initialised")
    _instance.register(message)