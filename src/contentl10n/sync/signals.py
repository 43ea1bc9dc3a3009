"""Distributed "translations changed" signalling.

Every node of a deployment runs its own provider and table. When one node
reloads because of a local edit it raises a signal; the other nodes
reload on receipt. Each signal carries the originator id of the sender so
that a node can recognise (and ignore) its own echo.

SignalChannel is the transport interface; InMemorySignalBus connects
several coordinators in one process (tests, single-host deployments).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from contentl10n.types import OriginatorId

__all__ = ["InMemorySignalBus", "Signal", "SignalChannel", "SignalHandler"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Signal:
    """One broadcast.

    Attributes:
        event_id: Channel-wide event type
        originator_id: Id of the node that raised it
        message: Free-form payload
    """

    event_id: UUID
    originator_id: OriginatorId
    message: str = ""


SignalHandler: TypeAlias = "Callable[[Signal], None]"


class SignalChannel(Protocol):
    """Fire-and-forget broadcast transport."""

    def subscribe(self, event_id: UUID, handler: SignalHandler) -> None:
        """Receive signals of one event type."""
        ...

    def unsubscribe(self, event_id: UUID, handler: SignalHandler) -> None:
        """Stop receiving signals of one event type."""
        ...

    def raise_event(self, event_id: UUID, originator_id: OriginatorId, message: str = "") -> None:
        """Broadcast to every subscriber, the sender included."""
        ...


class InMemorySignalBus:
    """Synchronous in-process SignalChannel.

    Signals are delivered on the raising thread, to every subscriber of
    the event id including the sender. A failing handler is logged and does
    not stop delivery to the others.

    Example:
        >>> bus = InMemorySignalBus()
        >>> bus.subscribe(TRANSLATIONS_UPDATED_EVENT_ID, received.append)
        >>> bus.raise_event(TRANSLATIONS_UPDATED_EVENT_ID, "node-a")
        >>> received[0].originator_id
        'node-a'
    """

    __slots__ = ("_handlers", "_lock", "_sent")

    def __init__(self) -> None:
        self._handlers: defaultdict[UUID, list[SignalHandler]] = defaultdict(list)
        self._lock = threading.Lock()
        self._sent: list[Signal] = []

    @property
    def sent(self) -> tuple[Signal, ...]:
        """Every signal raised on this bus, oldest first."""
        with self._lock:
            return tuple(self._sent)

    def subscribe(self, event_id: UUID, handler: SignalHandler) -> None:
        with self._lock:
            self._handlers[event_id].append(handler)

    def unsubscribe(self, event_id: UUID, handler: SignalHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_id)
            if handlers and handler in handlers:
                handlers.remove(handler)

    def subscriber_count(self, event_id: UUID) -> int:
        """Number of handlers subscribed to an event id."""
        with self._lock:
            return len(self._handlers.get(event_id, ()))

    def raise_event(self, event_id: UUID, originator_id: OriginatorId, message: str = "") -> None:
        signal = Signal(event_id=event_id, originator_id=originator_id, message=message)
        with self._lock:
            self._sent.append(signal)
            handlers = tuple(self._handlers.get(event_id, ()))
        for handler in handlers:
            try:
                handler(signal)
            except Exception:  # noqa: BLE001 - one subscriber must not silence the rest
                logger.exception("Signal handler failed for event %s", event_id)
