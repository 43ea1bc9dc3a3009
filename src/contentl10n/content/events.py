"""Local content mutation events.

ContentEventSource is the narrow interface the invalidation coordinator
subscribes to; ContentEventHub is an in-process implementation that
content stores (or tests) raise events on.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeAlias

from contentl10n.enums import ContentEventKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from contentl10n.content.model import ContentNode

__all__ = [
    "ContentEvent",
    "ContentEventHandler",
    "ContentEventHub",
    "ContentEventSource",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ContentEvent:
    """A content mutation.

    Attributes:
        kind: What happened to the content
        content: The affected node (None when the store could not load it)
    """

    kind: ContentEventKind
    content: ContentNode | None


ContentEventHandler: TypeAlias = "Callable[[ContentEvent], None]"


class ContentEventSource(Protocol):
    """Protocol for subscribing to content mutation events."""

    def subscribe(self, kind: ContentEventKind, handler: ContentEventHandler) -> None:
        """Register a handler for one kind of event."""
        ...

    def unsubscribe(self, kind: ContentEventKind, handler: ContentEventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        ...


class ContentEventHub:
    """In-process content event dispatcher.

    Handlers run synchronously on the raising thread, in subscription
    order. Exceptions from a handler propagate to the raiser.

    Example:
        >>> hub = ContentEventHub()
        >>> hub.subscribe(ContentEventKind.PUBLISHED, print)
        >>> hub.raise_event(ContentEventKind.PUBLISHED, node)
    """

    __slots__ = ("_handlers", "_lock")

    def __init__(self) -> None:
        """Initialize with no subscribers."""
        self._handlers: dict[ContentEventKind, list[ContentEventHandler]] = {
            kind: [] for kind in ContentEventKind
        }
        self._lock = threading.Lock()

    def subscribe(self, kind: ContentEventKind, handler: ContentEventHandler) -> None:
        """Register a handler for one kind of event."""
        with self._lock:
            self._handlers[kind].append(handler)

    def unsubscribe(self, kind: ContentEventKind, handler: ContentEventHandler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        with self._lock:
            handlers = self._handlers[kind]
            if handler in handlers:
                handlers.remove(handler)

    def subscriber_count(self, kind: ContentEventKind | None = None) -> int:
        """Number of registered handlers, for one kind or in total."""
        with self._lock:
            if kind is not None:
                return len(self._handlers[kind])
            return sum(len(handlers) for handlers in self._handlers.values())

    def raise_event(self, kind: ContentEventKind, content: ContentNode | None) -> None:
        """Dispatch an event to every handler subscribed to its kind."""
        event = ContentEvent(kind=kind, content=content)
        with self._lock:
            handlers = tuple(self._handlers[kind])
        logger.debug(
            "Raising %s for content %s to %d handler(s)",
            kind,
            content.content_id if content is not None else None,
            len(handlers),
        )
        for handler in handlers:
            handler(event)
