"""Invalidation coordinator: keeps the content provider's table current.

Lifecycle (driven by the host application):

    initialize()      subscribe to content events and the distributed
                      signal, unless the provider is disabled
    init_complete()   first load, then register the provider with the
                      localization service
    uninitialize()    unsubscribe, unregister, discard the table

State machine:

    UNINITIALIZED --initialize(enabled=False)--> DISABLED
    UNINITIALIZED --init_complete()--> LOADING --first load done--> LOADED
    LOADED --trigger--> RELOADING --load done (ok or failed)--> LOADED
    any --uninitialize()--> UNINITIALIZED

Triggers:
    A local PUBLISHED, MOVED, DELETED or DELETED_LANGUAGE event on
    translation content reloads the table and, after a successful load,
    broadcasts TRANSLATIONS_UPDATED_EVENT_ID tagged with this node's
    originator id. A signal from another node reloads without
    re-broadcasting; the node's own echo is ignored, so one edit costs
    exactly one reload per node.

Concurrency:
    Reloads are serialized by a process-local lock. Triggers that arrive
    while a load is running (the first one included) set a pending flag;
    the running loader performs one follow-up reload for all of them.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import TYPE_CHECKING

from contentl10n.constants import TRANSLATIONS_UPDATED_EVENT_ID
from contentl10n.content.model import is_localization_content
from contentl10n.diagnostics import ProviderRegistrationError
from contentl10n.enums import ContentEventKind, ProviderState

if TYPE_CHECKING:
    from contentl10n.config import ProviderConfig
    from contentl10n.content.events import ContentEvent, ContentEventSource
    from contentl10n.runtime.provider import ContentXmlLocalizationProvider, LoadResult
    from contentl10n.runtime.service import LocalizationService
    from contentl10n.sync.signals import Signal, SignalChannel
    from contentl10n.types import OriginatorId

__all__ = ["InvalidationCoordinator"]

logger = logging.getLogger(__name__)

_ACTIVE_STATES = frozenset(
    {ProviderState.LOADING, ProviderState.LOADED, ProviderState.RELOADING}
)


class InvalidationCoordinator:
    """Reload the content provider on content changes, cluster-wide.

    Example:
        >>> coordinator = InvalidationCoordinator(provider, service, hub, bus, config)
        >>> coordinator.initialize()
        >>> coordinator.init_complete()
        >>> coordinator.state
        <ProviderState.LOADED: 'loaded'>
    """

    __slots__ = (
        "_config",
        "_content_events",
        "_last_result",
        "_lock",
        "_originator_id",
        "_pending",
        "_pending_broadcast",
        "_provider",
        "_reload_count",
        "_reload_lock",
        "_service",
        "_signals",
        "_state",
        "_subscribed",
    )

    def __init__(
        self,
        provider: ContentXmlLocalizationProvider,
        service: LocalizationService,
        content_events: ContentEventSource,
        signals: SignalChannel,
        config: ProviderConfig | None = None,
        *,
        originator_id: OriginatorId | None = None,
    ) -> None:
        """Initialize coordinator in UNINITIALIZED state.

        Args:
            provider: Provider whose table is kept current
            service: Localization service the provider is registered with
            content_events: Local content event source
            signals: Distributed signal channel
            config: Provider configuration (default: the provider's)
            originator_id: Id tagging this node's broadcasts (default: random)
        """
        self._provider = provider
        self._service = service
        self._content_events = content_events
        self._signals = signals
        self._config = config if config is not None else provider.config
        self._originator_id = originator_id or str(uuid.uuid4())

        self._lock = threading.Lock()
        self._reload_lock = threading.Lock()
        self._state = ProviderState.UNINITIALIZED
        self._subscribed = False
        self._pending = False
        self._pending_broadcast = False
        self._reload_count = 0
        self._last_result: LoadResult | None = None

    @property
    def state(self) -> ProviderState:
        """Current lifecycle state."""
        return self._state

    @property
    def originator_id(self) -> OriginatorId:
        """Id this node tags its broadcasts with."""
        return self._originator_id

    @property
    def reload_count(self) -> int:
        """Loads performed so far, including the first one."""
        return self._reload_count

    @property
    def last_result(self) -> LoadResult | None:
        """Result of the most recent load."""
        return self._last_result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Subscribe to content events and signals if enabled."""
        with self._lock:
            if self._state is not ProviderState.UNINITIALIZED or self._subscribed:
                return
            if not self._config.enabled:
                self._state = ProviderState.DISABLED
                logger.info("Content translation provider disabled; not registering")
                return
            self._subscribed = True

        for kind in ContentEventKind:
            self._content_events.subscribe(kind, self._on_content_event)
        self._signals.subscribe(TRANSLATIONS_UPDATED_EVENT_ID, self._on_signal)
        logger.info("Translation provider initialized (originator %s)", self._originator_id)

    def init_complete(self) -> None:
        """Perform the first load and register the provider.

        Triggers arriving during the first load are held and served by a
        single follow-up reload once the provider is registered.
        """
        with self._lock:
            if not self._subscribed or self._state is not ProviderState.UNINITIALIZED:
                return
            self._state = ProviderState.LOADING

        with self._reload_lock:
            try:
                self._load()
            finally:
                registered = self._register()

        if registered:
            logger.info(
                "Translation provider loaded as %s provider",
                "primary" if self._config.is_primary_provider else "fallback",
            )
        self._run_pending()

    def uninitialize(self) -> None:
        """Unsubscribe, unregister and discard the table.

        Safe in any state. Must not be called from within a reload on the
        same thread.
        """
        with self._lock:
            was_subscribed = self._subscribed
            self._subscribed = False
            self._state = ProviderState.UNINITIALIZED
            self._pending = False
            self._pending_broadcast = False

        if was_subscribed:
            for kind in ContentEventKind:
                self._content_events.unsubscribe(kind, self._on_content_event)
            self._signals.unsubscribe(TRANSLATIONS_UPDATED_EVENT_ID, self._on_signal)

        # Waits for an in-flight first load to finish registering.
        with self._reload_lock:
            self._service.remove_provider(self._provider.name)
            self._provider.unload()
        logger.info("Translation provider uninitialized")

    def _register(self) -> bool:
        """Register the provider and enter LOADED, unless torn down meanwhile.

        Caller holds the reload lock.
        """
        with self._lock:
            if not self._subscribed:
                return False
        try:
            if self._config.is_primary_provider:
                self._service.insert_provider(self._provider)
            else:
                self._service.add_provider(self._provider)
        except ProviderRegistrationError as e:
            logger.warning("Provider not registered: %s", e)
        with self._lock:
            if not self._subscribed:
                return False
            self._state = ProviderState.LOADED
        return True

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def _on_content_event(self, event: ContentEvent) -> None:
        if self._state not in _ACTIVE_STATES:
            return
        if not is_localization_content(event.content):
            return
        logger.debug(
            "Content %s %s; reloading translations",
            event.content.content_id if event.content is not None else None,
            event.kind,
        )
        self.request_reload(broadcast=True)

    def _on_signal(self, signal: Signal) -> None:
        if signal.originator_id == self._originator_id:
            return
        if self._state not in _ACTIVE_STATES:
            return
        logger.debug("Translations changed on %s; reloading", signal.originator_id)
        self.request_reload(broadcast=False)

    def request_reload(self, *, broadcast: bool = False) -> None:
        """Reload now, or after the load already running.

        Args:
            broadcast: Signal other nodes after a successful load
        """
        with self._lock:
            if self._state not in _ACTIVE_STATES:
                return
            self._pending = True
            self._pending_broadcast = self._pending_broadcast or broadcast
            if self._state is ProviderState.LOADING:
                # init_complete() drains once the provider is registered.
                return
        self._run_pending()

    def _run_pending(self) -> None:
        while self._reload_lock.acquire(blocking=False):
            try:
                self._drain()
            finally:
                self._reload_lock.release()
            # A trigger may have landed between the last drain and release.
            with self._lock:
                if not self._pending:
                    return

    def _drain(self) -> None:
        while True:
            with self._lock:
                if not self._pending or not self._subscribed:
                    self._pending = False
                    self._pending_broadcast = False
                    return
                broadcast = self._pending_broadcast
                self._pending = False
                self._pending_broadcast = False
                self._state = ProviderState.RELOADING

            try:
                result = self._load()
            finally:
                with self._lock:
                    subscribed = self._subscribed
                    if subscribed:
                        self._state = ProviderState.LOADED
            if not subscribed:
                return

            if broadcast and result.succeeded:
                self._signals.raise_event(
                    TRANSLATIONS_UPDATED_EVENT_ID,
                    self._originator_id,
                    "Translations updated",
                )

    def _load(self) -> LoadResult:
        result = self._provider.reload()
        self._reload_count += 1
        self._last_result = result
        if not result.succeeded:
            logger.warning("Translation reload failed: %s", result.error)
        return result
