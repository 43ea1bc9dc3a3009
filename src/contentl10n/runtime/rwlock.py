"""Readers-writer lock guarding the localization provider chain.

Lookups walk the provider chain concurrently (shared access); adding,
inserting or removing a provider takes exclusive access. Waiting writers
block new readers so that registration during lookup-heavy traffic
cannot starve.

Limitations:
    Upgrading a held read lock to a write lock raises RuntimeError, as does
    taking the read lock while holding the write lock, or taking the write
    lock twice. Registration is single-level: it never needs to read the
    chain under the write lock.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference and reentrant reads.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     providers = tuple(chain)
        >>> with lock.write():
        ...     chain.insert(0, provider)
    """

    __slots__ = ("_condition", "_readers", "_waiting_writers", "_writer")

    def __init__(self) -> None:
        """Initialize an unlocked lock."""
        self._condition = threading.Condition(threading.Lock())
        # thread id -> reentrant read depth
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold shared access for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Raises:
            RuntimeError: If the thread holds the write lock
            TimeoutError: If access is not granted in time
            ValueError: If timeout is negative
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold exclusive access for the duration of the block.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Raises:
            RuntimeError: If the thread already holds the read or write lock
            TimeoutError: If access is not granted in time
            ValueError: If timeout is negative
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @property
    def reader_count(self) -> int:
        """Distinct threads currently holding the read lock."""
        with self._condition:
            return len(self._readers)

    @property
    def writer_active(self) -> bool:
        """True while some thread holds the write lock."""
        with self._condition:
            return self._writer is not None

    @property
    def writers_waiting(self) -> int:
        """Threads blocked waiting for the write lock."""
        with self._condition:
            return self._waiting_writers

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = _deadline(timeout)
        me = threading.get_ident()
        with self._condition:
            if me in self._readers:
                self._readers[me] += 1
                return
            if self._writer == me:
                msg = "Cannot acquire read lock while holding the write lock"
                raise RuntimeError(msg)
            while self._writer is not None or self._waiting_writers > 0:
                self._wait(deadline, "read")
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            depth = self._readers.get(me)
            if depth is None:
                msg = "Thread does not hold the read lock"
                raise RuntimeError(msg)
            if depth > 1:
                self._readers[me] = depth - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = _deadline(timeout)
        me = threading.get_ident()
        with self._condition:
            if me in self._readers:
                msg = "Cannot upgrade a read lock to the write lock"
                raise RuntimeError(msg)
            if self._writer == me:
                msg = "Write lock is not reentrant"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                while self._readers or self._writer is not None:
                    self._wait(deadline, "write")
                self._writer = me
            finally:
                # Readers parked on waiting writers must re-check after a timeout too.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Thread does not hold the write lock"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()

    def _wait(self, deadline: float | None, mode: str) -> None:
        if deadline is None:
            self._condition.wait()
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            msg = f"Timed out waiting for {mode} lock"
            raise TimeoutError(msg)
        self._condition.wait(timeout=remaining)


def _deadline(timeout: float | None) -> float | None:
    if timeout is None:
        return None
    if timeout < 0:
        msg = f"Timeout must be non-negative, got {timeout}"
        raise ValueError(msg)
    return time.monotonic() + timeout
