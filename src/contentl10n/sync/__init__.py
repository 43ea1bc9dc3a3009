"""Cross-node invalidation of the content translation table.

Python 3.13+.
"""

from .coordinator import InvalidationCoordinator
from .signals import InMemorySignalBus, Signal, SignalChannel, SignalHandler

__all__ = [
    "InMemorySignalBus",
    "InvalidationCoordinator",
    "Signal",
    "SignalChannel",
    "SignalHandler",
]
