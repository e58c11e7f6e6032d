"""
In-memory subscription registry.
"""

from typing import Protocol

from .utils.rw_lock import ReadWriteLock


class AddressRepository(Protocol):
    """Storage of subscribed addresses."""

    def add(self, address: str) -> None:
        """Subscribe a new address."""
        ...

    def is_subscribed(self, address: str) -> bool:
        """Check whether an address is observed."""
        ...


class AddressRegistry:
    """
    Thread-safe set of subscribed addresses.

    Addresses are stored verbatim, so ``0xAB..`` and ``0xab..`` are distinct
    subscriptions. Nothing is persisted and there is no removal.
    """

    def __init__(self) -> None:
        self._addresses: set[str] = set()
        self._lock = ReadWriteLock()

    def add(self, address: str) -> None:
        with self._lock.write():
            self._addresses.add(address)

    def is_subscribed(self, address: str) -> bool:
        with self._lock.read():
            return address in self._addresses

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._addresses)
