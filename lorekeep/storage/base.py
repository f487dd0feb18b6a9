"""
Storage abstraction layer.

All persistence goes through KeyedStore. The auth pipeline and the character
routes only see this interface, so the in-memory implementation can be
swapped for a persistent backend without touching either of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyedStore(ABC, Generic[K, V]):
    """
    A keyed collection of records.
    
    Implementations must make every method atomic with respect to concurrent
    callers. The compound operations (insert_if_absent, replace_if_present,
    update) exist so that check-then-write never spans two calls.
    """
    
    @abstractmethod
    def get(self, key: K) -> V | None:
        """Get a record by key."""
        pass
    
    @abstractmethod
    def set(self, key: K, value: V) -> None:
        """Insert or overwrite a record."""
        pass
    
    @abstractmethod
    def delete(self, key: K) -> bool:
        """Delete a record. Returns False if it did not exist."""
        pass
    
    @abstractmethod
    def list(self) -> list[V]:
        """All records, in insertion order."""
        pass
    
    @abstractmethod
    def insert_if_absent(self, key: K, value: V) -> bool:
        """Insert only if the key is free. Returns False if it was taken."""
        pass
    
    @abstractmethod
    def replace_if_present(self, key: K, value: V) -> bool:
        """Overwrite only if the key exists. Returns False if it did not."""
        pass
    
    @abstractmethod
    def update(self, key: K, fn: Callable[[V], V]) -> V | None:
        """Apply fn to the stored record and store the result."""
        pass
    
    def __contains__(self, key: K) -> bool:
        return self.get(key) is not None
    
    def __len__(self) -> int:
        return len(self.list())
