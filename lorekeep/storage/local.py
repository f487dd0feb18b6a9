"""
Local storage implementations for development.

In-memory, process-wide, lost on restart.
"""

from __future__ import annotations

import threading
from typing import Callable, Hashable, TypeVar

from lorekeep.storage.base import KeyedStore

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class InMemoryKeyedStore(KeyedStore[K, V]):
    """Dict-backed store guarded by a single lock."""
    
    def __init__(self):
        self._data: dict[K, V] = {}
        self._lock = threading.Lock()
    
    def get(self, key: K) -> V | None:
        with self._lock:
            return self._data.get(key)
    
    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value
    
    def delete(self, key: K) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None
    
    def list(self) -> list[V]:
        with self._lock:
            return list(self._data.values())
    
    def insert_if_absent(self, key: K, value: V) -> bool:
        with self._lock:
            if key in self._data:
                return False
            self._data[key] = value
            return True
    
    def replace_if_present(self, key: K, value: V) -> bool:
        with self._lock:
            if key not in self._data:
                return False
            self._data[key] = value
            return True
    
    def update(self, key: K, fn: Callable[[V], V]) -> V | None:
        with self._lock:
            current = self._data.get(key)
            if current is None:
                return None
            updated = fn(current)
            self._data[key] = updated
            return updated
    
    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._data
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
