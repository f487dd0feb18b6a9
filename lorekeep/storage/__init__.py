"""
Storage abstractions.
"""

from lorekeep.storage.base import KeyedStore
from lorekeep.storage.local import InMemoryKeyedStore

__all__ = [
    "KeyedStore",
    "InMemoryKeyedStore",
]
