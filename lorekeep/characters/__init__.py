"""
Characters - the resource guarded by the auth pipeline.
"""

from lorekeep.characters.models import Character, CharacterData
from lorekeep.characters.store import CharacterStore

__all__ = [
    "Character",
    "CharacterData",
    "CharacterStore",
]
