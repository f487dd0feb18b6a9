"""
Character store - plain keyed CRUD.
"""

from __future__ import annotations

import logging

from lorekeep.characters.models import Character, CharacterData
from lorekeep.core.utils import MonotonicIdGenerator
from lorekeep.storage import InMemoryKeyedStore, KeyedStore

logger = logging.getLogger(__name__)


class CharacterStore:
    """Owns every character record, keyed by id."""

    def __init__(
        self,
        store: KeyedStore[int, Character] | None = None,
        ids: MonotonicIdGenerator | None = None,
    ):
        self._characters: KeyedStore[int, Character] = (
            store if store is not None else InMemoryKeyedStore()
        )
        self._ids = ids or MonotonicIdGenerator()

    def list(self) -> list[Character]:
        return self._characters.list()

    def get(self, character_id: int) -> Character | None:
        return self._characters.get(character_id)

    def create(self, data: CharacterData) -> Character:
        """Store a new character under a fresh time-based id."""
        character = Character(id=self._ids.next_id(), **data.model_dump())
        self._characters.set(character.id, character)
        return character

    def replace(self, character_id: int, data: CharacterData) -> Character | None:
        """Full replacement of an existing character. None if it does not exist."""
        character = Character(id=character_id, **data.model_dump())
        if not self._characters.replace_if_present(character_id, character):
            logger.info(f"Character with id {character_id} not found")
            return None
        return character

    def delete(self, character_id: int) -> bool:
        if not self._characters.delete(character_id):
            logger.info(f"Character with id {character_id} can't be deleted because not found")
            return False
        return True

    def __len__(self) -> int:
        return len(self._characters)
