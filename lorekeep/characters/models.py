"""
Character models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


NAME_MIN_LENGTH = 6


class CharacterData(BaseModel):
    """Client-supplied character fields (create and full replacement)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=NAME_MIN_LENGTH)
    last_name: str = Field(min_length=NAME_MIN_LENGTH, alias="lastName")


class Character(CharacterData):
    """Stored character."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
