# =============================================================================
# Character API Routes
# =============================================================================
#
# Endpoints:
#   GET    /characters        - List characters       (any identity)
#   GET    /characters/{id}   - Get one character     (any identity)
#   POST   /characters        - Create character      (admin, user)
#   PUT    /characters/{id}   - Replace character     (admin, user)
#   DELETE /characters/{id}   - Delete character      (admin, user)
#
# =============================================================================

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from lorekeep.auth.context import AuthContext
from lorekeep.auth.policies import authenticate, require_roles
from lorekeep.auth.roles import CHARACTER_WRITERS
from lorekeep.characters.models import Character, CharacterData
from lorekeep.core.errors import ErrorKind, ServiceError
from lorekeep.state import AppState, get_state

router = APIRouter(prefix="/characters", tags=["characters"])

require_writer = require_roles(*CHARACTER_WRITERS)


def _not_found() -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, "Character Not Found")


@router.get("", response_model=list[Character])
async def list_characters(
    ctx: AuthContext = Depends(authenticate),
    state: AppState = Depends(get_state),
):
    return state.characters.list()


@router.get("/{character_id}", response_model=Character)
async def get_character(
    character_id: int,
    ctx: AuthContext = Depends(authenticate),
    state: AppState = Depends(get_state),
):
    character = state.characters.get(character_id)
    if not character:
        raise _not_found()
    return character


@router.post("", response_model=Character)
async def create_character(
    data: CharacterData,
    ctx: AuthContext = Depends(require_writer),
    state: AppState = Depends(get_state),
):
    """Create a character; the id is assigned here."""
    return state.characters.create(data)


@router.put("/{character_id}", response_model=Character)
async def replace_character(
    character_id: int,
    data: CharacterData,
    ctx: AuthContext = Depends(require_writer),
    state: AppState = Depends(get_state),
):
    """Replace every field of an existing character."""
    character = state.characters.replace(character_id, data)
    if not character:
        raise _not_found()
    return character


@router.delete("/{character_id}", status_code=204)
async def delete_character(
    character_id: int,
    ctx: AuthContext = Depends(require_writer),
    state: AppState = Depends(get_state),
):
    if not state.characters.delete(character_id):
        raise _not_found()
    return Response(status_code=204, media_type="application/json")
