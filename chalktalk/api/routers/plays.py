"""
Plays API Router.

Play and player editing in the current playbook. Every mutation goes
through the core editing operations, so routes stay attached to their
players when they move, change role or go in motion.
"""

from fastapi import APIRouter, HTTPException

from chalktalk.api.schemas import (
    CreatePlayRequest,
    DrawnRouteRequest,
    FormationRequest,
    MotionRequest,
    MovePlayerRequest,
    RoleRequest,
    RoutePresetRequest,
    UpdatePlayerRequest,
    UpdatePlayRequest,
)
from chalktalk.api.services import editor_session_manager
from chalktalk.core import editing, formations
from chalktalk.core.enums import RouteLayer
from chalktalk.core.models import Play


router = APIRouter(prefix="/plays", tags=["plays"])


def _require_play(session, play_id: str) -> Play:
    play = session.playbook.get_play(play_id)
    if play is None:
        raise HTTPException(status_code=404, detail=f"Play {play_id} not found")
    return play


def _require_player(session, play_id: str, player_id: str) -> Play:
    play = _require_play(session, play_id)
    if play.get_player(player_id) is None:
        raise HTTPException(status_code=404, detail=f"Player {player_id} not found")
    return play


def _play_dict(session, play_id: str) -> dict:
    return session.playbook.get_play(play_id).to_dict()


# =============================================================================
# Plays
# =============================================================================

@router.get("")
def list_plays() -> list[dict]:
    with editor_session_manager.session() as session:
        return [play.to_dict() for play in session.playbook.plays]


@router.post("", status_code=201)
def create_play(request: CreatePlayRequest) -> dict:
    """Create a play in the default formation and open it."""
    with editor_session_manager.session() as session:
        return session.new_play(request.name).to_dict()


@router.get("/{play_id}")
def get_play(play_id: str) -> dict:
    with editor_session_manager.session() as session:
        return _require_play(session, play_id).to_dict()


@router.patch("/{play_id}")
def update_play(play_id: str, request: UpdatePlayRequest) -> dict:
    with editor_session_manager.session() as session:
        _require_play(session, play_id)
        if request.name is not None:
            session.rename_play(play_id, request.name)
        if "description" in request.model_fields_set:
            session.set_play_description(play_id, request.description)
        if "ball_position" in request.model_fields_set:
            position = request.ball_position.to_point() if request.ball_position else None
            session.edit_play(play_id, editing.set_ball_position, position)
        return _play_dict(session, play_id)


@router.delete("/{play_id}")
def delete_play(play_id: str) -> dict:
    with editor_session_manager.session() as session:
        _require_play(session, play_id)
        session.delete_play(play_id)
        return {"deleted": play_id}


@router.post("/{play_id}/copy", status_code=201)
def copy_play(play_id: str) -> dict:
    with editor_session_manager.session() as session:
        duplicate = session.copy_play(play_id)
        if duplicate is None:
            raise HTTPException(status_code=404, detail=f"Play {play_id} not found")
        return duplicate.to_dict()


@router.post("/{play_id}/formation")
def apply_formation(play_id: str, request: FormationRequest) -> dict:
    with editor_session_manager.session() as session:
        _require_play(session, play_id)
        session.edit_play(play_id, formations.apply_formation, request.side)
        return _play_dict(session, play_id)


# =============================================================================
# Players
# =============================================================================

@router.post("/{play_id}/players", status_code=201)
def add_player(play_id: str) -> dict:
    with editor_session_manager.session() as session:
        _require_play(session, play_id)
        player = formations.new_field_player()
        session.edit_play(play_id, editing.add_player, player)
        return player.to_dict()


@router.patch("/{play_id}/players/{player_id}")
def update_player(play_id: str, player_id: str, request: UpdatePlayerRequest) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.update_player, player_id, request.label, request.color)
        return _play_dict(session, play_id)


@router.delete("/{play_id}/players/{player_id}")
def remove_player(play_id: str, player_id: str) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.remove_player, player_id)
        if session.selected_player_id == player_id:
            session.select_player(None)
        return _play_dict(session, play_id)


@router.put("/{play_id}/players/{player_id}/position")
def move_player(play_id: str, player_id: str, request: MovePlayerRequest) -> dict:
    """Drag a player; routes follow unless the player is in motion."""
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.move_player, player_id, request.position.to_point())
        return _play_dict(session, play_id)


@router.put("/{play_id}/players/{player_id}/role")
def set_player_role(play_id: str, player_id: str, request: RoleRequest) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, formations.set_player_to_role, player_id, request.role)
        return _play_dict(session, play_id)


@router.put("/{play_id}/players/{player_id}/motion")
def set_motion(play_id: str, player_id: str, request: MotionRequest) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        _require_player(session, play_id, request.target_player_id)
        session.edit_play(play_id, editing.set_motion, player_id, request.target_player_id)
        return _play_dict(session, play_id)


@router.delete("/{play_id}/players/{player_id}/motion")
def clear_motion(play_id: str, player_id: str) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.clear_motion, player_id)
        return _play_dict(session, play_id)


# =============================================================================
# Routes
# =============================================================================

@router.post("/{play_id}/players/{player_id}/routes/preset")
def apply_route_preset(play_id: str, player_id: str, request: RoutePresetRequest) -> dict:
    """Install a preset route; applying the same preset again removes it."""
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(
            play_id, editing.apply_route_preset, player_id, request.layer, request.preset
        )
        return _play_dict(session, play_id)


@router.put("/{play_id}/players/{player_id}/routes/{layer}")
def set_route(play_id: str, player_id: str, layer: RouteLayer, request: DrawnRouteRequest) -> dict:
    """Install a hand-drawn route on a layer."""
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        points = [p.to_point() for p in request.points]
        session.edit_play(play_id, editing.set_route, player_id, layer, points)
        return _play_dict(session, play_id)


@router.delete("/{play_id}/players/{player_id}/routes/{layer}")
def remove_route(play_id: str, player_id: str, layer: RouteLayer) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.remove_route, player_id, layer)
        return _play_dict(session, play_id)


@router.delete("/{play_id}/players/{player_id}/routes")
def clear_routes(play_id: str, player_id: str) -> dict:
    with editor_session_manager.session() as session:
        _require_player(session, play_id, player_id)
        session.edit_play(play_id, editing.clear_routes, player_id)
        return _play_dict(session, play_id)
