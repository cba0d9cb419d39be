"""
Editor API Router.

Drives the interactive editing session: which play and player are
selected, the active route layer, hand-drawn routes, motion targeting
and keyboard shortcuts. State endpoints return the session snapshot so
clients can redraw from one response.
"""

from fastapi import APIRouter, HTTPException

from chalktalk.api.schemas import KeyRequest, LayerRequest, PointSchema, SelectRequest
from chalktalk.api.services import editor_session_manager
from chalktalk.core import field
from chalktalk.core.editing import motion_path
from chalktalk.core.enums import Role, RouteLayer
from chalktalk.core.formations import ROLE_SPECS
from chalktalk.core.routes import route_menu
from chalktalk.core.styles import LAYER_STYLES, stroke_width


router = APIRouter(prefix="/editor", tags=["editor"])


@router.get("/state")
def get_state() -> dict:
    with editor_session_manager.session() as session:
        return session.to_dict()


@router.post("/play")
def select_play(request: SelectRequest) -> dict:
    """Open a play on the field (None closes it)."""
    with editor_session_manager.session() as session:
        if request.id is None:
            session.current_play_id = None
            session.select_player(None)
            session.cancel()
        elif not session.select_play(request.id):
            raise HTTPException(status_code=404, detail=f"Play {request.id} not found")
        return session.to_dict()


@router.post("/player")
def select_player(request: SelectRequest) -> dict:
    with editor_session_manager.session() as session:
        if not session.select_player(request.id):
            raise HTTPException(status_code=404, detail=f"Player {request.id} not found")
        return session.to_dict()


@router.post("/pick")
def pick_player(request: SelectRequest) -> dict:
    """A click on a player token; completes motion targeting when armed."""
    with editor_session_manager.session() as session:
        if request.id is None:
            raise HTTPException(status_code=422, detail="Player id required")
        session.pick_player(request.id)
        return session.to_dict()


@router.post("/layer")
def set_layer(request: LayerRequest) -> dict:
    with editor_session_manager.session() as session:
        session.set_active_layer(request.layer)
        return session.to_dict()


@router.post("/motion-mode")
def toggle_motion_mode() -> dict:
    with editor_session_manager.session() as session:
        if session.selected_player is None:
            raise HTTPException(status_code=409, detail="No player selected")
        session.toggle_motion_mode()
        return session.to_dict()


# =============================================================================
# Drawing
# =============================================================================

@router.post("/draw/start")
def start_drawing() -> dict:
    with editor_session_manager.session() as session:
        if not session.start_drawing():
            raise HTTPException(status_code=409, detail="No player selected")
        return session.to_dict()


@router.post("/draw/point")
def add_draw_point(point: PointSchema) -> dict:
    """A click on the field: extends the drawing, or deselects."""
    with editor_session_manager.session() as session:
        session.add_draw_point(point.to_point())
        return session.to_dict()


@router.post("/draw/finish")
def finish_drawing() -> dict:
    with editor_session_manager.session() as session:
        session.finish_drawing()
        return session.to_dict()


@router.post("/key")
def handle_key(request: KeyRequest) -> dict:
    with editor_session_manager.session() as session:
        session.handle_key(request.key)
        return session.to_dict()


# =============================================================================
# Menus
# =============================================================================

@router.get("/presets")
def get_presets() -> list[dict]:
    """Route presets in menu order."""
    return route_menu()


@router.get("/roles")
def get_roles() -> list[dict]:
    return [
        {
            "value": role.value,
            "name": role.display_name,
            "label": ROLE_SPECS[role].label,
            "color": ROLE_SPECS[role].color,
        }
        for role in Role
    ]


@router.get("/layers")
def get_layers() -> list[dict]:
    """Route layers with their stroke styles."""
    return [
        {
            "value": layer.value,
            **LAYER_STYLES[layer].to_dict(),
            "strokeWidth": stroke_width(selected=False),
            "selectedStrokeWidth": stroke_width(selected=True),
        }
        for layer in RouteLayer
    ]


@router.get("/field")
def get_field() -> dict:
    """Drawing-space geometry of the field."""
    return {
        "scale": field.SCALE,
        "width": field.FIELD_PIXEL_WIDTH,
        "height": field.FIELD_PIXEL_HEIGHT,
        "centerX": field.CENTER_X,
        "losY": field.LOS_Y,
        "padding": field.BOUNDARY_PADDING,
    }


@router.get("/motion-paths")
def get_motion_paths() -> dict:
    """Display paths for every player in motion on the open play."""
    with editor_session_manager.session() as session:
        play = session.current_play
        if play is None:
            return {}
        return {
            player.id: [p.to_dict() for p in motion_path(player)]
            for player in play.players
            if player.motion is not None
        }
