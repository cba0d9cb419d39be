"""
Playbook core.

Geometry, route generation, formation placement and the playbook data
model. Everything here is pure: operations take immutable models and
return new ones.

Key Components:
- field: yard <-> drawing-space conversion and clamping
- routes: preset route scripts, mirrored by side of the field
- formations: role alignments, formations, collision-avoiding placement
- editing: player/play mutations that keep routes attached to players
- playbook: play/playbook CRUD, grid placement, import

Example usage:
    from chalktalk.core import (
        Playbook,
        create_play,
        apply_route_preset,
        set_motion,
    )

    playbook = Playbook.create("Red Zone")
    playbook, play = create_play(playbook)

    wide_left = play.players[2]
    play = apply_route_preset(play, wide_left.id, "primary", "slant")

    # Motion carries the slant along with the receiver
    play = set_motion(play, wide_left.id, play.players[0].id)
"""

from chalktalk.core.enums import FormationSide, Role, RouteLayer, RoutePreset
from chalktalk.core.errors import ChalktalkError, ImportParseError, LastPlaybookError
from chalktalk.core.models import (
    GridConfig,
    GridPosition,
    Play,
    Playbook,
    PlaybookLibrary,
    Player,
    Point,
    RouteSegment,
)
from chalktalk.core.field import (
    clamp_point,
    mirror_point,
    point_to_yards,
    yards_to_point,
)
from chalktalk.core.routes import generate_route, route_menu
from chalktalk.core.editing import (
    apply_route_preset,
    clear_motion,
    clear_routes,
    move_player,
    set_motion,
    set_route,
)
from chalktalk.core.formations import (
    ROLE_SPECS,
    apply_formation,
    find_open_spot,
    set_player_to_role,
)
from chalktalk.core.playbook import (
    assign_play_to_cell,
    copy_play,
    copy_playbook,
    create_play,
    delete_playbook,
    import_document,
)


__all__ = [
    # Enums
    "FormationSide",
    "Role",
    "RouteLayer",
    "RoutePreset",
    # Errors
    "ChalktalkError",
    "ImportParseError",
    "LastPlaybookError",
    # Models
    "GridConfig",
    "GridPosition",
    "Play",
    "Playbook",
    "PlaybookLibrary",
    "Player",
    "Point",
    "RouteSegment",
    # Geometry
    "clamp_point",
    "mirror_point",
    "point_to_yards",
    "yards_to_point",
    # Routes
    "generate_route",
    "route_menu",
    # Editing
    "apply_route_preset",
    "clear_motion",
    "clear_routes",
    "move_player",
    "set_motion",
    "set_route",
    # Formations
    "ROLE_SPECS",
    "apply_formation",
    "find_open_spot",
    "set_player_to_role",
    # Playbooks
    "assign_play_to_cell",
    "copy_play",
    "copy_playbook",
    "create_play",
    "delete_playbook",
    "import_document",
]
