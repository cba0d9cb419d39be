"""
Formation and role placement.

Each role maps to a canonical alignment in yard space and a default
token color. Formations are fixed ordered lists of roles applied to a
play's players by index.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

from chalktalk.core.editing import translate_routes
from chalktalk.core.enums import FormationSide, Role, parse_enum
from chalktalk.core.field import SCALE, clamp_point, yards_to_point
from chalktalk.core.models import Play, Player, Point, new_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleSpec:
    """
    Canonical alignment for a role.

    Attributes:
        role: Role being aligned
        x_yards: Yards from field center (negative = left)
        depth_yards: Yards from the LOS (negative = backfield)
        color: Default token color
        label: Token label for newly created players
    """
    role: Role
    x_yards: float
    depth_yards: float
    color: str
    label: str

    @property
    def position(self) -> Point:
        return yards_to_point(self.x_yards, self.depth_yards)


ROLE_SPECS: dict[Role, RoleSpec] = {
    Role.CENTER: RoleSpec(Role.CENTER, 0, -1, "#eab308", "C"),
    Role.QUARTERBACK: RoleSpec(Role.QUARTERBACK, 0, -4, "#ef4444", "QB"),
    Role.WIDE_LEFT: RoleSpec(Role.WIDE_LEFT, -10, -1, "#3b82f6", "L"),
    Role.WIDE_RIGHT: RoleSpec(Role.WIDE_RIGHT, 10, -1, "#ef4444", "R"),
    Role.SLOT_LEFT: RoleSpec(Role.SLOT_LEFT, -5, -1, "#22c55e", "SL"),
    Role.SLOT_RIGHT: RoleSpec(Role.SLOT_RIGHT, 5, -1, "#22c55e", "SR"),
}

FORMATIONS: dict[FormationSide, tuple[Role, ...]] = {
    FormationSide.LEFT: (
        Role.CENTER, Role.QUARTERBACK, Role.WIDE_LEFT, Role.WIDE_RIGHT, Role.SLOT_LEFT,
    ),
    FormationSide.RIGHT: (
        Role.CENTER, Role.QUARTERBACK, Role.WIDE_LEFT, Role.WIDE_RIGHT, Role.SLOT_RIGHT,
    ),
}

# Lineup for a brand-new play
DEFAULT_LINEUP = FORMATIONS[FormationSide.RIGHT]

# Collision avoidance when placing a player on an occupied spot
COLLISION_TOLERANCE = 5  # pixels, checked on both axes
STACK_STEP_YARDS = 1.5
MAX_STACK_ATTEMPTS = 5

# Where "add player" drops a new token
NEW_PLAYER_ROLE = Role.WIDE_LEFT
NEW_PLAYER_COLOR = "#3b82f6"
NEW_PLAYER_YARDS = (-5, 0)


def parse_role(role: Union[str, Role, None]) -> Optional[Role]:
    resolved = parse_enum(Role, role)
    if resolved is None:
        logger.debug(f"Unknown role: {role!r}")
    return resolved


def create_player(role: Role, label: Optional[str] = None) -> Player:
    """Create a player at a role's canonical alignment."""
    spec = ROLE_SPECS[role]
    return Player(
        id=new_id(),
        role=role.value,
        label=spec.label if label is None else label,
        color=spec.color,
        position=spec.position,
    )


def default_players() -> tuple[Player, ...]:
    return tuple(create_player(role) for role in DEFAULT_LINEUP)


def new_field_player() -> Player:
    """The player added by the "add player" action."""
    return Player(
        id=new_id(),
        role=NEW_PLAYER_ROLE.value,
        label="",
        color=NEW_PLAYER_COLOR,
        position=yards_to_point(*NEW_PLAYER_YARDS),
    )


def apply_formation(play: Play, side: Union[str, FormationSide]) -> Play:
    """
    Line the play up in a formation.

    Slot i takes over players[i], keeping its id and label; missing
    players are created. Players past the last slot are dropped. Routes
    and motion are cleared since they were drawn for the old alignment.
    """
    resolved = parse_enum(FormationSide, side)
    if resolved is None:
        logger.debug(f"Unknown formation side: {side!r}")
        return play

    players = []
    for index, role in enumerate(FORMATIONS[resolved]):
        spec = ROLE_SPECS[role]
        if index < len(play.players):
            existing = play.players[index]
            players.append(replace(
                existing,
                role=role.value,
                color=spec.color,
                position=spec.position,
                motion=None,
                routes=(),
            ))
        else:
            players.append(create_player(role))

    if len(play.players) > len(players):
        logger.debug(f"Formation dropped {len(play.players) - len(players)} extra players from {play.name}")
    return replace(play, players=tuple(players))


def find_open_spot(players: Iterable[Player], target: Point, exclude_id: Optional[str] = None) -> Point:
    """
    Nudge a target point off any player already standing there.

    Each collision shifts the target STACK_STEP_YARDS along X. After
    MAX_STACK_ATTEMPTS shifts the last spot is accepted even if taken.
    """
    others = [p for p in players if p.id != exclude_id]
    spot = target
    for _ in range(MAX_STACK_ATTEMPTS):
        occupied = any(
            abs(p.position.x - spot.x) < COLLISION_TOLERANCE
            and abs(p.position.y - spot.y) < COLLISION_TOLERANCE
            for p in others
        )
        if not occupied:
            break
        spot = Point(spot.x + STACK_STEP_YARDS * SCALE, spot.y)
    return clamp_point(spot)


def set_player_to_role(play: Play, player_id: str, role: Union[str, Role]) -> Play:
    """
    Move one player to a role's alignment and take its color.

    The label is kept and routes follow the player the same way they do
    for a manual move, including the exception for a player in motion:
    its routes start at the motion endpoint and are not shifted.
    Unknown roles or players leave the play unchanged.
    """
    resolved = parse_role(role)
    player = play.get_player(player_id)
    if resolved is None or player is None:
        return play

    spec = ROLE_SPECS[resolved]
    position = find_open_spot(play.players, spec.position, exclude_id=player_id)
    updated = replace(player, role=resolved.value, color=spec.color, position=position)
    if player.motion is None:
        updated = translate_routes(updated, position - player.position)
    return play.replace_player(updated)
