"""
Play and player mutations.

Every function takes a Play and returns a new Play; inputs are never
modified. Functions that target a player by id return the play
unchanged when the id is unknown.

Route anchoring:
    A player's routes start at `player.route_start` (the motion endpoint
    if one is set, else the alignment). Whenever that anchor moves, every
    route point moves by the same delta so drawn routes keep their shape
    and stay attached to the player. Shifted points are clamped to the
    field.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Union

from chalktalk.core.enums import RouteLayer, RoutePreset, parse_enum
from chalktalk.core.field import SCALE, clamp_point, translate_point
from chalktalk.core.models import Play, Player, Point, RouteSegment, new_id
from chalktalk.core.routes import generate_route, parse_preset

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def translate_routes(player: Player, delta: Point) -> Player:
    """Shift every route point of a player by delta."""
    if delta.is_zero or not player.routes:
        return player
    routes = tuple(
        replace(route, points=tuple(translate_point(pt, delta) for pt in route.points))
        for route in player.routes
    )
    return replace(player, routes=routes)


def _parse_layer(layer: Union[str, RouteLayer]) -> Optional[RouteLayer]:
    resolved = parse_enum(RouteLayer, layer)
    if resolved is None:
        logger.debug(f"Unknown route layer: {layer!r}")
    return resolved


# =============================================================================
# Play Details
# =============================================================================

def rename_play(play: Play, name: str) -> Play:
    return replace(play, name=name)


def set_description(play: Play, description: Optional[str]) -> Play:
    return replace(play, description=description or None)


def set_ball_position(play: Play, position: Optional[Point]) -> Play:
    return replace(play, ball_position=clamp_point(position) if position is not None else None)


def add_player(play: Play, player: Player) -> Play:
    """Append a player. A player whose id is already present is ignored."""
    if play.get_player(player.id) is not None:
        return play
    return replace(play, players=play.players + (player,))


def remove_player(play: Play, player_id: str) -> Play:
    return replace(play, players=tuple(p for p in play.players if p.id != player_id))


def update_player(
    play: Play,
    player_id: str,
    label: Optional[str] = None,
    color: Optional[str] = None,
) -> Play:
    """Change a player's label and/or color."""
    player = play.get_player(player_id)
    if player is None:
        return play
    changes = {}
    if label is not None:
        changes["label"] = label
    if color is not None:
        changes["color"] = color
    if not changes:
        return play
    return play.replace_player(replace(player, **changes))


# =============================================================================
# Alignment & Motion
# =============================================================================

def move_player(play: Play, player_id: str, new_position: Point) -> Play:
    """
    Move a player's alignment, carrying its routes along.

    Exception to shifting every route point: when the player has motion,
    routes hang off the motion endpoint, which stays put, so the routes
    are left where they are.
    """
    player = play.get_player(player_id)
    if player is None:
        return play

    position = clamp_point(new_position)
    moved = replace(player, position=position)
    if player.motion is None:
        moved = translate_routes(moved, position - player.position)
    return play.replace_player(moved)


def set_motion(play: Play, player_id: str, target_player_id: str) -> Play:
    """
    Send a player in motion toward another player.

    The motion endpoint lines up horizontally with the target while
    keeping the mover's own depth. Routes are shifted from the old
    anchor to the new endpoint.
    """
    player = play.get_player(player_id)
    target = play.get_player(target_player_id)
    if player is None or target is None:
        return play

    endpoint = clamp_point(Point(target.position.x, player.position.y))
    delta = endpoint - player.route_start
    moved = translate_routes(replace(player, motion=endpoint), delta)
    logger.debug(f"Motion set for {player.id} -> ({endpoint.x:.1f}, {endpoint.y:.1f})")
    return play.replace_player(moved)


def clear_motion(play: Play, player_id: str) -> Play:
    """Remove a player's motion and bring its routes back to the alignment."""
    player = play.get_player(player_id)
    if player is None or player.motion is None:
        return play

    delta = player.position - player.motion
    cleared = translate_routes(replace(player, motion=None), delta)
    return play.replace_player(cleared)


def motion_path(player: Player) -> tuple[Point, ...]:
    """
    Display path of a player's motion.

    U-shaped: one yard back from the alignment, across to the endpoint's
    column, then forward to the endpoint. Empty when there is no motion.
    """
    if player.motion is None:
        return ()
    start, end = player.position, player.motion
    return (
        start,
        Point(start.x, start.y + SCALE),
        Point(end.x, end.y + SCALE),
        end,
    )


# =============================================================================
# Routes
# =============================================================================

def apply_route_preset(
    play: Play,
    player_id: str,
    layer: Union[str, RouteLayer],
    preset: Union[str, RoutePreset],
) -> Play:
    """
    Install a preset route on a layer.

    Applying the preset a layer already holds removes it instead, so a
    second click on the same route button clears it.
    """
    resolved_layer = _parse_layer(layer)
    resolved_preset = parse_preset(preset)
    player = play.get_player(player_id)
    if resolved_layer is None or resolved_preset is None or player is None:
        return play

    current = player.route_for(resolved_layer)
    if current is not None and current.preset == resolved_preset:
        return play.replace_player(player.without_route(resolved_layer))

    segment = RouteSegment(
        id=new_id(),
        type=resolved_layer,
        points=generate_route(player.route_start, resolved_preset),
        preset=resolved_preset,
    )
    return play.replace_player(player.with_route(segment))


def set_route(
    play: Play,
    player_id: str,
    layer: Union[str, RouteLayer],
    points: Iterable[Point],
) -> Play:
    """Install a hand-drawn route on a layer, replacing its occupant."""
    resolved_layer = _parse_layer(layer)
    player = play.get_player(player_id)
    if resolved_layer is None or player is None:
        return play

    segment = RouteSegment(
        id=new_id(),
        type=resolved_layer,
        points=tuple(clamp_point(p) for p in points),
    )
    return play.replace_player(player.with_route(segment))


def remove_route(play: Play, player_id: str, layer: Union[str, RouteLayer]) -> Play:
    resolved_layer = _parse_layer(layer)
    player = play.get_player(player_id)
    if resolved_layer is None or player is None:
        return play
    return play.replace_player(player.without_route(resolved_layer))


def clear_routes(play: Play, player_id: str) -> Play:
    """Remove every route layer from a player."""
    player = play.get_player(player_id)
    if player is None:
        return play
    return play.replace_player(replace(player, routes=()))
