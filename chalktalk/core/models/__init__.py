"""Core playbook data models."""

from chalktalk.core.models.point import Point
from chalktalk.core.models.player import Player, RouteSegment, new_id
from chalktalk.core.models.play import GridPosition, Play
from chalktalk.core.models.playbook import (
    DEFAULT_COLUMN_NAMES,
    GridConfig,
    Playbook,
    PlaybookLibrary,
    one_play_per_cell,
    timestamp,
)

__all__ = [
    "DEFAULT_COLUMN_NAMES",
    "GridConfig",
    "GridPosition",
    "Play",
    "Playbook",
    "PlaybookLibrary",
    "Player",
    "Point",
    "RouteSegment",
    "new_id",
    "one_play_per_cell",
    "timestamp",
]
