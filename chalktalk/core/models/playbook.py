"""Playbook and playbook library models."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Union

from chalktalk.core.models.play import Play
from chalktalk.core.models.player import new_id

logger = logging.getLogger(__name__)


DEFAULT_COLUMN_NAMES = ("Column 1", "Column 2", "Column 3", "Column 4")


def timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now().isoformat(timespec="seconds")


def _parse_timestamp(value: Union[str, int, float, None]) -> str:
    # Browser saves stored epoch milliseconds
    if value is None:
        return timestamp()
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000).isoformat(timespec="seconds")
        except (OverflowError, OSError, ValueError):
            logger.warning(f"Timestamp {value!r} is out of range, using the current time")
            return timestamp()
    return str(value)


def one_play_per_cell(plays: tuple[Play, ...]) -> tuple[Play, ...]:
    """Unplace every play that shares its cell with a later play."""
    last_in_cell = {p.grid_position: i for i, p in enumerate(plays) if p.grid_position is not None}
    return tuple(
        replace(p, grid_position=None)
        if p.grid_position is not None and last_in_cell[p.grid_position] != i
        else p
        for i, p in enumerate(plays)
    )


@dataclass(frozen=True)
class GridConfig:
    """Column layout of a playbook's display grid."""
    column_names: tuple[str, ...] = DEFAULT_COLUMN_NAMES

    @property
    def column_count(self) -> int:
        return len(self.column_names)

    def to_dict(self) -> dict:
        return {"columnNames": list(self.column_names)}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> GridConfig:
        if not data:
            return cls()
        return cls(column_names=tuple(str(n) for n in data.get("columnNames", DEFAULT_COLUMN_NAMES)))


@dataclass(frozen=True)
class Playbook:
    """
    A named collection of plays laid out on a grid.

    Attributes:
        id: Unique playbook identifier
        name: Display name
        plays: Plays in creation order, unique ids
        grid_config: Column names of the display grid
        created_at: ISO timestamp of creation
        updated_at: ISO timestamp of the last change
    """
    id: str
    name: str
    plays: tuple[Play, ...] = ()
    grid_config: GridConfig = field(default_factory=GridConfig)
    created_at: str = field(default_factory=timestamp)
    updated_at: str = field(default_factory=timestamp)

    @classmethod
    def create(cls, name: str, column_names: Optional[tuple[str, ...]] = None) -> Playbook:
        """Create an empty playbook with a fresh id."""
        grid = GridConfig(column_names=tuple(column_names)) if column_names else GridConfig()
        return cls(id=new_id(), name=name, grid_config=grid)

    @property
    def play_count(self) -> int:
        return len(self.plays)

    def get_play(self, play_id: str) -> Optional[Play]:
        for play in self.plays:
            if play.id == play_id:
                return play
        return None

    def has_play(self, play_id: str) -> bool:
        return self.get_play(play_id) is not None

    def replace_play(self, play: Play) -> Playbook:
        """Fold an updated play back in by id and bump updated_at."""
        return replace(
            self,
            plays=tuple(play if p.id == play.id else p for p in self.plays),
            updated_at=timestamp(),
        )

    def with_new_ids(self) -> Playbook:
        """Copy with fresh ids at every level. Grid placements are kept."""
        return replace(
            self,
            id=new_id(),
            plays=tuple(p.with_new_ids() for p in self.plays),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "plays": [p.to_dict() for p in self.plays],
            "gridConfig": self.grid_config.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Playbook:
        """Build a playbook from its stored form. When plays share a cell, the last one keeps it."""
        return cls(
            id=str(data.get("id") or new_id()),
            name=str(data.get("name", "Untitled Playbook")),
            plays=one_play_per_cell(tuple(Play.from_dict(p) for p in data["plays"])),
            grid_config=GridConfig.from_dict(data.get("gridConfig")),
            created_at=_parse_timestamp(data.get("createdAt")),
            updated_at=_parse_timestamp(data.get("updatedAt")),
        )

    def __str__(self) -> str:
        return f"Playbook({self.name}, {self.play_count} plays)"


@dataclass(frozen=True)
class PlaybookLibrary:
    """
    Every playbook the editor knows about, with one marked current.

    Invariant: at least one playbook exists and current_playbook_id
    names one of them.
    """
    playbooks: tuple[Playbook, ...]
    current_playbook_id: str

    def __post_init__(self):
        if not self.playbooks:
            raise ValueError("A library needs at least one playbook")
        if self.get_playbook(self.current_playbook_id) is None:
            object.__setattr__(self, "current_playbook_id", self.playbooks[0].id)

    @classmethod
    def single(cls, playbook: Playbook) -> PlaybookLibrary:
        return cls(playbooks=(playbook,), current_playbook_id=playbook.id)

    @property
    def current(self) -> Playbook:
        return self.get_playbook(self.current_playbook_id)

    def get_playbook(self, playbook_id: str) -> Optional[Playbook]:
        for playbook in self.playbooks:
            if playbook.id == playbook_id:
                return playbook
        return None

    def replace_playbook(self, playbook: Playbook) -> PlaybookLibrary:
        return replace(
            self,
            playbooks=tuple(playbook if pb.id == playbook.id else pb for pb in self.playbooks),
        )

    def find_play(self, play_id: str) -> Optional[tuple[Playbook, Play]]:
        """Find a play anywhere in the library."""
        for playbook in self.playbooks:
            play = playbook.get_play(play_id)
            if play is not None:
                return playbook, play
        return None
