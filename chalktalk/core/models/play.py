"""Play model."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from chalktalk.core.models.player import Player, new_id
from chalktalk.core.models.point import Point


@dataclass(frozen=True)
class GridPosition:
    """Cell a play occupies in its playbook's display grid."""
    row: int
    column: int

    def to_dict(self) -> dict:
        return {"row": self.row, "column": self.column}

    @classmethod
    def from_dict(cls, data: dict) -> GridPosition:
        return cls(row=int(data["row"]), column=int(data["column"]))


@dataclass(frozen=True)
class Play:
    """
    A single play diagram.

    Attributes:
        id: Unique play identifier
        name: Display name
        description: Optional notes
        players: Players in display order, unique ids
        ball_position: Optional ball spot
        grid_position: Cell in the playbook grid, None if unplaced
    """
    id: str
    name: str
    description: Optional[str] = None
    players: tuple[Player, ...] = ()
    ball_position: Optional[Point] = None
    grid_position: Optional[GridPosition] = None

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def replace_player(self, player: Player) -> Play:
        """Fold an updated player back in by id."""
        return replace(
            self,
            players=tuple(player if p.id == player.id else p for p in self.players),
        )

    @property
    def route_count(self) -> int:
        return sum(len(p.routes) for p in self.players)

    def with_new_ids(self) -> Play:
        """Copy with fresh ids for the play, its players and their routes."""
        return replace(
            self,
            id=new_id(),
            players=tuple(p.with_new_ids() for p in self.players),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
        }
        if self.description is not None:
            data["description"] = self.description
        if self.ball_position is not None:
            data["ballPosition"] = self.ball_position.to_dict()
        if self.grid_position is not None:
            data["gridPosition"] = self.grid_position.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Play:
        players = tuple(Player.from_dict(p) for p in data["players"])
        ball = data.get("ballPosition")
        grid = data.get("gridPosition")
        return cls(
            id=str(data.get("id") or new_id()),
            name=str(data.get("name", "Untitled Play")),
            description=data.get("description"),
            players=players,
            ball_position=Point.from_dict(ball) if ball else None,
            grid_position=GridPosition.from_dict(grid) if grid else None,
        )

    def __str__(self) -> str:
        return f"Play({self.name}, {len(self.players)} players, {self.route_count} routes)"
