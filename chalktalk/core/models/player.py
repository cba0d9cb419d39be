"""Player and route segment models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional
from uuid import uuid4

from chalktalk.core.enums import RouteLayer, RoutePreset, parse_enum
from chalktalk.core.models.point import Point


def new_id() -> str:
    """Generate a fresh identifier for a player, play, route or playbook."""
    return str(uuid4())


@dataclass(frozen=True)
class RouteSegment:
    """
    One route layer drawn for a player.

    Attributes:
        id: Unique segment identifier
        type: Layer this segment occupies
        points: Ordered polyline, start to end
        preset: Preset that generated the points, None if hand-drawn
    """
    id: str
    type: RouteLayer
    points: tuple[Point, ...] = ()
    preset: Optional[RoutePreset] = None

    def with_new_id(self) -> RouteSegment:
        return replace(self, id=new_id())

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "type": self.type.value,
            "points": [p.to_dict() for p in self.points],
        }
        if self.preset is not None:
            data["preset"] = self.preset.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> RouteSegment:
        return cls(
            id=str(data.get("id") or new_id()),
            type=RouteLayer(data["type"]),
            points=tuple(Point.from_dict(p) for p in data.get("points", [])),
            preset=parse_enum(RoutePreset, data.get("preset")),
        )


@dataclass(frozen=True)
class Player:
    """
    A player token on the play diagram.

    The role is an advisory formation-slot tag used for lookups and
    default styling. It is not required to be unique within a play.

    Attributes:
        id: Unique player identifier
        role: Formation slot tag (e.g. "QB", "WR-L")
        label: Text shown on the token
        color: CSS color of the token and its routes
        position: Pre-snap alignment
        motion: Pre-snap motion endpoint, or None
        routes: Route segments, at most one per layer
    """
    id: str
    role: str
    label: str = ""
    color: str = "#3b82f6"
    position: Point = field(default_factory=Point)
    motion: Optional[Point] = None
    routes: tuple[RouteSegment, ...] = ()

    @property
    def route_start(self) -> Point:
        """Anchor routes start from: the motion endpoint if set."""
        return self.motion if self.motion is not None else self.position

    def route_for(self, layer: RouteLayer) -> Optional[RouteSegment]:
        """Get the segment occupying a layer."""
        for route in self.routes:
            if route.type == layer:
                return route
        return None

    def with_route(self, segment: RouteSegment) -> Player:
        """Install a segment, replacing whatever held its layer."""
        kept = tuple(r for r in self.routes if r.type != segment.type)
        return replace(self, routes=kept + (segment,))

    def without_route(self, layer: RouteLayer) -> Player:
        return replace(self, routes=tuple(r for r in self.routes if r.type != layer))

    def with_new_ids(self) -> Player:
        """Copy with a fresh id for the player and every route."""
        return replace(
            self,
            id=new_id(),
            routes=tuple(r.with_new_id() for r in self.routes),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role,
            "label": self.label,
            "color": self.color,
            "position": self.position.to_dict(),
            "motion": self.motion.to_dict() if self.motion is not None else None,
            "routes": [r.to_dict() for r in self.routes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Player:
        # Older saves could stack several segments on a layer; last one wins
        by_layer: dict[RouteLayer, RouteSegment] = {}
        for route_data in data.get("routes", []):
            segment = RouteSegment.from_dict(route_data)
            by_layer.pop(segment.type, None)
            by_layer[segment.type] = segment

        motion = data.get("motion")
        return cls(
            id=str(data.get("id") or new_id()),
            role=str(data.get("role", "")),
            label=str(data.get("label", "")),
            color=str(data.get("color", "#3b82f6")),
            position=Point.from_dict(data["position"]),
            motion=Point.from_dict(motion) if motion else None,
            routes=tuple(by_layer.values()),
        )
