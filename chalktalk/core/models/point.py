"""Drawing-space points.

Coordinate System Convention:
    x-axis: pixels from the left edge of the field image
    y-axis: pixels from the top edge (grows toward the offense's backfield)

Points are immutable; arithmetic returns new points.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A position on the field drawing, in pixels."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    @property
    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> Point:
        return cls(x=float(data["x"]), y=float(data["y"]))

    def __repr__(self) -> str:
        return f"Point({self.x:.1f}, {self.y:.1f})"
