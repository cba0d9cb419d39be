"""Route preset generation.

Presets are short scripts of pen moves measured in yards. Lateral
distances are written relative to the receiver's side of the field:

    +inside  = toward the center of the field (the ball)
    -inside  = toward the nearer sideline

so a single script produces mirror-image routes for receivers on
opposite halves of the field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from chalktalk.core.enums import RoutePreset, parse_enum
from chalktalk.core.field import SCALE, clamp_point, depth_to_y, is_left_of_center
from chalktalk.core.models.point import Point

logger = logging.getLogger(__name__)


class StepKind(str, Enum):
    """How a step positions the pen vertically."""
    TO_DEPTH = "to_depth"  # Y set to an absolute yards-gained line
    MOVE = "move"          # Y moved relative to the pen


@dataclass(frozen=True)
class RouteStep:
    """
    One pen move in a route script.

    Attributes:
        kind: TO_DEPTH or MOVE
        inside: Lateral yards toward the field center (negative = outside)
        yards: Absolute depth for TO_DEPTH, upfield yards for MOVE
    """
    kind: StepKind
    inside: float
    yards: float

    @classmethod
    def to_depth(cls, inside: float, depth: float) -> RouteStep:
        return cls(StepKind.TO_DEPTH, inside, depth)

    @classmethod
    def move(cls, inside: float, upfield: float) -> RouteStep:
        return cls(StepKind.MOVE, inside, upfield)

    def apply(self, pen: Point, dir_in: int) -> Point:
        """Move the pen. Drawing-space Y shrinks as the route goes upfield."""
        x = pen.x + self.inside * dir_in * SCALE
        if self.kind == StepKind.TO_DEPTH:
            y = depth_to_y(self.yards)
        else:
            y = pen.y - self.yards * SCALE
        return Point(x, y)


# =============================================================================
# Route Library
# =============================================================================

ROUTE_SCRIPTS: dict[RoutePreset, tuple[RouteStep, ...]] = {
    RoutePreset.HITCH: (
        RouteStep.to_depth(0, 6),
        RouteStep.move(1, -1),
    ),
    RoutePreset.OUT_5: (
        RouteStep.to_depth(0, 5),
        RouteStep.move(-5, 0),
    ),
    RoutePreset.OUT_10: (
        RouteStep.to_depth(0, 10),
        RouteStep.move(-5, 0),
    ),
    RoutePreset.IN_5: (
        RouteStep.to_depth(0, 5),
        RouteStep.move(5, 0),
    ),
    RoutePreset.IN_10: (
        RouteStep.to_depth(0, 10),
        RouteStep.move(5, 0),
    ),
    RoutePreset.INSIDE_RELEASE_IN_5: (
        RouteStep.to_depth(1, 2),
        RouteStep.to_depth(0, 5),
        RouteStep.move(5, 0),
    ),
    RoutePreset.SLANT: (
        RouteStep.to_depth(0, 1),
        RouteStep.move(3, 2),
    ),
    RoutePreset.POST: (
        RouteStep.to_depth(0, 7),
        RouteStep.move(5, 7),
    ),
    RoutePreset.POST_IN: (
        RouteStep.to_depth(0, 7),
        RouteStep.move(3, 3),
        RouteStep.move(5, 0),
    ),
    RoutePreset.POST_HOOK: (
        RouteStep.to_depth(0, 7),
        RouteStep.move(3, 5),
        RouteStep.move(-1, -2),
    ),
    RoutePreset.CORNER: (
        RouteStep.to_depth(0, 7),
        RouteStep.move(-5, 5),
    ),
    RoutePreset.GO: (
        RouteStep.to_depth(0, 7),
        RouteStep.move(-1, 7),
    ),
    RoutePreset.COMEBACK: (
        RouteStep.to_depth(0, 12),
        RouteStep.move(-2, 2),
        RouteStep.move(-2, -2),
    ),
    RoutePreset.CROSS: (
        RouteStep.to_depth(0, 2),
        RouteStep.move(12, 4),
    ),
}


def route_menu() -> list[dict]:
    """Presets in menu order, as value/label pairs."""
    return [{"value": preset.value, "label": preset.label} for preset in RoutePreset]


def parse_preset(preset: Union[str, RoutePreset, None]) -> Optional[RoutePreset]:
    """Resolve a preset id, or None if it isn't in the library."""
    resolved = parse_enum(RoutePreset, preset)
    if resolved is None:
        logger.debug(f"Unknown route preset: {preset!r}")
    return resolved


def generate_route(start: Point, preset: RoutePreset) -> tuple[Point, ...]:
    """
    Generate the polyline for a preset starting at `start`.

    The first point is `start` itself. Every generated point is clamped
    to the field and the pen continues from the clamped point.
    """
    dir_in = 1 if is_left_of_center(start) else -1
    points = [start]
    pen = start
    for step in ROUTE_SCRIPTS[preset]:
        pen = clamp_point(step.apply(pen, dir_in))
        points.append(pen)
    return tuple(points)
