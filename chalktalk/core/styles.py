"""Render hints for route layers.

Renderers draw each route as a polyline with an arrowhead on the final
segment. The line style depends on the layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from chalktalk.core.enums import RouteLayer
from chalktalk.core.models import RouteSegment


@dataclass(frozen=True)
class LayerStyle:
    """
    Attributes:
        dash: SVG dash pattern, None for a solid line
        opacity: Stroke opacity
        color: Fixed stroke color, None to use the player's color
        draw_order: Lower layers are painted first
    """
    dash: Optional[str]
    opacity: float
    color: Optional[str]
    draw_order: int

    def to_dict(self) -> dict:
        return {
            "dash": self.dash,
            "opacity": self.opacity,
            "color": self.color,
            "drawOrder": self.draw_order,
        }


LAYER_STYLES: dict[RouteLayer, LayerStyle] = {
    RouteLayer.CHECK: LayerStyle(dash="2,2", opacity=0.7, color=None, draw_order=0),
    RouteLayer.OPTION: LayerStyle(dash="10,5", opacity=1.0, color=None, draw_order=1),
    RouteLayer.ENDZONE: LayerStyle(dash="4,4", opacity=1.0, color="#a855f7", draw_order=2),
    RouteLayer.PRIMARY: LayerStyle(dash=None, opacity=1.0, color=None, draw_order=3),
}

SELECTED_STROKE_WIDTH = 4
STROKE_WIDTH = 3


def stroke_width(selected: bool) -> int:
    """Route line width; the selected player's routes draw heavier."""
    return SELECTED_STROKE_WIDTH if selected else STROKE_WIDTH


def sort_for_drawing(segments: list[RouteSegment]) -> list[RouteSegment]:
    """Order segments so primary routes are painted on top."""
    return sorted(segments, key=lambda s: LAYER_STYLES[s.type].draw_order)


def arrow_heading(segment: RouteSegment) -> Optional[float]:
    """Direction of the final segment in degrees, None if too short to draw."""
    if len(segment.points) < 2:
        return None
    last, prev = segment.points[-1], segment.points[-2]
    return math.degrees(math.atan2(last.y - prev.y, last.x - prev.x))
