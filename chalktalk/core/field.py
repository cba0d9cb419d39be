"""Field dimensions and coordinate conversion.

Two coordinate systems are in play:

Yard space (how coaches describe alignments):
    X = yards from the center of the field
        Negative = left (offense's perspective, looking downfield)
        Positive = right
    Y = yards gained from the line of scrimmage
        Positive = downfield
        Negative = backfield

Drawing space (what the field image and every stored Point use):
    Origin (0, 0) = top-left corner of the field image
    X grows to the right, Y grows toward the bottom (the backfield)
    Unit = pixels, SCALE pixels per yard

The field image is a compact FIELD_WIDTH_YARDS x FIELD_HEIGHT_YARDS window
with the line of scrimmage LOS_OFFSET_YARDS above its bottom edge.
"""

from __future__ import annotations

from chalktalk.core.models.point import Point


# =============================================================================
# Field Dimension Constants
# =============================================================================

SCALE = 25  # pixels per yard

FIELD_WIDTH_YARDS = 25
FIELD_HEIGHT_YARDS = 25
LOS_OFFSET_YARDS = 5  # LOS distance from the bottom edge

FIELD_PIXEL_WIDTH = FIELD_WIDTH_YARDS * SCALE    # 625
FIELD_PIXEL_HEIGHT = FIELD_HEIGHT_YARDS * SCALE  # 625

CENTER_X = FIELD_PIXEL_WIDTH / 2  # 312.5
LOS_Y = (FIELD_HEIGHT_YARDS - LOS_OFFSET_YARDS) * SCALE  # 500

# Keeps routes and tokens from leaving the field image
BOUNDARY_PADDING = 1 * SCALE


# =============================================================================
# Coordinate Conversion
# =============================================================================

def yards_to_point(x_yards: float, y_yards: float) -> Point:
    """Convert yard-space offsets to a drawing-space point.

    Args:
        x_yards: Yards from field center (negative = left)
        y_yards: Yards gained from the LOS (negative = backfield)

    Returns:
        Point in pixels
    """
    x = (FIELD_WIDTH_YARDS / 2 + x_yards) * SCALE
    y = (FIELD_HEIGHT_YARDS - (LOS_OFFSET_YARDS + y_yards)) * SCALE
    return Point(x, y)


def point_to_yards(point: Point) -> tuple[float, float]:
    """Convert a drawing-space point back to yard-space offsets.

    Returns:
        Tuple of (yards from center, yards gained from LOS)
    """
    x_yards = point.x / SCALE - FIELD_WIDTH_YARDS / 2
    y_yards = FIELD_HEIGHT_YARDS - LOS_OFFSET_YARDS - point.y / SCALE
    return (x_yards, y_yards)


def depth_to_y(yards_gained: float) -> float:
    """Drawing-space Y of the yard line `yards_gained` past the LOS."""
    return (FIELD_HEIGHT_YARDS - LOS_OFFSET_YARDS - yards_gained) * SCALE


# =============================================================================
# Boundary Utilities
# =============================================================================

def clamp_point(point: Point) -> Point:
    """Clamp a point inside the padded field boundary."""
    return Point(
        x=max(BOUNDARY_PADDING, min(point.x, FIELD_PIXEL_WIDTH - BOUNDARY_PADDING)),
        y=max(BOUNDARY_PADDING, min(point.y, FIELD_PIXEL_HEIGHT - BOUNDARY_PADDING)),
    )


def is_in_bounds(point: Point) -> bool:
    """Check if a point is already inside the padded boundary."""
    return clamp_point(point) == point


def translate_point(point: Point, delta: Point) -> Point:
    """Shift a point by delta and clamp the result."""
    return clamp_point(point + delta)


def is_left_of_center(point: Point) -> bool:
    """Which half of the field a point lies on. Center counts as right."""
    return point.x < CENTER_X


def mirror_point(point: Point) -> Point:
    """Reflect a point across the field's vertical center line."""
    return Point(2 * CENTER_X - point.x, point.y)
