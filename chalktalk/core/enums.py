"""Editor enumerations."""

from enum import Enum
from typing import Optional


class RouteLayer(str, Enum):
    """Route layers a player can carry. One segment per layer."""
    PRIMARY = "primary"
    OPTION = "option"
    CHECK = "check"
    ENDZONE = "endzone"


class Role(str, Enum):
    """Formation slots a player can be assigned to."""
    CENTER = "C"
    QUARTERBACK = "QB"
    WIDE_LEFT = "WR-L"
    WIDE_RIGHT = "WR-R"
    SLOT_LEFT = "SL"
    SLOT_RIGHT = "SR"

    @property
    def display_name(self) -> str:
        return {
            Role.CENTER: "Center",
            Role.QUARTERBACK: "Quarterback",
            Role.WIDE_LEFT: "Wide Left",
            Role.WIDE_RIGHT: "Wide Right",
            Role.SLOT_LEFT: "Slot Left",
            Role.SLOT_RIGHT: "Slot Right",
        }[self]


class FormationSide(str, Enum):
    """Strength of the formation (which side the slot receiver aligns)."""
    LEFT = "left"
    RIGHT = "right"


class RoutePreset(str, Enum):
    """Named route scripts available from the route menu."""
    HITCH = "hitch"
    OUT_5 = "out-5"
    OUT_10 = "out-10"
    IN_5 = "in-5"
    IN_10 = "in-10"
    INSIDE_RELEASE_IN_5 = "inside-release-in-5"
    SLANT = "slant"
    POST = "post"
    POST_IN = "post-in"
    POST_HOOK = "post-hook"
    CORNER = "corner"
    GO = "go"
    COMEBACK = "comeback"
    CROSS = "cross"

    @property
    def label(self) -> str:
        """Menu label."""
        return {
            RoutePreset.HITCH: "Stop",
            RoutePreset.OUT_5: "Out (5)",
            RoutePreset.OUT_10: "Out (10)",
            RoutePreset.IN_5: "In (5)",
            RoutePreset.IN_10: "In (10)",
            RoutePreset.INSIDE_RELEASE_IN_5: "Inside Release In (5)",
            RoutePreset.SLANT: "Slant",
            RoutePreset.POST: "Post",
            RoutePreset.POST_IN: "Post In",
            RoutePreset.POST_HOOK: "Post Hook",
            RoutePreset.CORNER: "Corner",
            RoutePreset.GO: "Go",
            RoutePreset.COMEBACK: "Comeback",
            RoutePreset.CROSS: "Cross",
        }[self]


def parse_enum(enum_cls, value) -> Optional[Enum]:
    """Look up an enum member by value, returning None if unknown."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None
