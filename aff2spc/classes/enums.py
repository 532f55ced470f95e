"""
General purpose enumerations.
"""
from enum import Enum, unique

__all__ = [
    "SpcEventType",
    "FlickDirection",
    "EdgeEasing",
    "MappingRule",
    "XMapping",
    "LaneMapping",
    "FlickDirectionMode",
    "FlickWidthMode",
    "SortMode",
]


@unique
class SpcEventType(Enum):
    """Enumeration for SPC event kinds. The value doubles as the secondary sort key."""

    CHART = 0
    BPM = 1
    LANE = 2
    HOLD = 3
    TAP = 4
    SKYAREA = 5
    FLICK = 6

    def __str__(self) -> str:
        return self.name.lower()


class FlickDirection(Enum):
    RIGHT = 4
    LEFT = 16


class EdgeEasing(Enum):
    """Enumeration for the per-edge curve codes of a sky area."""

    STRAIGHT = 0
    CURVE_IN = 1
    CURVE_OUT = 2


class MappingRule(Enum):
    LITERAL = "literal"
    CUSTOM = "custom"

    def __str__(self) -> str:
        return self.value


class XMapping(Enum):
    CLAMP = "clamp01"
    COMPRESS = "compress"
    RAW = "raw"


class LaneMapping(Enum):
    DIRECT = "direct"
    FOUR_TO_FIVE = "4to5"


class FlickDirectionMode(Enum):
    AUTO = "auto"
    RIGHT = "right"
    LEFT = "left"


class FlickWidthMode(Enum):
    DEFAULT = "default"
    FIXED = "fixed"
    RANDOM = "random"


class SortMode(Enum):
    TIME_FIRST = "timeFirst"
    TYPE_FIRST = "typeFirst"
