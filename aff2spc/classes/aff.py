"""
Classes that represent entities of an AFF chart.
"""
from dataclasses import dataclass, field

__all__ = [
    "AffTiming",
    "AffNote",
    "AffHold",
    "AffArc",
    "AffChart",
    "DEFAULT_TIMING",
]


@dataclass(frozen=True)
class AffTiming:
    """An immutable class that represents a tempo section."""

    offset_ms: int
    bpm: float
    beats: float


@dataclass(frozen=True)
class AffNote:
    """An immutable class that represents a ground tap."""

    time_ms: int
    lane: int


@dataclass(frozen=True)
class AffHold:
    """
    An immutable class that represents a ground hold.

    The end time is not guaranteed to come after the start time; converters decide how to treat such holds.
    """

    t1_ms: int
    t2_ms: int
    lane: int

    @property
    def duration(self) -> int:
        return self.t2_ms - self.t1_ms


@dataclass(frozen=True)
class AffArc:
    """
    An immutable class that represents an arc.

    A skyline arc (``skyline=True``) only carries arctaps, each of which becomes a discrete flick. Any other arc is a
    continuous glide. Horizontal positions are nominally in [0, 1] but are not clamped here. Height, color and effect
    are carried through without being used for conversion.
    """

    t1_ms: int
    t2_ms: int
    x1: float
    x2: float
    easing: str
    y1: float
    y2: float
    color: int
    fx: str
    skyline: bool
    arctap_times_ms: tuple[int, ...] = ()

    @property
    def duration(self) -> int:
        return self.t2_ms - self.t1_ms


DEFAULT_TIMING = AffTiming(0, 120.0, 4.0)
"""Timing assumed for charts that declare none."""


@dataclass
class AffChart:
    """A class that contains all parsed entities of an AFF chart."""

    timings: list[AffTiming] = field(default_factory=list)
    notes: list[AffNote] = field(default_factory=list)
    holds: list[AffHold] = field(default_factory=list)
    arcs: list[AffArc] = field(default_factory=list)
    skipped_lines: int = 0
    """Number of non-blank lines that matched none of the recognized grammars."""

    @property
    def base_timing(self) -> AffTiming:
        """The first timing of the chart, or the default timing if there is none."""
        if self.timings:
            return self.timings[0]
        return DEFAULT_TIMING
