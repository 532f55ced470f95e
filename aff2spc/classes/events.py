"""
Classes that represent SPC events.

The set of event kinds is closed: :data:`SpcEvent` is the union of every variant, and code that needs to tell them
apart matches on the class.
"""
from dataclasses import dataclass, field
from typing import ClassVar

from .base import SpcEntity
from .enums import SpcEventType

__all__ = [
    "SpcChart",
    "SpcBpm",
    "SpcLane",
    "SpcTap",
    "SpcHold",
    "SpcFlick",
    "SpcSkyArea",
    "SpcEvent",
    "ConversionResult",
    "end_time_ms",
]


@dataclass(frozen=True)
class SpcChart(SpcEntity):
    """The chart header, which holds the initial tempo and beats per measure."""

    event_type: ClassVar[SpcEventType] = SpcEventType.CHART

    bpm: float
    beats: float

    @property
    def time_ms(self) -> int:
        return 0

    def to_spc_string(self) -> str:
        return f"chart({self.bpm:.2f},{self.beats:.2f})"


@dataclass(frozen=True)
class SpcBpm(SpcEntity):
    """A tempo change."""

    event_type: ClassVar[SpcEventType] = SpcEventType.BPM

    time_ms: int
    bpm: float
    beats: float

    def to_spc_string(self) -> str:
        return f"bpm({self.time_ms},{self.bpm:.2f},{self.beats:.2f})"


@dataclass(frozen=True)
class SpcLane(SpcEntity):
    """A lane toggle. ``enable`` is 1 to enable the lane and 0 to disable it."""

    event_type: ClassVar[SpcEventType] = SpcEventType.LANE

    time_ms: int
    lane: int
    enable: int

    def to_spc_string(self) -> str:
        return f"lane({self.time_ms},{self.lane},{self.enable})"


@dataclass(frozen=True)
class SpcTap(SpcEntity):
    """A ground tap. ``kind`` is the width of the tap in lanes."""

    event_type: ClassVar[SpcEventType] = SpcEventType.TAP

    time_ms: int
    kind: int
    lane: int

    def to_spc_string(self) -> str:
        return f"tap({self.time_ms},{self.kind},{self.lane})"


@dataclass(frozen=True)
class SpcHold(SpcEntity):
    """A ground hold."""

    event_type: ClassVar[SpcEventType] = SpcEventType.HOLD

    time_ms: int
    lane: int
    width: int
    duration_ms: int

    @property
    def end_ms(self) -> int:
        return self.time_ms + self.duration_ms

    def to_spc_string(self) -> str:
        return f"hold({self.time_ms},{self.lane},{self.width},{self.duration_ms})"


@dataclass(frozen=True)
class SpcFlick(SpcEntity):
    """A sky flick. Position and width are numerators over ``den``; ``direction`` is 4 (right) or 16 (left)."""

    event_type: ClassVar[SpcEventType] = SpcEventType.FLICK

    time_ms: int
    pos_num: int
    den: int
    width_num: int
    direction: int

    def to_spc_string(self) -> str:
        return f"flick({self.time_ms},{self.pos_num},{self.den},{self.width_num},{self.direction})"


@dataclass(frozen=True)
class SpcSkyArea(SpcEntity):
    """
    A sky area, gliding from a start position/width to an end position/width over ``duration_ms``.

    Sky areas that share a ``group_id`` are treated as one gesture by consumers.
    """

    event_type: ClassVar[SpcEventType] = SpcEventType.SKYAREA

    time_ms: int
    x1_num: int
    den1: int
    w1_num: int
    x2_num: int
    den2: int
    w2_num: int
    left_easing: int
    right_easing: int
    duration_ms: int
    group_id: int

    @property
    def end_ms(self) -> int:
        return self.time_ms + self.duration_ms

    def to_spc_string(self) -> str:
        fields = [
            self.time_ms,
            self.x1_num,
            self.den1,
            self.w1_num,
            self.x2_num,
            self.den2,
            self.w2_num,
            self.left_easing,
            self.right_easing,
            self.duration_ms,
            self.group_id,
        ]
        return f"skyarea({','.join(str(n) for n in fields)})"


SpcEvent = SpcChart | SpcBpm | SpcLane | SpcTap | SpcHold | SpcFlick | SpcSkyArea


def end_time_ms(event: SpcEvent) -> int:
    """Return the time at which an event ends. Only holds and sky areas span time."""
    match event:
        case SpcHold() | SpcSkyArea():
            return event.end_ms
        case _:
            return event.time_ms


@dataclass(frozen=True)
class ConversionResult:
    """The outcome of a conversion: the ordered event list and any advisory warnings."""

    events: list[SpcEvent] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def count(self, event_type: SpcEventType) -> int:
        """Count the events of a given kind."""
        return sum(1 for e in self.events if e.event_type == event_type)
