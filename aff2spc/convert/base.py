"""
Abstract base class for converters, and helpers shared by every mapping strategy.
"""
from abc import abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..classes.aff import AffChart
from ..classes.base import AbstractDataclass
from ..classes.enums import SortMode
from ..classes.events import ConversionResult, SpcEvent
from ..classes.options import ConverterOptions

__all__ = [
    "Converter",
    "sort_events",
]


def sort_events(events: Iterable[SpcEvent], sort_mode: SortMode = SortMode.TIME_FIRST) -> list[SpcEvent]:
    """
    Stably sort events by time and event type.

    :param events: The events to sort.
    :param sort_mode: Whether time or event type is the primary key.
    :returns: A new, sorted list.
    """
    if sort_mode == SortMode.TYPE_FIRST:
        return sorted(events, key=lambda e: (e.event_type.value, e.time_ms))
    return sorted(events, key=lambda e: (e.time_ms, e.event_type.value))


@dataclass
class Converter(AbstractDataclass):
    """
    An abstract base class for strategies that turn an AFF chart into SPC events.
    """

    options: ConverterOptions = field(default_factory=ConverterOptions)

    @abstractmethod
    def convert(self, chart: AffChart) -> ConversionResult:
        """Convert a chart. Never raises on odd geometry; problems are clamped, dropped or left for validation."""
        pass
