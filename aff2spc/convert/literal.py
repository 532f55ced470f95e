import logging

from dataclasses import dataclass

from .base import Converter, sort_events
from ..classes.aff import AffChart
from ..classes.enums import SortMode
from ..classes.events import (
    ConversionResult,
    SpcChart,
    SpcEvent,
    SpcFlick,
    SpcHold,
    SpcSkyArea,
    SpcTap,
)
from ..utils import (
    edge_codes,
    evaluate_position,
    infer_direction,
    quantize,
)

__all__ = [
    "LiteralConverter",
]

logger = logging.getLogger(__name__)


@dataclass
class LiteralConverter(Converter):
    """
    Map every AFF object to its closest SPC counterpart without any cleanup.

    Only the first timing is used and the global time offset is ignored. Hold and sky area durations are kept as-is,
    even when they are zero or negative, so that broken geometry in the source shows up in the output. The only lane
    change is the legacy 4 -> 5 alias.
    """

    def convert(self, chart: AffChart) -> ConversionResult:
        base_timing = chart.base_timing
        den = self.options.denominator
        width = self.options.base_sky_width_num

        events: list[SpcEvent] = [SpcChart(base_timing.bpm, base_timing.beats)]

        for note in chart.notes:
            events.append(SpcTap(note.time_ms, 1, self._alias_lane(note.lane)))

        for hold in chart.holds:
            events.append(SpcHold(hold.t1_ms, self._alias_lane(hold.lane), 1, hold.duration))

        group_id = 1
        for arc in chart.arcs:
            if arc.skyline:
                for time_ms in arc.arctap_times_ms:
                    x = evaluate_position(arc, time_ms)
                    direction = infer_direction(arc, time_ms)
                    events.append(SpcFlick(time_ms, quantize(x, width, den), den, width, direction.value))
            else:
                left, right = edge_codes(arc.easing)
                events.append(
                    SpcSkyArea(
                        arc.t1_ms,
                        quantize(arc.x1, width, den),
                        den,
                        width,
                        quantize(arc.x2, width, den),
                        den,
                        width,
                        left,
                        right,
                        arc.duration,
                        group_id,
                    )
                )
                group_id += 1

        logger.info(f"literal mapping produced {len(events)} events")
        return ConversionResult(sort_events(events, SortMode.TIME_FIRST), [])

    def _alias_lane(self, lane: int) -> int:
        if self.options.recommended_keymap and lane == 4:
            return 5
        return lane
