import logging
import random

from dataclasses import dataclass

from .base import Converter, sort_events
from .postprocess import (
    apply_flick_readability,
    apply_tap_width_pattern,
    deduplicate_taps,
    default_dense_threshold_ms,
    merge_concurrent_skyareas,
    randomize_hold_widths,
    resolve_simultaneous_flicks,
)
from ..classes.aff import AffArc, AffChart
from ..classes.enums import (
    FlickDirection,
    FlickDirectionMode,
    FlickWidthMode,
    LaneMapping,
    XMapping,
)
from ..classes.events import (
    ConversionResult,
    SpcBpm,
    SpcChart,
    SpcEvent,
    SpcFlick,
    SpcHold,
    SpcLane,
    SpcSkyArea,
    SpcTap,
)
from ..utils import (
    clamp,
    clamp01,
    edge_codes,
    evaluate_position,
    infer_direction,
    quantize,
)
from ..validation import check_events

__all__ = [
    "RuleBasedConverter",
]

DISABLED_LANES = (0, 4)
COMPRESS_FACTOR = 0.9
MIN_FLICK_WIDTH_SCALE = 0.2
MAX_TAP_KIND = 4
MAX_HOLD_WIDTH = 6

logger = logging.getLogger(__name__)


@dataclass
class RuleBasedConverter(Converter):
    """
    Map an AFF chart to SPC events following the configured rules, then make the result playable.

    Ground objects get fixed, clamped widths and optional lane remapping; arcs are placed on the sky grid so that
    they stay inside the field. The playability passes then merge, re-time and reassign objects that would be
    unreadable or unplayable, and taps that end up on top of each other are deduplicated last.
    """

    def convert(self, chart: AffChart) -> ConversionResult:
        options = self.options
        base_timing = chart.base_timing

        events: list[SpcEvent] = [SpcChart(base_timing.bpm, base_timing.beats)]

        if options.output_bpm_changes:
            for timing in chart.timings[1:]:
                events.append(SpcBpm(self._shift(timing.offset_ms), timing.bpm, timing.beats))

        if options.disable_lanes:
            for lane in DISABLED_LANES:
                events.append(SpcLane(0, lane, 0))

        taps, holds = self._map_ground(chart)
        skyareas, flicks = self._map_sky(chart)

        # Playability passes. The order matters.
        if options.merge_concurrent_skyareas:
            skyareas = merge_concurrent_skyareas(skyareas)

        if options.resolve_simultaneous_flicks:
            flicks, grounded = resolve_simultaneous_flicks(flicks, options.disable_lanes)
            taps.extend(grounded)

        if options.flick_dynamic_width_when_dense or options.flick_alternate_direction_when_dense:
            flicks = apply_flick_readability(
                flicks,
                options.dense_flick_threshold_ms or default_dense_threshold_ms(base_timing.bpm),
                options.denominator,
                widen=options.flick_dynamic_width_when_dense,
                alternate=options.flick_alternate_direction_when_dense,
            )

        if options.tap_width_pattern_enabled:
            taps = apply_tap_width_pattern(
                taps,
                holds,
                options.dense_tap_threshold_ms or default_dense_threshold_ms(base_timing.bpm),
                options.pattern,
                options.pattern_lanes,
            )

        if options.hold_width_random_enabled:
            holds = randomize_hold_widths(holds, random.Random(options.random_seed), options.hold_width_random_max)

        events.extend(taps)
        events.extend(holds)
        events.extend(skyareas)
        events.extend(flicks)

        events = self._deduplicate(sort_events(events, options.sort_mode))
        warnings = check_events(events)

        logger.info(
            f"rule-based mapping produced {len(events)} events "
            f"({len(taps)} taps, {len(holds)} holds, {len(skyareas)} sky areas, {len(flicks)} flicks), "
            f"{len(warnings)} warning(s)"
        )
        return ConversionResult(events, warnings)

    def _shift(self, time_ms: int) -> int:
        return max(0, time_ms + self.options.global_time_offset_ms)

    def _map_lane(self, lane: int, mapping: LaneMapping) -> int:
        if lane == 4 and (mapping == LaneMapping.FOUR_TO_FIVE or self.options.recommended_keymap):
            return 5
        return lane

    def _map_x(self, x: float) -> float:
        match self.options.x_mapping:
            case XMapping.RAW:
                return x
            case XMapping.COMPRESS:
                return 0.5 + (clamp01(x) - 0.5) * COMPRESS_FACTOR
            case _:
                return clamp01(x)

    def _map_ground(self, chart: AffChart) -> tuple[list[SpcTap], list[SpcHold]]:
        options = self.options
        tap_kind = clamp(options.note_default_kind, 1, MAX_TAP_KIND)
        hold_width = clamp(options.hold_default_width, 1, MAX_HOLD_WIDTH)

        taps: list[SpcTap] = []
        holds: list[SpcHold] = []

        for note in chart.notes:
            lane = self._map_lane(note.lane, options.note_lane_mapping)
            taps.append(SpcTap(self._shift(note.time_ms), tap_kind, lane))

        demoted = 0
        for hold in chart.holds:
            lane = self._map_lane(hold.lane, options.hold_lane_mapping)
            t1 = self._shift(hold.t1_ms)
            duration = self._shift(hold.t2_ms) - t1
            if not options.hold_allow_negative_duration:
                duration = max(0, duration)

            if options.min_hold_duration_ms > 0 and duration < options.min_hold_duration_ms:
                taps.append(SpcTap(t1, tap_kind, lane))
                demoted += 1
                continue
            holds.append(SpcHold(t1, lane, hold_width, duration))

        if demoted:
            logger.debug(f"demoted {demoted} short hold(s) to taps")
        return taps, holds

    def _map_sky(self, chart: AffChart) -> tuple[list[SpcSkyArea], list[SpcFlick]]:
        options = self.options
        den = options.denominator
        sky_width = options.base_sky_width_num
        rng = random.Random(options.random_seed)

        skyareas: list[SpcSkyArea] = []
        flicks: list[SpcFlick] = []
        group_id = 1
        dropped = 0

        for arc in chart.arcs:
            if arc.skyline:
                for time_ms in arc.arctap_times_ms:
                    width = self._flick_width(rng)
                    x = self._map_x(evaluate_position(arc, time_ms))
                    direction = self._flick_direction(arc, time_ms)
                    flicks.append(SpcFlick(self._shift(time_ms), quantize(x, width, den), den, width, direction))
                continue

            t1 = self._shift(arc.t1_ms)
            duration = max(0, self._shift(arc.t2_ms) - t1)
            if duration < options.min_skyarea_duration_ms:
                dropped += 1
                continue

            left, right = edge_codes(arc.easing)
            skyareas.append(
                SpcSkyArea(
                    t1,
                    quantize(self._map_x(arc.x1), sky_width, den),
                    den,
                    sky_width,
                    quantize(self._map_x(arc.x2), sky_width, den),
                    den,
                    sky_width,
                    left,
                    right,
                    duration,
                    group_id,
                )
            )
            group_id += 1

        if dropped:
            logger.debug(f"dropped {dropped} sky area(s) shorter than {options.min_skyarea_duration_ms}ms")
        return skyareas, flicks

    def _flick_width(self, rng: random.Random) -> int:
        options = self.options
        den = options.denominator
        match options.flick_width_mode:
            case FlickWidthMode.FIXED:
                return clamp(options.flick_fixed_width_num, 1, den)
            case FlickWidthMode.RANDOM:
                return clamp(rng.randint(1, options.flick_width_random_max), 1, den)
            case _:
                scale = max(MIN_FLICK_WIDTH_SCALE, options.flick_base_width_scale)
                return clamp(round(options.base_sky_width_num * scale), 1, den)

    def _flick_direction(self, arc: AffArc, time_ms: int) -> int:
        match self.options.flick_direction_mode:
            case FlickDirectionMode.RIGHT:
                return FlickDirection.RIGHT.value
            case FlickDirectionMode.LEFT:
                return FlickDirection.LEFT.value
            case _:
                return infer_direction(arc, time_ms).value

    def _deduplicate(self, events: list[SpcEvent]) -> list[SpcEvent]:
        taps = [e for e in events if isinstance(e, SpcTap)]
        kept = {id(tap) for tap in deduplicate_taps(taps, self.options.deduplicate_tap_threshold_ms)}
        return [e for e in events if not isinstance(e, SpcTap) or id(e) in kept]
