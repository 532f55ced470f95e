"""
Playability passes applied to the output of the rule-based mapping.

Every pass takes lists of events and returns new lists; inputs are never modified. The passes are order-sensitive:
later passes see the events that earlier passes created or removed.
"""
import itertools
import logging
import random

from collections.abc import Iterable, Sequence
from dataclasses import replace

from ..classes.enums import EdgeEasing, FlickDirection
from ..classes.events import SpcFlick, SpcHold, SpcSkyArea, SpcTap
from ..utils import clamp, round_to_grid

__all__ = [
    "default_dense_threshold_ms",
    "merge_concurrent_skyareas",
    "resolve_simultaneous_flicks",
    "apply_flick_readability",
    "apply_tap_width_pattern",
    "randomize_hold_widths",
    "deduplicate_taps",
]

NOT_DENSE = float("inf")
LEFT_EDGE_LANE = 0
RIGHT_EDGE_LANE = 5
HOLD_WIDE_ROLL = 15
HOLD_WIDER_ROLL = 5

logger = logging.getLogger(__name__)


def default_dense_threshold_ms(bpm: float) -> int:
    """Length of a 1/16 note at the given tempo, in milliseconds."""
    beat_ms = 60000.0 / max(1.0, bpm)
    return round(beat_ms / 4)


def merge_concurrent_skyareas(skyareas: Sequence[SpcSkyArea]) -> list[SpcSkyArea]:
    """
    Merge sky areas that share both start time and duration into a single sky area.

    Merged areas take the mean of the positions, the widest width on each side, and keep an edge curve only if every
    member agrees on it. Group IDs are renumbered from 1 in start time order.
    """
    groups: dict[tuple[int, int], list[SpcSkyArea]] = {}
    for skyarea in skyareas:
        groups.setdefault((skyarea.time_ms, skyarea.duration_ms), []).append(skyarea)

    result: list[SpcSkyArea] = []
    keys = sorted(groups, key=lambda key: key[0])
    for group_id, key in enumerate(keys, start=1):
        members = groups[key]
        if len(members) == 1:
            result.append(replace(members[0], group_id=group_id))
            continue

        first = members[0]
        den = first.den1
        mean_x1 = sum(s.x1_num / den for s in members) / len(members)
        mean_x2 = sum(s.x2_num / den for s in members) / len(members)
        left = first.left_easing if all(s.left_easing == first.left_easing for s in members) else None
        right = first.right_easing if all(s.right_easing == first.right_easing for s in members) else None

        result.append(
            SpcSkyArea(
                first.time_ms,
                round_to_grid(mean_x1, den),
                den,
                max(s.w1_num for s in members),
                round_to_grid(mean_x2, den),
                den,
                max(s.w2_num for s in members),
                EdgeEasing.STRAIGHT.value if left is None else left,
                EdgeEasing.STRAIGHT.value if right is None else right,
                first.duration_ms,
                group_id,
            )
        )
        logger.debug(f"merged {len(members)} sky areas at {first.time_ms}ms")

    return result


def resolve_simultaneous_flicks(
    flicks: Sequence[SpcFlick], disable_lanes: bool
) -> tuple[list[SpcFlick], list[SpcTap]]:
    """
    Keep one flick per timestamp and move the rest to the ground.

    The first flick at each time stays a flick. Each other flick becomes a tap on the edge lane on its side of the
    field, with every second demoted flick sent to the opposite edge to spread the load. When edge lanes are
    disabled, every demoted flick goes to lane 5.

    :returns: A 2-tuple of the remaining flicks and the newly created taps.
    """
    by_time: dict[int, list[SpcFlick]] = {}
    for flick in flicks:
        by_time.setdefault(flick.time_ms, []).append(flick)

    kept: list[SpcFlick] = []
    taps: list[SpcTap] = []
    alternation = itertools.count()

    for time_ms in sorted(by_time):
        first, *rest = by_time[time_ms]
        kept.append(first)
        for flick in rest:
            if disable_lanes:
                lane = RIGHT_EDGE_LANE
            else:
                lane = RIGHT_EDGE_LANE if flick.pos_num >= flick.den // 2 else LEFT_EDGE_LANE
                if next(alternation) % 2 == 1:
                    lane = LEFT_EDGE_LANE if lane == RIGHT_EDGE_LANE else RIGHT_EDGE_LANE
            taps.append(SpcTap(time_ms, 1, lane))
        if rest:
            logger.debug(f"moved {len(rest)} simultaneous flick(s) at {time_ms}ms to the ground")

    return kept, taps


def apply_flick_readability(
    flicks: Sequence[SpcFlick],
    dense_ms: int,
    den: int,
    widen: bool = True,
    alternate: bool = True,
) -> list[SpcFlick]:
    """
    Style flicks that are close to their neighbors so they read better.

    A flick is dense if the gap to either neighbor is at most ``dense_ms``. Dense flicks are widened two-fold, or
    three-fold if the tighter gap is at most half of ``dense_ms``, and point the other way from the previous flick.

    :param flicks: The flicks to style.
    :param dense_ms: Gap threshold, in milliseconds.
    :param den: The grid denominator; widened flicks never exceed it.
    :param widen: Whether to widen dense flicks.
    :param alternate: Whether to alternate the direction of dense flicks.
    :returns: The styled flicks, sorted by time.
    """
    ordered = sorted(flicks, key=lambda f: f.time_ms)
    result: list[SpcFlick] = []
    last_direction = FlickDirection.RIGHT.value

    for i, flick in enumerate(ordered):
        gap_prev = flick.time_ms - ordered[i - 1].time_ms if i > 0 else NOT_DENSE
        gap_next = ordered[i + 1].time_ms - flick.time_ms if i + 1 < len(ordered) else NOT_DENSE
        dense = gap_prev <= dense_ms or gap_next <= dense_ms

        width = flick.width_num
        direction = flick.direction
        if dense and widen:
            factor = 3 if min(gap_prev, gap_next) <= dense_ms / 2 else 2
            width = clamp(flick.width_num * factor, 1, den)
        if dense and alternate:
            direction = (
                FlickDirection.LEFT.value if last_direction == FlickDirection.RIGHT.value else FlickDirection.RIGHT.value
            )

        last_direction = direction
        result.append(replace(flick, width_num=width, direction=direction))

    return result


def _in_any_hold(time_ms: int, intervals: Iterable[tuple[int, int]]) -> bool:
    return any(start <= time_ms <= end for start, end in intervals)


def apply_tap_width_pattern(
    taps: Sequence[SpcTap],
    holds: Sequence[SpcHold],
    dense_ms: int,
    pattern: Sequence[int],
    allowed_lanes: Iterable[int],
) -> list[SpcTap]:
    """
    Cycle tap widths through a pattern inside dense runs of taps.

    Only taps on ``allowed_lanes`` that are not under any hold and that follow the previous tap within ``dense_ms``
    get a width from the pattern, clamped to [1, 4]. Every other tap is made narrow and restarts the pattern.

    :returns: The taps, sorted by time then lane.
    """
    ordered = sorted(taps, key=lambda t: (t.time_ms, t.lane))
    if not pattern:
        return ordered

    allowed = set(allowed_lanes)
    intervals = [(h.time_ms, h.time_ms + max(0, h.duration_ms)) for h in holds]

    result: list[SpcTap] = []
    cursor = 0
    last_time: int | None = None

    for tap in ordered:
        if tap.lane not in allowed or _in_any_hold(tap.time_ms, intervals):
            cursor = 0
            result.append(replace(tap, kind=1))
            continue

        dense = last_time is not None and tap.time_ms - last_time <= dense_ms
        if dense:
            result.append(replace(tap, kind=clamp(pattern[cursor % len(pattern)], 1, 4)))
            cursor += 1
        else:
            cursor = 0
            result.append(replace(tap, kind=1))
        last_time = tap.time_ms

    return result


def randomize_hold_widths(holds: Sequence[SpcHold], rng: random.Random, max_width: int) -> list[SpcHold]:
    """
    Occasionally widen holds.

    Each hold rolls in [0, 100): below 15 it becomes two lanes wide, and below 5 it then becomes three lanes wide,
    capped at ``max_width``. Widths 1, 2 and 3 come out roughly 85%, 10% and 5% of the time.
    """
    max_width = max(1, max_width)
    result: list[SpcHold] = []
    for hold in holds:
        roll = rng.randrange(100)
        width = 1
        if roll < HOLD_WIDE_ROLL:
            width = 2
        if roll < HOLD_WIDER_ROLL:
            width = min(max_width, 3)
        result.append(replace(hold, width=width))
    return result


def deduplicate_taps(taps: Sequence[SpcTap], threshold_ms: int) -> list[SpcTap]:
    """
    Remove taps that follow another tap on the same lane within ``threshold_ms``.

    Removal runs from the back so that the earliest tap of each cluster survives. A threshold of 0 disables this.

    :returns: The remaining taps, sorted by time.
    """
    ordered = sorted(taps, key=lambda t: t.time_ms)
    if threshold_ms <= 0:
        return ordered

    lanes: dict[int, list[int]] = {}
    for index, tap in enumerate(ordered):
        lanes.setdefault(tap.lane, []).append(index)

    removed: set[int] = set()
    for indices in lanes.values():
        for i in range(len(indices) - 1, 0, -1):
            if ordered[indices[i]].time_ms - ordered[indices[i - 1]].time_ms <= threshold_ms:
                removed.add(indices[i])

    if removed:
        logger.debug(f"removed {len(removed)} duplicate tap(s)")
    return [tap for index, tap in enumerate(ordered) if index not in removed]
