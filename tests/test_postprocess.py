import random

from aff2spc.classes.events import SpcFlick, SpcHold, SpcSkyArea, SpcTap
from aff2spc.convert.postprocess import (
    apply_flick_readability,
    apply_tap_width_pattern,
    deduplicate_taps,
    default_dense_threshold_ms,
    merge_concurrent_skyareas,
    randomize_hold_widths,
    resolve_simultaneous_flicks,
)


class FixedRolls:
    """Stands in for ``random.Random`` and returns preset rolls."""

    def __init__(self, rolls):
        self._rolls = iter(rolls)

    def randrange(self, stop):
        return next(self._rolls)


def skyarea(time_ms, x1, x2, w1=6, w2=6, left=0, right=0, duration=1000, group_id=1):
    return SpcSkyArea(time_ms, x1, 24, w1, x2, 24, w2, left, right, duration, group_id)


def test_default_dense_threshold():
    assert default_dense_threshold_ms(120) == 125
    assert default_dense_threshold_ms(0) == 15000


def test_merge_concurrent_skyareas():
    merged = merge_concurrent_skyareas(
        [
            skyarea(1000, 3, 12, w1=6, w2=8, left=1, right=1),
            skyarea(1000, 21, 12, w1=4, w2=6, left=1, right=2),
        ]
    )
    assert merged == [skyarea(1000, 12, 12, w1=6, w2=8, left=1, right=0, group_id=1)]


def test_merge_renumbers_groups_by_time():
    merged = merge_concurrent_skyareas(
        [
            skyarea(3000, 3, 3, group_id=9),
            skyarea(1000, 3, 3, group_id=5),
            skyarea(1000, 3, 3, duration=500, group_id=7),
        ]
    )
    assert [(s.time_ms, s.group_id) for s in merged] == [(1000, 1), (1000, 2), (3000, 3)]


def test_merge_does_not_modify_input():
    areas = [skyarea(1000, 3, 3, group_id=4)]
    merge_concurrent_skyareas(areas)
    assert areas[0].group_id == 4


def test_merged_width_is_never_narrower():
    areas = [skyarea(0, x, 24 - x, w1=w, w2=w + 1) for x, w in [(2, 3), (10, 7), (20, 5), (6, 1)]]
    (merged,) = merge_concurrent_skyareas(areas)
    assert merged.w1_num >= max(s.w1_num for s in areas)
    assert merged.w2_num >= max(s.w2_num for s in areas)


def test_resolve_simultaneous_flicks():
    flicks = [SpcFlick(1500, 20, 24, 6, 4), SpcFlick(1500, 20, 24, 6, 4), SpcFlick(1500, 20, 24, 6, 4)]
    kept, taps = resolve_simultaneous_flicks(flicks, disable_lanes=False)

    assert kept == [flicks[0]]
    assert taps == [SpcTap(1500, 1, 5), SpcTap(1500, 1, 0)]


def test_resolve_simultaneous_flicks_left_side():
    flicks = [SpcFlick(0, 2, 24, 6, 4), SpcFlick(0, 2, 24, 6, 4), SpcFlick(100, 2, 24, 6, 4)]
    kept, taps = resolve_simultaneous_flicks(flicks, disable_lanes=False)

    assert kept == [flicks[0], flicks[2]]
    assert taps == [SpcTap(0, 1, 0)]


def test_resolve_simultaneous_flicks_with_disabled_lanes():
    flicks = [SpcFlick(1500, 2, 24, 6, 4)] * 3
    _, taps = resolve_simultaneous_flicks(flicks, disable_lanes=True)
    assert [tap.lane for tap in taps] == [5, 5]


def test_flick_readability():
    flicks = [SpcFlick(1000, 12, 24, 6, 4), SpcFlick(0, 12, 24, 6, 4), SpcFlick(100, 12, 24, 6, 4)]
    styled = apply_flick_readability(flicks, 125, 24)

    assert [f.time_ms for f in styled] == [0, 100, 1000]
    assert [f.width_num for f in styled] == [12, 12, 6]
    assert [f.direction for f in styled] == [16, 4, 4]


def test_flick_readability_very_dense():
    flicks = [SpcFlick(0, 12, 24, 6, 4), SpcFlick(50, 12, 24, 10, 4)]
    styled = apply_flick_readability(flicks, 125, 24)
    assert [f.width_num for f in styled] == [18, 24]


def test_flick_readability_toggles():
    flicks = [SpcFlick(0, 12, 24, 6, 4), SpcFlick(100, 12, 24, 6, 4)]

    unwidened = apply_flick_readability(flicks, 125, 24, widen=False)
    assert [f.width_num for f in unwidened] == [6, 6]
    assert [f.direction for f in unwidened] == [16, 4]

    unalternated = apply_flick_readability(flicks, 125, 24, alternate=False)
    assert [f.width_num for f in unalternated] == [12, 12]
    assert [f.direction for f in unalternated] == [4, 4]


def test_tap_width_pattern():
    taps = [SpcTap(t, 1, 1) for t in (300, 0, 100, 200)]
    patterned = apply_tap_width_pattern(taps, [], 125, [2, 3], range(6))
    assert [(t.time_ms, t.kind) for t in patterned] == [(0, 1), (100, 2), (200, 3), (300, 2)]


def test_tap_width_pattern_resets_under_holds():
    taps = [SpcTap(t, 1, 1) for t in (0, 100, 200, 300)]
    holds = [SpcHold(150, 3, 1, 100)]
    patterned = apply_tap_width_pattern(taps, holds, 125, [2, 3], range(6))
    assert [t.kind for t in patterned] == [1, 2, 1, 1]


def test_tap_width_pattern_lane_whitelist_and_clamp():
    taps = [SpcTap(0, 1, 1), SpcTap(100, 1, 1), SpcTap(150, 3, 0)]
    patterned = apply_tap_width_pattern(taps, [], 125, [9], (1, 2, 3, 5))
    assert [(t.lane, t.kind) for t in patterned] == [(1, 1), (1, 4), (0, 1)]


def test_tap_width_pattern_empty_pattern():
    taps = [SpcTap(100, 2, 1), SpcTap(0, 3, 1)]
    assert apply_tap_width_pattern(taps, [], 125, [], range(6)) == [SpcTap(0, 3, 1), SpcTap(100, 2, 1)]


def test_randomize_hold_widths_layers_rolls():
    holds = [SpcHold(t, 1, 1, 100) for t in (0, 1000, 2000)]

    assert [h.width for h in randomize_hold_widths(holds, FixedRolls([3, 10, 50]), 4)] == [3, 2, 1]
    assert [h.width for h in randomize_hold_widths(holds, FixedRolls([3, 10, 50]), 2)] == [2, 2, 1]


def test_randomize_hold_widths_is_reproducible():
    holds = [SpcHold(t, 1, 1, 100) for t in range(0, 50000, 500)]
    first = randomize_hold_widths(holds, random.Random(12345), 3)
    second = randomize_hold_widths(holds, random.Random(12345), 3)
    assert first == second
    assert {h.width for h in first} <= {1, 2, 3}


def test_deduplicate_taps():
    taps = [SpcTap(20, 1, 1), SpcTap(0, 1, 1), SpcTap(10, 1, 1), SpcTap(10, 1, 2)]
    assert deduplicate_taps(taps, 10) == [SpcTap(0, 1, 1), SpcTap(10, 1, 2)]


def test_deduplicate_keeps_the_earliest_tap():
    taps = [SpcTap(1012, 1, 3), SpcTap(1000, 1, 3)]
    assert deduplicate_taps(taps, 20) == [SpcTap(1000, 1, 3)]


def test_deduplicate_disabled():
    taps = [SpcTap(0, 1, 1), SpcTap(0, 1, 1)]
    assert deduplicate_taps(taps, 0) == taps
