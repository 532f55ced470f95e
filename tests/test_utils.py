import math

import pytest

from aff2spc.classes.aff import AffArc
from aff2spc.classes.enums import FlickDirection
from aff2spc.utils import (
    clamp,
    edge_codes,
    evaluate_position,
    infer_direction,
    quantize,
    round_to_grid,
)


def make_arc(t1, t2, x1, x2, easing="s", skyline=False, arctaps=()):
    return AffArc(t1, t2, x1, x2, easing, 1.0, 1.0, 0, "none", skyline, tuple(arctaps))


def test_clamp_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        clamp(1, 5, 2)


def test_clamp_one_sided():
    assert clamp(-3, 0) == 0
    assert clamp(30, high_bound=24) == 24
    assert clamp(7, 0, 24) == 7


@pytest.mark.parametrize(
    "x, width, den, expected",
    [
        (0.0, 6, 24, 3),
        (1.0, 6, 24, 21),
        (0.5, 6, 24, 12),
        (-2.0, 6, 24, 3),
        (0.3, 30, 24, 12),
    ],
)
def test_quantize(x, width, den, expected):
    assert quantize(x, width, den) == expected


def test_quantize_rejects_bad_denominator():
    with pytest.raises(ValueError):
        quantize(0.5, 1, 0)


def test_quantize_keeps_objects_inside_the_field():
    den = 24
    for width in range(1, den + 1):
        for i in range(101):
            n = quantize(i / 100, width, den)
            assert width / 2 - 0.5 <= n <= den - width / 2 + 0.5


def test_round_to_grid_clamps():
    assert round_to_grid(1.5, 24) == 24
    assert round_to_grid(-0.1, 24) == 0
    assert round_to_grid(0.5, 24) == 12


@pytest.mark.parametrize(
    "token, expected",
    [
        ("s", (0, 0)),
        ("si", (1, 1)),
        ("so", (2, 2)),
        ("sisi", (1, 1)),
        ("soso", (2, 2)),
        ("siso", (1, 2)),
        (" SoSi ", (2, 1)),
        ("b", (0, 0)),
        (None, (0, 0)),
    ],
)
def test_edge_codes(token, expected):
    assert edge_codes(token) == expected


def test_evaluate_position_linear():
    arc = make_arc(0, 1000, 0.0, 1.0)
    assert evaluate_position(arc, 500) == pytest.approx(0.5)
    assert evaluate_position(arc, -100) == pytest.approx(0.0)
    assert evaluate_position(arc, 5000) == pytest.approx(1.0)


def test_evaluate_position_eased():
    assert evaluate_position(make_arc(0, 1000, 0.0, 1.0, "si"), 500) == pytest.approx(math.sin(math.pi / 4))
    assert evaluate_position(make_arc(0, 1000, 0.0, 1.0, "so"), 500) == pytest.approx(1 - math.cos(math.pi / 4))
    assert evaluate_position(make_arc(0, 1000, 0.0, 1.0, "siso"), 250) == pytest.approx(0.15625)


def test_evaluate_position_degenerate_arc():
    assert evaluate_position(make_arc(1000, 1000, 0.2, 0.8), 1000) == 0.8
    assert evaluate_position(make_arc(1000, 500, 0.2, 0.8), 700) == 0.8


def test_infer_direction():
    assert infer_direction(make_arc(0, 1000, 0.0, 1.0), 500) == FlickDirection.RIGHT
    assert infer_direction(make_arc(0, 1000, 1.0, 0.0), 500) == FlickDirection.LEFT


def test_infer_direction_ties_point_right():
    assert infer_direction(make_arc(0, 1000, 0.5, 0.5), 500) == FlickDirection.RIGHT
    # No lookahead left at the end of the arc.
    assert infer_direction(make_arc(0, 1000, 1.0, 0.0), 1000) == FlickDirection.RIGHT
