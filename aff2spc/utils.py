"""
Classes and functions that provide general utility: clamping, easing, arc geometry and grid quantization.
"""
from abc import ABC
from math import cos, pi, sin
from typing import Callable, TypeVar

from .classes.aff import AffArc
from .classes.enums import EdgeEasing, FlickDirection

__all__ = [
    "EaseFunctions",
    "clamp",
    "clamp01",
    "get_ease_function",
    "edge_codes",
    "evaluate_position",
    "infer_direction",
    "quantize",
    "round_to_grid",
    "DIRECTION_LOOKAHEAD_MS",
]

T = TypeVar("T", int, float)
EaseFunction = Callable[[float], float]

DIRECTION_LOOKAHEAD_MS = 8
"""How far ahead of an arctap the arc is sampled to decide the flick direction."""
DIRECTION_EPSILON = 1e-6


def clamp(value: T, low_bound: T | None = None, high_bound: T | None = None) -> T:
    """
    Clamp a value to a range.

    If a bound is set to `None`, then the value will not be clamped on that side.

    :param value: The value to clamp.
    :param low_bound: The lower value to clamp to. If `None`, the low side is unbounded.
    :param high_bound: The higher value to clamp to. If `None`, the high side is unbounded.
    :returns: The clamped value.
    """
    if low_bound is not None and high_bound is not None and low_bound > high_bound:
        raise ValueError("low bound cannot be larger than high bound")
    if low_bound is not None and value < low_bound:
        return low_bound
    if high_bound is not None and value > high_bound:
        return high_bound
    return value


def clamp01(value: float) -> float:
    """Clamp a value to [0, 1]."""
    return clamp(value, 0.0, 1.0)


class EaseFunctions(ABC):
    """A container class for easing functions that maps [0, 1] to [0, 1]. Functions should be strictly increasing."""

    @classmethod
    def linear(cls, x: float) -> float:
        """A linear map. Effectively the identity function."""
        x = clamp(x, 0, 1)
        return x

    @classmethod
    def ease_out_sine(cls, x: float) -> float:
        """An ease-out map. Uses the sine curve."""
        x = clamp(x, 0, 1)
        return sin(x * pi / 2)

    @classmethod
    def ease_in_sine(cls, x: float) -> float:
        """An ease-in map. Uses the cosine curve."""
        x = clamp(x, 0, 1)
        return 1 - cos(x * pi / 2)

    @classmethod
    def smoothstep(cls, x: float) -> float:
        """Hermite smoothstep, used for the mixed in/out tokens."""
        x = clamp(x, 0, 1)
        return x * x * (3 - 2 * x)


# fmt: off
EASING_TABLE: dict[str, tuple[EaseFunction, EdgeEasing, EdgeEasing]] = {
    "s"   : (EaseFunctions.linear,        EdgeEasing.STRAIGHT,  EdgeEasing.STRAIGHT),
    "si"  : (EaseFunctions.ease_out_sine, EdgeEasing.CURVE_IN,  EdgeEasing.CURVE_IN),
    "so"  : (EaseFunctions.ease_in_sine,  EdgeEasing.CURVE_OUT, EdgeEasing.CURVE_OUT),
    "sisi": (EaseFunctions.ease_out_sine, EdgeEasing.CURVE_IN,  EdgeEasing.CURVE_IN),
    "soso": (EaseFunctions.ease_in_sine,  EdgeEasing.CURVE_OUT, EdgeEasing.CURVE_OUT),
    "siso": (EaseFunctions.smoothstep,    EdgeEasing.CURVE_IN,  EdgeEasing.CURVE_OUT),
    "sosi": (EaseFunctions.smoothstep,    EdgeEasing.CURVE_OUT, EdgeEasing.CURVE_IN),
}
# fmt: on
_FALLBACK_EASING = EASING_TABLE["s"]


def _lookup(token: str | None) -> tuple[EaseFunction, EdgeEasing, EdgeEasing]:
    return EASING_TABLE.get((token or "s").strip().lower(), _FALLBACK_EASING)


def get_ease_function(token: str | None) -> EaseFunction:
    """Return the ease function for an arc easing token. Unrecognized tokens ease linearly."""
    return _lookup(token)[0]


def edge_codes(token: str | None) -> tuple[int, int]:
    """Return the (left, right) sky area edge codes for an arc easing token."""
    _, left, right = _lookup(token)
    return left.value, right.value


def evaluate_position(arc: AffArc, t_ms: int) -> float:
    """
    Evaluate the horizontal position of an arc at a given time.

    :param arc: The arc to evaluate.
    :param t_ms: The time, in milliseconds. Times outside of the arc are clamped to its ends.
    :returns: The eased position. Arcs that do not move forward in time always report their end position.
    """
    if arc.t2_ms <= arc.t1_ms:
        return arc.x2

    u = clamp01((t_ms - arc.t1_ms) / (arc.t2_ms - arc.t1_ms))
    eased = get_ease_function(arc.easing)(u)
    return arc.x1 + (arc.x2 - arc.x1) * eased


def infer_direction(arc: AffArc, t_ms: int) -> FlickDirection:
    """Decide which way a flick on an arc should point by comparing the arc now and a few milliseconds later."""
    t_next = min(arc.t2_ms, t_ms + DIRECTION_LOOKAHEAD_MS)
    x_now = evaluate_position(arc, t_ms)
    x_next = evaluate_position(arc, t_next)

    if abs(x_next - x_now) < DIRECTION_EPSILON:
        return FlickDirection.RIGHT
    return FlickDirection.RIGHT if x_next > x_now else FlickDirection.LEFT


def round_to_grid(x: float, den: int) -> int:
    """Round a position in [0, 1] to the nearest numerator over ``den``, clamped to [0, ``den``]."""
    return clamp(round(x * den), 0, den)


def quantize(x: float, width_num: int, den: int) -> int:
    """
    Map a position onto the sky grid so that an object of the given width stays inside the field.

    The center is clamped to [w/2, 1 - w/2] *before* rounding; rounding first could push a boundary value past
    the margin.

    :param x: The position, nominally in [0, 1].
    :param width_num: The width of the object, as a numerator over ``den``.
    :param den: The grid denominator.
    :returns: The position numerator, in [0, ``den``].
    """
    if den <= 0:
        raise ValueError(f"denominator must be positive (got {den})")

    w = width_num / den
    low, high = w / 2, 1 - w / 2
    if low > high:
        low = high = 0.5
    return round_to_grid(clamp(x, low, high), den)
