"""
Validation of SPC output.

:func:`validate_spc_text` re-parses serialized text rather than trusting the in-memory events, so that bugs in
serialization are caught too. Errors block acceptance of a file; warnings are advisory.
"""
import logging

from collections.abc import Iterable
from dataclasses import dataclass, field

from .classes.base import SpcSyntaxError
from .classes.enums import FlickDirection
from .classes.events import (
    SpcChart,
    SpcEvent,
    SpcFlick,
    SpcHold,
    SpcLane,
    SpcSkyArea,
    SpcTap,
)
from .parser.spc import parse_spc_line

__all__ = [
    "ValidationReport",
    "validate_spc_text",
    "check_events",
    "MIN_LANE",
    "MAX_LANE",
    "MAX_GROUND_WIDTH",
]

MIN_LANE = 0
MAX_LANE = 5
MAX_GROUND_WIDTH = 4
"""Widest tap or hold that the bounds check accepts."""
MIN_SKYAREA_DURATION_EXCLUSIVE = 1
VALID_DIRECTIONS = {d.value for d in FlickDirection}

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Diagnostics for a piece of SPC text."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether the text can be accepted, i.e. there are no errors."""
        return not self.errors


def _semantic_errors(event: SpcEvent) -> list[str]:
    match event:
        case SpcHold(duration_ms=duration) if duration <= 0:
            return [f"hold() duration must be positive (got {duration})"]
        case SpcSkyArea(duration_ms=duration, den1=den1, den2=den2):
            errors = []
            if duration <= MIN_SKYAREA_DURATION_EXCLUSIVE:
                errors.append(f"skyarea() duration must be greater than 1, high crash risk (got {duration})")
            if den1 <= 0 or den2 <= 0:
                errors.append(f"skyarea() denominators must be positive (got {den1}, {den2})")
            return errors
        case SpcFlick(den=den, width_num=width):
            errors = []
            if den <= 0:
                errors.append(f"flick() denominator must be positive (got {den})")
            if width <= 0:
                errors.append(f"flick() width must be positive (got {width})")
            return errors
        case _:
            return []


def _bound_warnings(event: SpcEvent) -> list[str]:
    warnings: list[str] = []
    match event:
        case SpcTap(time_ms=t, kind=kind, lane=lane):
            if not MIN_LANE <= lane <= MAX_LANE:
                warnings.append(f"tap lane out of range: t={t}, lane={lane}")
            if not 1 <= kind <= MAX_GROUND_WIDTH:
                warnings.append(f"tap width out of range: t={t}, width={kind}")
            if lane + kind - 1 > MAX_LANE:
                warnings.append(f"tap exceeds lane bound: t={t}, lane={lane}, width={kind}")
        case SpcHold(time_ms=t, lane=lane, width=width):
            # Holds can be built up to 6 lanes wide, but anything past 4 is reported here.
            if not MIN_LANE <= lane <= MAX_LANE:
                warnings.append(f"hold lane out of range: t={t}, lane={lane}")
            if not 1 <= width <= MAX_GROUND_WIDTH:
                warnings.append(f"hold width out of range: t={t}, width={width}")
            if lane + width - 1 > MAX_LANE:
                warnings.append(f"hold exceeds lane bound: t={t}, lane={lane}, width={width}")
        case SpcFlick(time_ms=t, den=den, width_num=width, direction=direction):
            if direction not in VALID_DIRECTIONS:
                warnings.append(f"flick direction invalid: t={t}, dir={direction}")
            if width > den:
                warnings.append(f"flick wider than the field: t={t}, width={width}, den={den}")
        case SpcLane(time_ms=t, lane=lane, enable=enable):
            if enable not in (0, 1):
                warnings.append(f"lane enable value invalid: t={t}, lane={lane}, enable={enable}")
    return warnings


def _chart_count_message(count: int) -> str:
    return f"chart() event count is not 1 (got {count})"


def check_events(events: Iterable[SpcEvent]) -> list[str]:
    """
    Run the advisory checks over freshly converted events.

    Besides the bounds checks, this also reports the conditions that :func:`validate_spc_text` would treat as errors,
    so they can be reviewed before the chart is saved.

    :returns: A list of human-readable warnings.
    """
    warnings: list[str] = []
    chart_count = 0
    for event in events:
        if isinstance(event, SpcChart):
            chart_count += 1
        for message in _semantic_errors(event):
            warnings.append(f"{message} at t={event.time_ms}")
        warnings.extend(_bound_warnings(event))
    if chart_count != 1:
        warnings.insert(0, _chart_count_message(chart_count))
    return warnings


def validate_spc_text(text: str) -> ValidationReport:
    """
    Validate SPC text.

    Every non-blank line is checked against the grammar; lines that fail get one error and no further checks. The
    remaining lines are then checked for semantic errors and bounds warnings. Messages are prefixed with their
    1-based line number.

    :param text: The SPC text.
    :returns: A :class:`ValidationReport`.
    """
    report = ValidationReport()
    text = text.removeprefix("\ufeff")
    parsed: list[tuple[int, SpcEvent]] = []

    for lineno, line in enumerate(text.replace("\r\n", "\n").split("\n"), start=1):
        if not line.strip():
            continue
        try:
            parsed.append((lineno, parse_spc_line(line)))
        except SpcSyntaxError as e:
            report.errors.append(f"line {lineno}: {e}")

    chart_count = sum(1 for _, event in parsed if isinstance(event, SpcChart))
    if chart_count != 1:
        report.errors.append(_chart_count_message(chart_count))

    for lineno, event in parsed:
        report.errors.extend(f"line {lineno}: {message}" for message in _semantic_errors(event))
        report.warnings.extend(f"line {lineno}: {message}" for message in _bound_warnings(event))

    logger.info(f"validation finished with {len(report.errors)} error(s) and {len(report.warnings)} warning(s)")
    return report
