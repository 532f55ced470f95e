import logging
import re

from typing import TextIO

from .base import Parser
from ..classes.aff import (
    AffArc,
    AffChart,
    AffHold,
    AffNote,
    AffTiming,
)

__all__ = [
    "AFFParser",
    "parse_aff",
]

# fmt: off
TIMING_REGEX = re.compile(r"^timing\((?P<offset>-?\d+),\s*(?P<bpm>[0-9.]+),\s*(?P<beats>[0-9.]+)\)\s*;$")
NOTE_REGEX   = re.compile(r"^\((?P<time>\d+),\s*(?P<lane>\d+)\)\s*;$")
HOLD_REGEX   = re.compile(r"^hold\((?P<t1>\d+),\s*(?P<t2>\d+),\s*(?P<lane>\d+)\)\s*;$")
ARC_REGEX    = re.compile(r"^arc\((?P<t1>\d+)\s*,\s*(?P<t2>\d+)\s*,\s*"
                          r"(?P<x1>-?[0-9.]+)\s*,\s*(?P<x2>-?[0-9.]+)\s*,\s*"
                          r"(?P<easing>[a-zA-Z]+)\s*,\s*"
                          r"(?P<y1>-?[0-9.]+)\s*,\s*(?P<y2>-?[0-9.]+)\s*,\s*"
                          r"(?P<color>\d+)\s*,\s*"
                          r"(?P<fx>[a-zA-Z0-9_]+)\s*,\s*"
                          r"(?P<skyline>true|false)\s*\)"
                          r"(?:\s*\[(?P<arctaps>.*?)\])?\s*;$")
ARCTAP_REGEX = re.compile(r"arctap\((?P<time>\d+)\)")
# fmt: on

logger = logging.getLogger(__name__)


class AFFParser(Parser):
    """
    Parser for AFF charts.

    Only timings, notes, holds and arcs are recognized. Everything else (timing groups, scene controls, the file
    header) is skipped without complaint, since a chart that converts partially is more useful than none.
    """

    def parse(self, f: TextIO) -> AffChart:
        self._remember_path(f)
        chart = AffChart()

        for lineno, line in enumerate(f):
            if lineno == 0:
                line = line.lstrip("\ufeff")
            line = line.strip()
            if not line:
                continue
            try:
                recognized = self._parse_line(chart, line)
            except ValueError:
                recognized = False
            if not recognized:
                chart.skipped_lines += 1
                logger.debug(f'skipped line {lineno + 1}: "{line}"')

        logger.debug(
            f"parsed {len(chart.timings)} timings, {len(chart.notes)} notes, {len(chart.holds)} holds, "
            f"{len(chart.arcs)} arcs ({chart.skipped_lines} lines skipped)"
        )
        return chart

    def _parse_line(self, chart: AffChart, line: str) -> bool:
        if match := TIMING_REGEX.match(line):
            chart.timings.append(AffTiming(int(match["offset"]), float(match["bpm"]), float(match["beats"])))
        elif match := NOTE_REGEX.match(line):
            chart.notes.append(AffNote(int(match["time"]), int(match["lane"])))
        elif match := HOLD_REGEX.match(line):
            chart.holds.append(AffHold(int(match["t1"]), int(match["t2"]), int(match["lane"])))
        elif match := ARC_REGEX.match(line):
            arctaps = tuple(int(m["time"]) for m in ARCTAP_REGEX.finditer(match["arctaps"] or ""))
            chart.arcs.append(
                AffArc(
                    int(match["t1"]),
                    int(match["t2"]),
                    float(match["x1"]),
                    float(match["x2"]),
                    match["easing"],
                    float(match["y1"]),
                    float(match["y2"]),
                    int(match["color"]),
                    match["fx"],
                    match["skyline"] == "true",
                    arctaps,
                )
            )
        else:
            return False
        return True


def parse_aff(text: str) -> AffChart:
    """Parse AFF chart text."""
    return AFFParser().parse_text(text)
