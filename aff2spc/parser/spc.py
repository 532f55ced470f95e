import logging
import re

from enum import Enum
from typing import TextIO

from .base import Parser
from ..classes.base import SpcSyntaxError
from ..classes.events import (
    SpcBpm,
    SpcChart,
    SpcEvent,
    SpcFlick,
    SpcHold,
    SpcLane,
    SpcSkyArea,
    SpcTap,
)

__all__ = [
    "FieldKind",
    "EVENT_SCHEMA",
    "SPCParser",
    "parse_spc",
    "parse_spc_line",
]


class FieldKind(Enum):
    INTEGER = "an integer"
    DECIMAL = "a decimal number"


INT = FieldKind.INTEGER
DEC = FieldKind.DECIMAL

# fmt: off
EVENT_SCHEMA: dict[str, tuple[type, tuple[FieldKind, ...]]] = {
    "chart"  : (SpcChart,   (DEC, DEC)),
    "bpm"    : (SpcBpm,     (INT, DEC, DEC)),
    "lane"   : (SpcLane,    (INT, INT, INT)),
    "tap"    : (SpcTap,     (INT, INT, INT)),
    "hold"   : (SpcHold,    (INT, INT, INT, INT)),
    "flick"  : (SpcFlick,   (INT, INT, INT, INT, INT)),
    "skyarea": (SpcSkyArea, (INT, INT, INT, INT, INT, INT, INT, INT, INT, INT, INT)),
}
FIELD_REGEX = {
    FieldKind.INTEGER: re.compile(r"^[+-]?\d+$"),
    FieldKind.DECIMAL: re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$"),
}
# fmt: on
INVALID_CHAR_REGEX = re.compile(r"[^A-Za-z0-9()._+,\s-]")

logger = logging.getLogger(__name__)


def parse_spc_line(line: str) -> SpcEvent:
    """
    Parse a single line of SPC text under the strict SPC grammar.

    :param line: The line to parse. Surrounding whitespace is ignored.
    :returns: The event described by the line.
    :raises SpcSyntaxError: if the line does not follow the grammar.
    """
    line = line.strip()

    if match := INVALID_CHAR_REGEX.search(line):
        raise SpcSyntaxError(f'invalid character "{match.group()}"')
    if line.count("(") != 1 or line.count(")") != 1:
        raise SpcSyntaxError("expected exactly one '(' and one ')'")

    open_index = line.index("(")
    close_index = line.index(")")
    if close_index < open_index:
        raise SpcSyntaxError("')' appears before '('")
    if line[close_index + 1 :].strip():
        raise SpcSyntaxError(f'unexpected content after ")": "{line[close_index + 1:].strip()}"')

    tag = line[:open_index].strip().lower()
    if not tag:
        raise SpcSyntaxError("missing event type before '('")
    if tag not in EVENT_SCHEMA:
        raise SpcSyntaxError(f'unknown event type "{tag}"')

    event_class, kinds = EVENT_SCHEMA[tag]
    args = [arg.strip() for arg in line[open_index + 1 : close_index].split(",")]
    if len(args) != len(kinds):
        raise SpcSyntaxError(f"{tag}() expects {len(kinds)} fields (got {len(args)})")

    values: list[int | float] = []
    for index, (arg, kind) in enumerate(zip(args, kinds)):
        if not FIELD_REGEX[kind].match(arg):
            raise SpcSyntaxError(f'field {index + 1} of {tag}() must be {kind.value} (got "{arg}")')
        values.append(int(arg) if kind == FieldKind.INTEGER else float(arg))

    return event_class(*values)


class SPCParser(Parser):
    """
    Parser for SPC event text.

    Lines that fail to parse are logged and skipped. Use :func:`aff2spc.validation.validate_spc_text` to get a full
    account of what is wrong with a file instead.
    """

    def parse(self, f: TextIO) -> list[SpcEvent]:
        self._remember_path(f)
        events: list[SpcEvent] = []

        for lineno, line in enumerate(f):
            if lineno == 0:
                line = line.lstrip("\ufeff")
            line = line.strip()
            if not line:
                continue
            try:
                events.append(parse_spc_line(line))
            except SpcSyntaxError as e:
                logger.warning(f'unrecognized line at line {lineno + 1}: "{line}" ({e})')

        return events


def parse_spc(text: str) -> list[SpcEvent]:
    """Parse SPC event text."""
    return SPCParser().parse_text(text)
