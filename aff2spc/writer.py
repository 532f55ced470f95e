"""
Serialization of SPC events to text.
"""
from collections.abc import Iterable
from io import StringIO
from typing import TextIO

from .classes.events import SpcChart, SpcEvent

__all__ = [
    "write_spc",
    "dumps_spc",
]


def write_spc(events: Iterable[SpcEvent], f: TextIO) -> None:
    """
    Write events in SPC format, one per line.

    The first chart header goes first regardless of its position in ``events``; every other event keeps its order.
    No validation is done here.
    """
    events = list(events)

    header = next((e for e in events if isinstance(e, SpcChart)), None)
    if header is not None:
        f.write(f"{header.to_spc_string()}\n")

    for event in events:
        match event:
            case SpcChart():
                continue
            case _:
                f.write(f"{event.to_spc_string()}\n")


def dumps_spc(events: Iterable[SpcEvent]) -> str:
    """Serialize events to a string in SPC format."""
    buffer = StringIO()
    write_spc(events, buffer)
    return buffer.getvalue()
