"""
Summary reports for SPC text.
"""
from typing import Optional

from .classes.enums import SpcEventType
from .classes.events import SpcChart, end_time_ms
from .classes.options import ConverterOptions
from .parser.spc import parse_spc

__all__ = [
    "build_report",
]

# fmt: off
OPTION_SECTIONS: list[tuple[str, list[str]]] = [
    ("Base", [
        "mapping_rule", "denominator", "sky_width_ratio", "x_mapping",
    ]),
    ("Options", [
        "recommended_keymap", "disable_lanes",
    ]),
    ("Rule-based", [
        "note_lane_mapping", "note_default_kind", "hold_lane_mapping", "hold_default_width",
        "hold_allow_negative_duration", "flick_direction_mode", "flick_width_mode", "flick_fixed_width_num",
        "flick_width_random_max", "flick_base_width_scale",
    ]),
    ("Advanced", [
        "global_time_offset_ms", "min_hold_duration_ms", "min_skyarea_duration_ms", "output_bpm_changes",
        "deduplicate_tap_threshold_ms", "sort_mode",
    ]),
    ("Difficulty / remix", [
        "tap_width_pattern_enabled", "tap_width_pattern", "tap_width_pattern_lanes", "dense_tap_threshold_ms",
        "hold_width_random_enabled", "hold_width_random_max", "random_seed",
    ]),
    ("Sky", [
        "merge_concurrent_skyareas", "resolve_simultaneous_flicks",
        "flick_dynamic_width_when_dense", "flick_alternate_direction_when_dense", "dense_flick_threshold_ms",
    ]),
]
# fmt: on


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    return "N/A" if value is None else str(value)


def build_report(text: str, options: Optional[ConverterOptions] = None) -> str:
    """
    Summarize a piece of SPC text.

    Events are counted per kind over the lines that parse; malformed lines are left out. The tempo and beats come from
    the first chart header.

    :param text: The SPC text.
    :param options: The options the text was produced with. When given, they are listed after the counts.
    :returns: The report, as multi-line text.
    """
    events = parse_spc(text)
    header = next((e for e in events if isinstance(e, SpcChart)), None)

    def count(event_type: SpcEventType) -> int:
        return sum(1 for e in events if e.event_type == event_type)

    lines = ["=== Summary ==="]
    lines.append(f"chart: {count(SpcEventType.CHART)}")
    lines.append(f"bpm-events: {count(SpcEventType.BPM)}")
    lines.append(f"chart.bpm: {_format_value(header.bpm if header else None)}")
    lines.append(f"chart.beats: {_format_value(header.beats if header else None)}")
    for event_type in (SpcEventType.LANE, SpcEventType.TAP, SpcEventType.HOLD, SpcEventType.SKYAREA, SpcEventType.FLICK):
        lines.append(f"{event_type}: {count(event_type)}")
    lines.append(f"end-ms: {max((end_time_ms(e) for e in events), default=0)}")

    if options is not None:
        dumped = options.model_dump(mode="json")
        lines.append("")
        lines.append("=== Options ===")
        for section, names in OPTION_SECTIONS:
            lines.append(f"[{section}]")
            lines.extend(f"{name}={dumped[name]}" for name in names)
            lines.append("")
        lines.pop()

    return "\n".join(lines) + "\n"
