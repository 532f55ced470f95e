"""
Conversion options.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import (
    FlickDirectionMode,
    FlickWidthMode,
    LaneMapping,
    MappingRule,
    SortMode,
    XMapping,
)

__all__ = [
    "ConverterOptions",
    "parse_pattern",
]


def parse_pattern(csv: str) -> list[int]:
    """Parse a comma-separated list of integers, ignoring entries that are not integers."""
    result: list[int] = []
    for part in (csv or "").split(","):
        try:
            result.append(int(part.strip()))
        except ValueError:
            continue
    return result


class ConverterOptions(BaseModel):
    """
    An immutable set of options for a single conversion.

    Every option can be toggled independently. Options that only matter to the rule-based mapping are ignored by the
    literal mapping.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Base
    mapping_rule: MappingRule = Field(default=MappingRule.CUSTOM, description="literal or custom")
    denominator: int = Field(default=24, ge=1, description="Resolution of the sky position grid.")
    sky_width_ratio: float = Field(default=0.25, ge=0, le=1, description="Base sky width as a fraction of the field.")
    x_mapping: XMapping = Field(default=XMapping.CLAMP, description="clamp01, compress or raw")
    recommended_keymap: bool = Field(default=False, description="Legacy alias sending lane 4 to lane 5.")
    disable_lanes: bool = Field(default=False, description="Disable lanes 0 and 4 at the start of the chart.")

    # Rule-based parameter mapping
    note_lane_mapping: LaneMapping = LaneMapping.DIRECT
    note_default_kind: int = Field(default=1, description="Tap width, clamped to [1, 4].")
    hold_lane_mapping: LaneMapping = LaneMapping.DIRECT
    hold_default_width: int = Field(default=1, description="Hold width, clamped to [1, 6].")
    hold_allow_negative_duration: bool = False
    flick_direction_mode: FlickDirectionMode = FlickDirectionMode.AUTO
    flick_width_mode: FlickWidthMode = FlickWidthMode.DEFAULT
    flick_fixed_width_num: int = Field(default=6, ge=1)
    flick_width_random_max: int = Field(default=12, ge=1)
    flick_base_width_scale: float = Field(default=1.0, description="Scale of the base flick width used when styling.")

    # Advanced
    global_time_offset_ms: int = 0
    min_hold_duration_ms: int = Field(default=0, ge=0, description="Holds shorter than this become taps.")
    min_skyarea_duration_ms: int = Field(default=0, ge=0, description="Sky areas shorter than this are dropped.")
    output_bpm_changes: bool = False
    deduplicate_tap_threshold_ms: int = Field(default=0, ge=0, description="0 disables tap deduplication.")
    sort_mode: SortMode = SortMode.TIME_FIRST

    # Playability passes
    merge_concurrent_skyareas: bool = True
    resolve_simultaneous_flicks: bool = True
    flick_dynamic_width_when_dense: bool = True
    flick_alternate_direction_when_dense: bool = True
    dense_flick_threshold_ms: int = Field(default=0, ge=0, description="0 derives a 1/16 note from the base BPM.")

    # Optional remix
    tap_width_pattern_enabled: bool = False
    tap_width_pattern: str = "1,2"
    tap_width_pattern_lanes: Optional[tuple[int, ...]] = Field(
        default=None, description="Lanes the pattern may touch. Defaults depend on disable_lanes."
    )
    dense_tap_threshold_ms: int = Field(default=0, ge=0, description="0 derives a 1/16 note from the base BPM.")
    hold_width_random_enabled: bool = False
    hold_width_random_max: int = Field(default=2, ge=1)
    random_seed: int = 12345

    @field_validator("tap_width_pattern")
    @classmethod
    def validate_tap_width_pattern(cls, value: str) -> str:
        normalized = (value or "").strip()
        if normalized and not parse_pattern(normalized):
            raise ValueError(f"tap_width_pattern contains no integers (got {value!r})")
        return normalized

    @field_validator("tap_width_pattern_lanes")
    @classmethod
    def validate_pattern_lanes(cls, value: Optional[tuple[int, ...]]) -> Optional[tuple[int, ...]]:
        if value is None:
            return None
        for lane in value:
            if not 0 <= lane <= 5:
                raise ValueError(f"lane out of range (got {lane})")
        return value

    @property
    def base_sky_width_num(self) -> int:
        """Sky width in grid units, clamped to [1, denominator]."""
        return min(max(round(self.sky_width_ratio * self.denominator), 1), self.denominator)

    @property
    def pattern(self) -> list[int]:
        return parse_pattern(self.tap_width_pattern)

    @property
    def pattern_lanes(self) -> tuple[int, ...]:
        if self.tap_width_pattern_lanes is not None:
            return self.tap_width_pattern_lanes
        if self.disable_lanes:
            return (1, 2, 3, 5)
        return (0, 1, 2, 3, 4, 5)
