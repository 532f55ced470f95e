from .aff import (
    AffArc,
    AffChart,
    AffHold,
    AffNote,
    AffTiming,
)

from .base import (
    SpcSyntaxError,
)

from .enums import (
    EdgeEasing,
    FlickDirection,
    FlickDirectionMode,
    FlickWidthMode,
    LaneMapping,
    MappingRule,
    SortMode,
    SpcEventType,
    XMapping,
)

from .events import (
    ConversionResult,
    SpcBpm,
    SpcChart,
    SpcEvent,
    SpcFlick,
    SpcHold,
    SpcLane,
    SpcSkyArea,
    SpcTap,
)

from .options import (
    ConverterOptions,
)
