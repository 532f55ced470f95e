"""
Conversion of AFF charts to SPC events.
"""
from .base import Converter, sort_events
from .custom import RuleBasedConverter
from .literal import LiteralConverter
from ..classes.aff import AffChart
from ..classes.enums import MappingRule
from ..classes.events import ConversionResult
from ..classes.options import ConverterOptions

__all__ = [
    "Converter",
    "LiteralConverter",
    "RuleBasedConverter",
    "convert",
    "get_converter",
    "sort_events",
]


def get_converter(options: ConverterOptions) -> Converter:
    """Return the converter for the mapping rule selected in ``options``."""
    match options.mapping_rule:
        case MappingRule.LITERAL:
            return LiteralConverter(options)
        case MappingRule.CUSTOM:
            return RuleBasedConverter(options)

    raise ValueError(f"invalid mapping rule (got {options.mapping_rule})")


def convert(chart: AffChart, options: ConverterOptions | None = None) -> ConversionResult:
    """
    Convert an AFF chart to SPC events.

    :param chart: The parsed chart.
    :param options: Conversion options. Defaults to the rule-based mapping with default settings.
    :returns: A :class:`~aff2spc.classes.events.ConversionResult`.
    """
    if options is None:
        options = ConverterOptions()
    return get_converter(options).convert(chart)
