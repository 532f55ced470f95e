from aff2spc.classes.options import ConverterOptions
from aff2spc.report import build_report

SPC_TEXT = "chart(174.00,4.00)\nlane(0,0,0)\ntap(1000,1,2)\ntap(1200,1,3)\nflick(1500,12,24,6,4)\n"


def test_counts():
    lines = build_report(SPC_TEXT).splitlines()

    assert lines == [
        "=== Summary ===",
        "chart: 1",
        "bpm-events: 0",
        "chart.bpm: 174.00",
        "chart.beats: 4.00",
        "lane: 1",
        "tap: 2",
        "hold: 0",
        "skyarea: 0",
        "flick: 1",
        "end-ms: 1500",
    ]


def test_missing_header():
    report = build_report("tap(1000,1,2)\n")
    assert "chart.bpm: N/A" in report
    assert "chart.beats: N/A" in report


def test_options_are_listed():
    report = build_report(SPC_TEXT, ConverterOptions(denominator=12, disable_lanes=True))

    assert "=== Options ===" in report
    assert "[Base]" in report
    assert "mapping_rule=custom" in report
    assert "denominator=12" in report
    assert "disable_lanes=True" in report
    assert report.endswith("\n")


def test_every_option_is_listed():
    options = ConverterOptions(flick_width_mode="fixed", min_skyarea_duration_ms=50, sort_mode="typeFirst")
    report = build_report(SPC_TEXT, options)

    for name in ConverterOptions.model_fields:
        assert f"\n{name}=" in report
    assert "flick_width_mode=fixed" in report
    assert "min_skyarea_duration_ms=50" in report
    assert "sort_mode=typeFirst" in report
    assert "tap_width_pattern_lanes=None" in report
