import logging

from aff2spc.classes.aff import DEFAULT_TIMING, AffHold, AffNote, AffTiming
from aff2spc.parser.aff import AFFParser, parse_aff

CHART_TEXT = """AudioOffset:0
-
timing(0,120.00,4.00);
(1000,2);
hold(2000,2100,3);
arc(1000,2000,0.00,1.00,s,1.00,1.00,0,none,true)[arctap(1500),arctap(1750)];
arc(3000, 4000, -0.25, 1.25, sisi, 0.50, 1.00, 1, none, false);
timinggroup(){
  scenecontrol(0,trackhide);
};
"""


def test_parse_recognized_lines():
    chart = parse_aff(CHART_TEXT)

    assert chart.timings == [AffTiming(0, 120.0, 4.0)]
    assert chart.notes == [AffNote(1000, 2)]
    assert chart.holds == [AffHold(2000, 2100, 3)]
    assert len(chart.arcs) == 2

    skyline, glide = chart.arcs
    assert skyline.skyline
    assert skyline.arctap_times_ms == (1500, 1750)
    assert not glide.skyline
    assert glide.arctap_times_ms == ()
    assert glide.x1 == -0.25
    assert glide.x2 == 1.25
    assert glide.easing == "sisi"
    assert glide.color == 1


def test_unrecognized_lines_are_counted(caplog):
    with caplog.at_level(logging.DEBUG, logger="aff2spc.parser.aff"):
        chart = parse_aff(CHART_TEXT)

    assert chart.skipped_lines == 5
    assert any("skipped line 1" in record.getMessage() for record in caplog.records)
    assert all(record.levelno == logging.DEBUG for record in caplog.records)


def test_crlf_and_blank_lines():
    chart = parse_aff("timing(0,150.00,4.00);\r\n\r\n(500,1);\r\n")
    assert chart.timings == [AffTiming(0, 150.0, 4.0)]
    assert chart.notes == [AffNote(500, 1)]
    assert chart.skipped_lines == 0


def test_malformed_numbers_are_skipped():
    chart = parse_aff("timing(0,1.2.0,4.00);\n")
    assert chart.timings == []
    assert chart.skipped_lines == 1


def test_base_timing_defaults():
    assert parse_aff("").base_timing == DEFAULT_TIMING
    assert parse_aff("timing(0,180.00,3.00);\ntiming(5000,90.00,4.00);\n").base_timing == AffTiming(0, 180.0, 3.0)


def test_reversed_hold_is_kept():
    chart = parse_aff("hold(2000,1000,1);")
    assert chart.holds == [AffHold(2000, 1000, 1)]
    assert chart.holds[0].duration == -1000


def test_file_path_is_remembered(tmp_path):
    path = tmp_path / "chart.aff"
    path.write_text("(1000,2);\n", encoding="utf-8")

    parser = AFFParser()
    with path.open(encoding="utf-8") as f:
        chart = parser.parse(f)

    assert chart.notes == [AffNote(1000, 2)]
    assert parser.file_path == path.resolve()


def test_leading_byte_order_mark():
    chart = parse_aff("\ufefftiming(0,180.00,4.00);\n(1000,2);\n")

    assert chart.timings == [AffTiming(0, 180.0, 4.0)]
    assert chart.skipped_lines == 0


def test_byte_order_mark_in_utf8_file(tmp_path):
    path = tmp_path / "chart.aff"
    path.write_bytes("timing(0,180.00,4.00);\r\n(1000,2);\r\n".encode("utf-8-sig"))

    with path.open(encoding="utf-8") as f:
        chart = AFFParser().parse(f)

    assert chart.base_timing == AffTiming(0, 180.0, 4.0)
    assert chart.notes == [AffNote(1000, 2)]
