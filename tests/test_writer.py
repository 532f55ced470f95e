from io import StringIO

from aff2spc.classes.events import SpcChart, SpcHold, SpcTap
from aff2spc.writer import dumps_spc, write_spc


def test_header_goes_first():
    text = dumps_spc([SpcTap(1000, 1, 2), SpcChart(120.0, 4.0), SpcHold(2000, 3, 1, 100)])
    assert text == "chart(120.00,4.00)\ntap(1000,1,2)\nhold(2000,3,1,100)\n"


def test_extra_headers_are_dropped():
    text = dumps_spc([SpcChart(120.0, 4.0), SpcChart(200.0, 3.0), SpcTap(0, 1, 0)])
    assert text.splitlines() == ["chart(120.00,4.00)", "tap(0,1,0)"]


def test_no_header():
    assert dumps_spc([SpcTap(0, 1, 0)]) == "tap(0,1,0)\n"
    assert dumps_spc([]) == ""


def test_write_to_file_object():
    buffer = StringIO()
    write_spc(iter([SpcChart(99.999, 4.0)]), buffer)
    assert buffer.getvalue() == "chart(100.00,4.00)\n"
