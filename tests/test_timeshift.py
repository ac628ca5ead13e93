import io
import sys
from datetime import timedelta

import pytest

from iodump.dump import Direction, read_packets, write_packet
from iodump.timeshift import main, timeshift


def _dump_text(packets):
    sink = io.StringIO()
    for direction, data, elapsed in packets:
        write_packet(sink, direction, data, elapsed)
    return sink.getvalue()


ORIGINAL = [
    (Direction.READ, b"first", timedelta(milliseconds=5)),
    (Direction.WRITE, b"second", timedelta(milliseconds=8)),
    (Direction.READ, bytes(range(40)), timedelta(seconds=1, milliseconds=20)),
]


def _shift(text):
    out = io.StringIO()
    timeshift(io.StringIO(text), out)
    return read_packets(io.StringIO(out.getvalue()))


def test_first_packet_starts_at_zero():
    shifted = _shift(_dump_text(ORIGINAL))
    assert shifted[0].elapsed == timedelta(0)


def test_directions_and_data_preserved():
    shifted = _shift(_dump_text(ORIGINAL))
    assert [(p.direction, p.data) for p in shifted] == [(d, b) for d, b, _ in ORIGINAL]


def test_empty_input_gives_empty_output():
    out = io.StringIO()
    timeshift(io.StringIO(""), out)
    assert out.getvalue() == ""


def test_time_going_backwards_is_rejected():
    text = _dump_text(
        [
            (Direction.READ, b"a", timedelta(milliseconds=10)),
            (Direction.READ, b"b", timedelta(milliseconds=2)),
        ]
    )
    with pytest.raises(ValueError):
        timeshift(io.StringIO(text), io.StringIO())


def test_main_uses_standard_streams(monkeypatch):
    out = io.StringIO()
    monkeypatch.setattr(sys, "stdin", io.StringIO(_dump_text(ORIGINAL)))
    monkeypatch.setattr(sys, "stdout", out)
    assert main([]) == 0
    shifted = read_packets(io.StringIO(out.getvalue()))
    assert len(shifted) == len(ORIGINAL)
    assert shifted[0].elapsed == timedelta(0)