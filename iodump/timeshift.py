"""Rewrite a dump so that its first packet happens at time zero."""

from __future__ import annotations

import argparse
import contextlib
import sys
from typing import Any, Iterable

from iodump.dump import Packets, write_packet


def timeshift(source: Iterable[Any], dest: Any) -> None:
    """Copy packets from ``source`` to ``dest``, shifting times by the first packet's."""
    shift = None
    for packet in Packets(source):
        if shift is None:
            shift = packet.elapsed
        elapsed = packet.elapsed - shift
        with contextlib.suppress(OSError):
            write_packet(dest, packet.direction, packet.data, elapsed)


def main(argv: list[str] | None = None) -> int:
    """Read a dump on standard input and write the shifted dump to standard output."""
    parser = argparse.ArgumentParser(
        prog="timeshift-dump",
        description="Shift the timestamps of a dump read from standard input so "
        "that the first packet is at time zero.",
    )
    parser.parse_args(argv)
    timeshift(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())