"""Wrap an I/O handle and log every read and write as readable packets.

Each packet starts with a header line holding the direction (``->`` for data
read from the handle, ``<-`` for data written to it), the time elapsed since
the dump started and the payload size. The payload follows as rows of up to
25 bytes: a hex column and an ASCII column. A blank line ends a packet.
Blank lines between packets and lines starting with ``//`` are ignored when
a dump is read back.
"""

from __future__ import annotations

import enum
import io
import string
import sys
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import IO, Any, Iterable, Iterator

_LINE = 25
_HEX_DIGITS = frozenset(string.hexdigits)
_ESCAPES = {0: "\\0", 9: "\\t", 10: "\\n", 13: "\\r"}


class Direction(enum.Enum):
    """Direction in which a packet was transferred."""

    READ = "read"
    WRITE = "write"


_HEADER_PREFIX = {Direction.WRITE: "<-", Direction.READ: "->"}
_PREFIX_DIRECTION = {prefix: direction for direction, prefix in _HEADER_PREFIX.items()}


@dataclass(frozen=True)
class Packet:
    """Unit of data either read from or written to an I/O handle."""

    direction: Direction
    elapsed: timedelta
    data: bytes


def _millis(elapsed: timedelta) -> int:
    """Whole milliseconds in ``elapsed``, rounded up."""
    micros = (elapsed.days * 86_400 + elapsed.seconds) * 1_000_000 + elapsed.microseconds
    return -(-micros // 1000)


def _ascii_column(chunk: bytes) -> str:
    return "".join(
        _ESCAPES.get(byte, " " + chr(byte) if 32 <= byte <= 126 else "\\?")
        for byte in chunk
    )


def _data_line(chunk: bytes) -> str:
    hex_column = "".join(f"{byte:02X} " for byte in chunk).ljust(_LINE * 3)
    return f"{hex_column}   {_ascii_column(chunk)}\n"


def format_packet(direction: Direction, data: bytes, elapsed: timedelta) -> str:
    """Render one packet in dump format."""
    if elapsed < timedelta(0):
        raise ValueError("elapsed time must not be negative")
    data = bytes(data)
    seconds = _millis(elapsed) / 1000
    parts = [f"{_HEADER_PREFIX[direction]}   {seconds:.3f}s   {len(data)} bytes\n"]
    parts.extend(_data_line(data[pos:pos + _LINE]) for pos in range(0, len(data), _LINE))
    parts.append("\n")
    return "".join(parts)


def _emit(dump: Any, text: str) -> None:
    if isinstance(dump, (io.RawIOBase, io.BufferedIOBase)):
        dump.write(text.encode("ascii"))
    else:
        dump.write(text)


def write_packet(dump: Any, direction: Direction, data: bytes, elapsed: timedelta) -> None:
    """Write one packet in dump format to a text or binary stream."""
    _emit(dump, format_packet(direction, data, elapsed))


class Dump:
    """An I/O handle wrapper that logs all traffic to a dump stream.

    Attributes not defined here are looked up on the wrapped handle.
    """

    def __init__(self, upstream: Any, dump: Any) -> None:
        self._upstream = upstream
        self._dump = dump
        self._owns_dump = False
        self._start = time.monotonic()

    @classmethod
    def to_file(cls, upstream: Any, path: Any) -> "Dump":
        """Dump activity to the file at ``path``, overwriting it."""
        sink = open(path, "w", encoding="ascii", newline="\n")
        instance = cls(upstream, sink)
        instance._owns_dump = True
        return instance

    @classmethod
    def to_stdout(cls, upstream: Any) -> "Dump":
        """Dump activity to standard output."""
        return cls(upstream, sys.stdout)

    @classmethod
    def noop(cls, upstream: Any) -> "Dump":
        """Pass traffic through without logging it."""
        return cls(upstream, None)

    @property
    def upstream(self) -> Any:
        """The wrapped I/O handle."""
        return self._upstream

    def _log(self, direction: Direction, data: bytes) -> None:
        if self._dump is None:
            return
        elapsed = timedelta(seconds=time.monotonic() - self._start)
        write_packet(self._dump, direction, data, elapsed)
        flush = getattr(self._dump, "flush", None)
        if flush is not None:
            flush()

    def read(self, size: int = -1) -> bytes | None:
        """Read from the wrapped handle and log what came back."""
        data = self._upstream.read(size)
        if data is None:
            return None
        self._log(Direction.READ, data)
        return data

    def readinto(self, buffer: Any) -> int | None:
        """Read into ``buffer`` from the wrapped handle and log the bytes filled."""
        count = self._upstream.readinto(buffer)
        if count is None:
            return None
        self._log(Direction.READ, memoryview(buffer).cast("B")[:count].tobytes())
        return count

    def write(self, data: bytes) -> int | None:
        """Write to the wrapped handle and log the bytes it accepted."""
        count = self._upstream.write(data)
        if count is None:
            return None
        self._log(Direction.WRITE, bytes(data[:count]))
        return count

    def flush(self) -> None:
        """Flush the wrapped handle."""
        self._upstream.flush()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._upstream, name)

    def __enter__(self) -> "Dump":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._owns_dump and self._dump is not None:
            self._dump.close()

    def __repr__(self) -> str:
        return f"Dump(upstream={self._upstream!r}, dump={self._dump!r})"


def _parse_data_line(line: str) -> Iterator[int]:
    pos = 0
    while True:
        chunk = line[pos:pos + 2]
        if chunk == "  ":
            return
        if len(chunk) < 2 or not all(char in _HEX_DIGITS for char in chunk):
            raise ValueError("could not parse byte")
        yield int(chunk, 16)
        pos += 3


class Packets:
    """Iterates the packets of a dump read from a text or binary line source."""

    def __init__(self, source: Iterable[Any]) -> None:
        self._source = source
        self._lines = iter(source)

    def __iter__(self) -> "Packets":
        return self

    def _next_line(self) -> str | None:
        try:
            raw = next(self._lines)
        except StopIteration:
            return None
        line = raw.decode("utf-8") if isinstance(raw, (bytes, bytearray)) else raw
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def __next__(self) -> Packet:
        while True:
            line = self._next_line()
            if line is None:
                raise StopIteration
            fields = [field for field in line.split(" ") if field]
            if not fields or fields[0] == "//":
                continue
            if len(fields) != 4:
                raise ValueError("invalid packet header")
            direction = _PREFIX_DIRECTION.get(fields[0])
            if direction is None:
                raise ValueError("invalid direction format")
            try:
                seconds = float(fields[1][:-1])
            except ValueError:
                raise ValueError("invalid elapsed time") from None

            data = bytearray()
            while True:
                line = self._next_line()
                if not line:
                    break
                data.extend(_parse_data_line(line))

            millis = seconds * 1000
            millis = int(millis) if millis > 0 else 0
            return Packet(direction, timedelta(milliseconds=millis), bytes(data))

    def __enter__(self) -> "Packets":
        return self

    def __exit__(self, *exc_info: object) -> None:
        close = getattr(self._source, "close", None)
        if close is not None:
            close()


def open_dump(path: Any) -> Packets:
    """Open a dump file; use the result as a context manager to close it."""
    return Packets(open(path, encoding="utf-8"))


def read_packets(source: Iterable[Any]) -> list[Packet]:
    """Read every packet from a line source."""
    return list(Packets(source))