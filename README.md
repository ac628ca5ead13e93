# iodump

Wrap an I/O handle and log every read and write in a readable text format.
This helps when you debug protocols, for example after decryption. It also
helps when you record exchanges to replay in tests. The package uses only the
standard library.

## Install

```
pip install iodump
```

## Wrapping a stream

```python
import socket
from iodump.dump import Dump

sock = socket.create_connection(("localhost", 8080))
stream = Dump.to_stdout(sock.makefile("rwb", buffering=0))

stream.write(b"ping")
stream.flush()
reply = stream.read(128)
```

- `Dump(upstream, dump)` logs to `dump`. This can be a binary stream
  (`io.RawIOBase` or `io.BufferedIOBase`), which gets ASCII bytes, or any
  object with a text `write` method. Pass `None` and nothing is logged.
- `Dump.to_file(upstream, path)` logs to a text file at `path` and overwrites
  it if it exists. If you use the `Dump` as a context manager, the file is
  closed on exit.
- `Dump.to_stdout(upstream)` logs to `sys.stdout`.
- `Dump.noop(upstream)` passes data through and logs nothing.

`read`, `readinto` and `write` call the wrapped handle and log what it
returned. A write logs only the bytes that the handle accepted. If the handle
returns `None`, nothing is logged. The dump stream is flushed after each
packet. `flush` flushes the wrapped handle. Any other public attribute is
looked up on the wrapped handle, which is also available as `Dump.upstream`.

Writing the log uses blocking I/O.

## Format

Every packet starts with a header line with these parts:

- the direction: `<-` for a write, `->` for a read
- the time since the `Dump` was created, in seconds with three decimals,
  rounded up to the millisecond
- the payload length

The payload follows in rows of up to 25 bytes. Each row has a hex column,
padded to 25 entries, and an ASCII column. In the ASCII column, printable
characters are shown with a leading space. `\0`, `\t`, `\n` and `\r` are
shown as escapes, and every other byte is shown as `\?`. A blank line ends
the packet. When a dump is read, blank lines and lines that start with `//`
between packets are ignored.

```
// Settings frame
<-   0.013s   9 bytes
00 00 1E 04 00 00 00 00 00                                                    \0\0\?\?\0\0\0\0\0
```

## Reading a dump

```python
from iodump.dump import open_dump

with open_dump("session.dump") as packets:
    for packet in packets:
        print(packet.direction, packet.elapsed, packet.data)
```

Each `Packet` has these fields:

- `direction`: `Direction.READ` or `Direction.WRITE`
- `elapsed`: a `datetime.timedelta`, truncated to whole milliseconds
- `data`: `bytes`

`Packets(source)` iterates packets lazily. `read_packets(source)` returns
them all as a list. `source` can be any iterable of text or bytes lines, such
as an open file. A malformed header or a byte that is not valid hex raises
`ValueError`.

`format_packet(direction, data, elapsed)` returns one packet as a string.
`write_packet(dump, direction, data, elapsed)` writes it to a text or binary
stream. Both raise `ValueError` if `elapsed` is negative.

## Shifting timestamps

`iodump-timeshift` reads a dump on standard input and writes it to standard
output. Every timestamp in the output is relative to the first packet:

```
iodump-timeshift < session.dump > shifted.dump
```

To do the same from Python, call `iodump.timeshift.timeshift(source, dest)`.