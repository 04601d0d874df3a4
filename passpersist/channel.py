"""
Line channel between snmpd and the agent.

Reads block until a full line arrives, end of input, or the idle timeout
expires. Streams backed by a file descriptor are read with select() and a
private byte buffer, so lines already pulled off the descriptor are never
hidden from the next select() call. In-memory streams are read directly.
"""

from __future__ import annotations

import logging
import os
import select
import time
from typing import IO, Iterable, Optional

from passpersist.errors import IdleTimeout

logger = logging.getLogger(__name__)

_READ_CHUNK = 4096


def _fileno(stream: IO[str]) -> Optional[int]:
    try:
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return None


def _chomp(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class LineChannel:
    """Line-oriented reads and flushed writes for the pass_persist conversation.

    The idle timeout is enforced only for input streams with a file
    descriptor (stdin, pipes, sockets). Streams without ``fileno()`` are read
    with a plain ``readline()`` and no deadline; they must not block, as with
    ``io.StringIO``.
    """

    def __init__(
        self,
        in_fh: IO[str],
        out_fh: IO[str],
        idle_timeout: Optional[float] = None,
    ) -> None:
        self.in_fh = in_fh
        self.out_fh = out_fh
        self.idle_timeout = idle_timeout if idle_timeout and idle_timeout > 0 else None
        self._fd = _fileno(in_fh)
        self._encoding = getattr(in_fh, "encoding", None) or "utf-8"
        self._buffer = bytearray()
        self._eof = False

    def read_line(self) -> Optional[str]:
        """Return the next line without its terminator, or None at end of input.

        Raises IdleTimeout when nothing arrives within the idle window.
        """
        if self._fd is None:
            raw = self.in_fh.readline()
            line = _chomp(raw) if raw else None
        else:
            line = self._read_fd_line()

        if line is None:
            logger.debug("> <eof>")
        else:
            logger.debug(f"> {line}")
        return line

    def _read_fd_line(self) -> Optional[str]:
        deadline = None if self.idle_timeout is None else time.monotonic() + self.idle_timeout
        while True:
            newline = self._buffer.find(b"\n")
            if newline >= 0:
                raw = bytes(self._buffer[: newline + 1])
                del self._buffer[: newline + 1]
                return _chomp(raw.decode(self._encoding, errors="replace"))

            if self._eof:
                if not self._buffer:
                    return None
                # Last line without a terminator
                raw = bytes(self._buffer)
                self._buffer.clear()
                return _chomp(raw.decode(self._encoding, errors="replace"))

            remaining = None
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise IdleTimeout(self.idle_timeout or 0)
            readable, _, _ = select.select([self._fd], [], [], remaining)
            if not readable:
                raise IdleTimeout(self.idle_timeout or 0)

            chunk = os.read(self._fd, _READ_CHUNK)
            if not chunk:
                self._eof = True
            else:
                self._buffer.extend(chunk)

    def write_lines(self, lines: Iterable[object]) -> None:
        """Write every line, then flush once."""
        rendered = [str(x) for x in lines]
        for line in rendered:
            logger.debug(f"< {line}")
        for line in rendered:
            self.out_fh.write(line + "\n")
        self.out_fh.flush()
