"""Reading a stream one line at a time through a fixed-size read buffer."""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, AnyStr, Generic

BUFFER_SIZE = 50
_INT_MAX = 2**31 - 1


class LineReadError(Exception):
    """Raised when a stream cannot be read or the buffer size is unusable."""


class LineReader(Generic[AnyStr]):
    """Hands out the lines of a text or binary stream, newline included."""

    def __init__(self, stream: IO[AnyStr], buffer_size: int = BUFFER_SIZE) -> None:
        if not 0 < buffer_size <= _INT_MAX:
            raise LineReadError("from gnl")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: AnyStr | None = None

    def _read_chunk(self) -> AnyStr:
        try:
            return self._stream.read(self._buffer_size)
        except OSError as exc:
            raise LineReadError("Reading failed") from exc

    def read_line(self) -> AnyStr | None:
        """Return the next line, ending in a newline unless it is the last; None at the end."""
        try:
            empty = self._stream.read(0)
        except (OSError, ValueError) as exc:
            raise LineReadError("from gnl") from exc
        newline = "\n" if isinstance(empty, str) else b"\n"
        pending = empty if self._pending is None else self._pending

        while newline not in pending:
            chunk = self._read_chunk()
            if not chunk:
                break
            pending += chunk

        index = pending.find(newline)
        if index < 0:
            self._pending = None
            return pending or None
        self._pending = pending[index + 1:]
        return pending[: index + 1]

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.read_line()) is not None:
            yield line


def iter_lines(stream: IO[AnyStr], buffer_size: int = BUFFER_SIZE) -> Iterator[AnyStr]:
    """Yield every line of ``stream`` read through a buffer of ``buffer_size``."""
    yield from LineReader(stream, buffer_size)