import io

import pytest

from solongame.lines import LineReadError, LineReader, iter_lines

MAP_TEXT = "1111111\n1P0C0E1\n1111111\n"


class _FailingStream:
    """Answers the zero-length probe but fails on real reads."""

    def read(self, size=-1):
        if size == 0:
            return ""
        raise OSError("device error")


@pytest.mark.parametrize("buffer_size", [1, 2, 3, 7, 50, 1000])
def test_lines_join_back_to_input(buffer_size):
    lines = list(iter_lines(io.StringIO(MAP_TEXT), buffer_size))
    assert "".join(lines) == MAP_TEXT
    assert lines == MAP_TEXT.splitlines(keepends=True)


def test_last_line_without_newline():
    lines = list(iter_lines(io.StringIO("abc\ndef"), 2))
    assert lines == ["abc\n", "def"]


def test_empty_stream_gives_none():
    reader = LineReader(io.StringIO(""))
    assert reader.read_line() is None


def test_none_after_end_repeats():
    reader = LineReader(io.StringIO("x\n"), 4)
    assert reader.read_line() == "x\n"
    assert reader.read_line() is None
    assert reader.read_line() is None


def test_blank_lines_are_kept():
    text = "\n\nab\n\n"
    assert list(iter_lines(io.StringIO(text), 3)) == text.splitlines(keepends=True)


@pytest.mark.parametrize("buffer_size", [1, 5, 50])
def test_binary_stream(buffer_size):
    data = MAP_TEXT.encode()
    lines = list(iter_lines(io.BytesIO(data), buffer_size))
    assert b"".join(lines) == data
    assert all(line.endswith(b"\n") for line in lines)


def test_reader_is_iterable():
    reader = LineReader(io.StringIO(MAP_TEXT), 4)
    assert len(list(reader)) == MAP_TEXT.count("\n")


@pytest.mark.parametrize("buffer_size", [0, -1, 2**31])
def test_invalid_buffer_size(buffer_size):
    with pytest.raises(LineReadError):
        LineReader(io.StringIO(MAP_TEXT), buffer_size)


def test_closed_stream_raises():
    stream = io.StringIO(MAP_TEXT)
    stream.close()
    with pytest.raises(LineReadError):
        LineReader(stream).read_line()


def test_read_failure_raises():
    with pytest.raises(LineReadError, match="Reading failed"):
        LineReader(_FailingStream()).read_line()