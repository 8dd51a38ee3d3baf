"""A small printf-style formatter with the conversions the game uses for its messages."""

from __future__ import annotations

import operator
import sys
from typing import Any, TextIO

_LOWER_HEX = "0123456789abcdef"
_UPPER_HEX = "0123456789ABCDEF"
_NULL_TEXT = "(null)"

_INT_BITS = 32
_POINTER_BITS = 64


def _wrap_unsigned(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _wrap_signed(value: int, bits: int) -> int:
    value = _wrap_unsigned(value, bits)
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _to_base(value: int, digits: str) -> str:
    base = len(digits)
    if value < base:
        return digits[value]
    return _to_base(value // base, digits) + digits[value % base]


def _convert_char(value: Any) -> str:
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character or an integer")
        return value
    return chr(_wrap_unsigned(operator.index(value), 8))


def _convert_pointer(value: Any) -> str:
    address = 0 if value is None else operator.index(value)
    return "0x" + _to_base(_wrap_unsigned(address, _POINTER_BITS), _LOWER_HEX)


def _convert(spec: str, value: Any) -> str:
    if spec == "c":
        return _convert_char(value)
    if spec == "s":
        return _NULL_TEXT if value is None else str(value)
    if spec in "di":
        return str(_wrap_signed(operator.index(value), _INT_BITS))
    if spec == "u":
        return str(_wrap_unsigned(operator.index(value), _INT_BITS))
    if spec == "x":
        return _to_base(_wrap_unsigned(operator.index(value), _INT_BITS), _LOWER_HEX)
    if spec == "X":
        return _to_base(_wrap_unsigned(operator.index(value), _INT_BITS), _UPPER_HEX)
    if spec == "p":
        return _convert_pointer(value)
    raise ValueError(f"unsupported conversion {spec!r}")


_TAKES_ARGUMENT = frozenset("csdiuxXp")


def _render(fmt: str, args: tuple[Any, ...]) -> tuple[str, bool]:
    """Render ``fmt``; the flag is False when the format ends in a lone '%'."""
    pieces: list[str] = []
    remaining = iter(args)
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            pieces.append(char)
            continue
        spec = next(chars, None)
        if spec is None:
            return "".join(pieces), False
        if spec == "%":
            pieces.append("%")
        elif spec in _TAKES_ARGUMENT:
            try:
                value = next(remaining)
            except StopIteration:
                raise TypeError("not enough arguments for format string") from None
            pieces.append(_convert(spec, value))
        # Unknown conversions print nothing and consume no argument.
    return "".join(pieces), True


def format_message(fmt: str, *args: Any) -> str:
    """Return ``fmt`` with its %c %s %d %i %u %x %X %p %% conversions filled in."""
    text, _ = _render(fmt, args)
    return text


def print_message(fmt: str, *args: Any, stream: TextIO | None = None) -> int:
    """Write the formatted message to ``stream`` (stdout by default).

    Returns the number of characters written, or 0 when the format ends in
    a lone '%' (the text before it is still written).
    """
    out = sys.stdout if stream is None else stream
    text, complete = _render(fmt, args)
    out.write(text)
    return len(text) if complete else 0