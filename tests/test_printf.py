import io

import pytest

from solongame.printf import format_message, print_message


def test_plain_text_passes_through():
    assert format_message("Moves = ") == "Moves = "


def test_percent_escape():
    assert format_message("100%%") == "100%"


def test_string_conversion():
    assert format_message("%s", "Error\nOpen failed\n") == "Error\nOpen failed\n"


def test_null_string_prints_null_marker():
    assert format_message("%s", None) == "(null)"


@pytest.mark.parametrize("value", [0, 7, 42, -42, 2147483647, -2147483648])
def test_decimal_round_trip(value):
    assert int(format_message("%d", value)) == value


def test_i_matches_d():
    assert format_message("%i", -17) == format_message("%d", -17)


def test_decimal_wraps_to_32_bits():
    assert int(format_message("%d", 2**31)) == -(2**31)


def test_unsigned_wraps_negative():
    assert int(format_message("%u", -1)) == 0xFFFFFFFF


@pytest.mark.parametrize("value", [0, 1, 15, 16, 255, 4096, 0xDEADBEEF])
def test_hex_round_trip(value):
    text = format_message("%x", value)
    assert int(text, 16) == value
    assert text == text.lower()


@pytest.mark.parametrize("value", [10, 0xABCDEF, 0xFFFFFFFF])
def test_upper_hex_is_upper_of_lower(value):
    assert format_message("%X", value) == format_message("%x", value).upper()


def test_pointer_round_trip():
    text = format_message("%p", 0x7FFE1234)
    assert text.startswith("0x")
    assert int(text[2:], 16) == 0x7FFE1234


def test_null_pointer():
    assert format_message("%p", None) == "0x0"


def test_char_from_int_and_str():
    assert format_message("%c%c", ord("P"), "E") == "PE"


def test_unknown_conversion_consumes_nothing():
    assert format_message("%q%d", 5) == "5"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        format_message("%d %d", 1)


def test_print_message_counts_characters():
    stream = io.StringIO()
    count = print_message("Moves = %d\n", 12, stream=stream)
    assert stream.getvalue() == "Moves = 12\n"
    assert count == len(stream.getvalue())


def test_print_message_trailing_percent_returns_zero():
    stream = io.StringIO()
    count = print_message("ab%", stream=stream)
    assert count == 0
    assert stream.getvalue() == "ab"


def test_format_message_trailing_percent_keeps_prefix():
    assert format_message("You Win %") == "You Win "