# tests/test_units.py
import pytest

from core.model import LengthParseError
from engine import format_feet_inches, parse_length_input


def test_parse_length_input():
    assert parse_length_input("12'6\"") == 150
    assert parse_length_input("150\"") == 150
    assert parse_length_input("12'") == 144
    assert parse_length_input("36") == 36
    assert parse_length_input("'6\"") == 6


def test_parse_length_is_lenient_about_spacing():
    assert parse_length_input("  12 ' 6 \"  ") == 150
    assert parse_length_input("12' 6") == 150
    assert parse_length_input("10'0\"") == 120
    assert parse_length_input("'") == 0


@pytest.mark.parametrize("txt,side", [
    ("ab'6\"", "feet"),
    ("12'x\"", "inches"),
    ("12'6'", "inches"),
    ("six\"", "inches"),
    ("6\"x", "inches"),
    ("ten", "numeric input"),
    ("", "numeric input"),
])
def test_parse_length_errors_name_the_side(txt, side):
    with pytest.raises(LengthParseError) as ei:
        parse_length_input(txt)
    assert ei.value.side == side
    assert str(ei.value).startswith(f"invalid {side}:")


def test_parse_length_keeps_negative_and_zero():
    assert parse_length_input("0") == 0
    assert parse_length_input("-6\"") == -6


def test_format_feet_inches():
    assert format_feet_inches(150) == "12' 6\""
    assert format_feet_inches(120) == "10' 0\""
    assert format_feet_inches(0) == "0' 0\""
    assert format_feet_inches(11) == "0' 11\""
    assert format_feet_inches(-6) == "0' -6\""


@pytest.mark.parametrize("txt,side", [
    ("1_0'", "feet"),
    ("12'1_0\"", "inches"),
    ("١٢\"", "inches"),
    ("١٢'", "feet"),
    ("1_0", "numeric input"),
    ("+", "numeric input"),
])
def test_parse_length_only_takes_ascii_integers(txt, side):
    with pytest.raises(LengthParseError) as ei:
        parse_length_input(txt)
    assert ei.value.side == side


def test_bare_integer_error_wording():
    with pytest.raises(LengthParseError, match=r"^invalid numeric input: 'ten'$"):
        parse_length_input("ten")


def test_signed_integers_still_accepted():
    assert parse_length_input("+12'+6\"") == 150
