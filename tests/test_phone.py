"""Tests for phone digit normalization and lookup suffixes."""

from contactbook.infrastructure.phone import phone_digits, phone_search_suffix


def test_digits_strip_everything_else() -> None:
    assert phone_digits("+31 648 502 148") == "31648502148"
    assert phone_digits("(202) 555-1234") == "2025551234"


def test_suffix_is_last_seven_digits() -> None:
    assert phone_search_suffix("+31 648 502 148") == "8502148"
    assert phone_search_suffix("1234567") == "1234567"


def test_short_numbers_are_used_whole() -> None:
    assert phone_search_suffix("112") == "112"
    assert phone_search_suffix("12-34") == "1234"


def test_no_digits_gives_empty_suffix() -> None:
    assert phone_digits(None) == ""
    assert phone_search_suffix("call me") == ""


def test_non_ascii_digits_are_converted() -> None:
    assert phone_digits("+31 ６４８ ５０２ １４８") == "31648502148"
    assert phone_search_suffix("+31 ６４８ ５０２ １４８") == "8502148"
    assert phone_digits("٠٦٤٨٥٠٢١٤٨") == "0648502148"
