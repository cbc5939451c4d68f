"""Phone number normalization for lookups against mixed-format stored numbers."""

import phonenumbers

SUFFIX_LENGTH = 7


def phone_digits(raw: str | None) -> str:
    """Return only the digits of raw as ASCII ("+31 648 502 148" -> "31648502148").

    Non-ASCII digits (full-width, Arabic-Indic, ...) are converted, not dropped.
    """
    return phonenumbers.normalize_digits_only(raw or "")


def phone_search_suffix(raw: str | None) -> str:
    """Return the substring to look for in stored phone values.

    Stored numbers mix international and national formats, so matching uses the
    trailing digits only. Inputs shorter than the suffix length are used whole.
    Empty when raw has no digits at all.
    """
    digits = phone_digits(raw)
    if len(digits) >= SUFFIX_LENGTH:
        return digits[-SUFFIX_LENGTH:]
    return digits
