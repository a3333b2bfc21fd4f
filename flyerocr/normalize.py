"""Normalization rules for product text, quantities, and prices."""

from __future__ import annotations

import math
import re

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

_STRIP_CHARS_RE = re.compile(r'[*"#]')
_WHITESPACE_RE = re.compile(r"\s+")
# A slash that introduces a unit ("/kg", "/500gm", "/Box", "/كيلو"), not a fraction like "1/2".
_UNIT_SLASH_RE = re.compile(r"\s*/\s*(?=\d*[^\W\d_])")
_NON_PRICE_RE = re.compile(r"[^0-9.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def strip_control(text: str) -> str:
    """Drop control characters that cannot be stored in a worksheet."""
    return ILLEGAL_CHARACTERS_RE.sub("", text)


def clean_description(text: str | None) -> str:
    """Remove ``*``, ``"`` and ``#`` and trim."""
    if not text:
        return ""
    return strip_control(_STRIP_CHARS_RE.sub("", str(text))).strip()


def normalize_suffix(text: str) -> str:
    """Collapse whitespace and put exactly one space before a unit suffix."""
    s = _WHITESPACE_RE.sub(" ", strip_control(text)).strip()
    s = _UNIT_SLASH_RE.sub(" /", s)
    return s.strip()


def normalize_description(text: str | None) -> str:
    return normalize_suffix(clean_description(text))


def parse_price(text: str | float | int | None) -> float | None:
    """Parse a printed price, ignoring currency symbols and other artifacts.

    Only the leading number survives, so "12.00.5" parses as 12.0.
    """
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return float(text) if math.isfinite(text) and text >= 0 else None
    cleaned = _NON_PRICE_RE.sub("", text)
    m = _LEADING_NUMBER_RE.match(cleaned)
    if m is None:
        return None
    return float(m.group())


def format_price(text: str | float | int | None) -> str:
    """Return the price with two decimals, or "" when nothing parses."""
    if isinstance(text, str) and not text.strip():
        return ""
    value = parse_price(text)
    if value is None:
        return ""
    return f"{value:.2f}"


def normalize_price(text: str | float | int | None) -> str:
    """Like format_price, but a zero price counts as missing."""
    formatted = format_price(text)
    if formatted and float(formatted) == 0:
        return ""
    return formatted


def normalize_quantity(value) -> int | float | None:
    """Return the quantity when it is greater than 1, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    if value <= 1:
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
