from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeVar

"""Numeric parsing for grade table cells.

Cells are free text rendered by a third-party page. Parsers here never raise:
each returns None when no number can be read, and parse_or_default turns that
into the field's default. Every numeric field read by the group builder goes
through parse_or_default.

Parsing is lenient about trailing text, the way browsers read numbers from
page text: "30,0 CP" reads as 30.0 and "100 Pflichtmodule" as 100.
"""

__all__ = [
    "parse_integer",
    "parse_decimal",
    "parse_or_default",
    "normalize_decimal",
]

T = TypeVar("T")
D = TypeVar("D")

_INTEGER_PREFIX = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def normalize_decimal(text: str) -> str:
    """Replace the first comma with a dot ("2,50" -> "2.50")."""
    return text.replace(",", ".", 1)


def parse_integer(text: str) -> int | None:
    """Read a base-10 integer from the start of the trimmed text."""
    match = _INTEGER_PREFIX.match(text.strip())
    if match is None:
        return None
    return int(match.group())


def parse_decimal(text: str) -> float | None:
    """Read a decimal number from the start of the trimmed text.

    A comma decimal separator is accepted.
    """
    match = _DECIMAL_PREFIX.match(normalize_decimal(text.strip()))
    if match is None:
        return None
    return float(match.group())


def parse_or_default(parse: Callable[[str], T | None], text: str, default: D) -> T | D:
    """Apply a fallible parser, substituting default when it yields None."""
    value = parse(text)
    return default if value is None else value
