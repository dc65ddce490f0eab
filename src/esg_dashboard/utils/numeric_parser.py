# src/esg_dashboard/utils/numeric_parser.py
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any


# Whitespace variants found in exported spreadsheets (regular + non-breaking)
SPACE_CHARS = [
    "\u0020",  # normal space
    "\u00A0",  # NBSP
    "\u2007",  # figure space
    "\u202F",  # narrow NBSP
]


def _normalize_spaces(s: str) -> str:
    """Replace all types of weird spaces with a normal space."""
    for ch in SPACE_CHARS:
        s = s.replace(ch, " ")
    return s


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def coerce_number(value: Any) -> float:
    """
    Lenient numeric coercion for spreadsheet cells.

    Handles:
      - None / ""          -> 0
      - 42, 12.5           -> as-is
      - "1,5"              -> 1.5   (decimal comma)
      - " 300 "            -> 300
      - "abc", "n/a"       -> 0
      - NaN / inf          -> 0

    Never raises and always returns a finite float.
    """
    if value is None:
        return 0.0

    # bool is an int subclass, but a TRUE/FALSE cell is not a quantity
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, Real):
        try:
            return _finite_or_zero(float(value))
        except OverflowError:
            # ints beyond the float range
            return 0.0

    s = _normalize_spaces(str(value)).strip()
    if not s:
        return 0.0

    s = s.replace(",", ".")

    # float() would accept "1_000"; spreadsheet text never means that
    if "_" in s:
        return 0.0

    try:
        return _finite_or_zero(float(s))
    except ValueError:
        return 0.0


def js_round(value: float) -> int:
    """
    Round to the nearest integer, ties toward +infinity.

    Python's round() uses banker's rounding (round(2.5) == 2), which would
    shift chart values by one compared to the dashboard's figures.
    """
    if not math.isfinite(value):
        return 0
    floor = math.floor(value)
    return int(floor + 1) if value - floor >= 0.5 else int(floor)


def round_to(value: float, digits: int = 1) -> float:
    """
    Fixed-decimal rounding of the exact binary value, ties away from zero.

    round_to(0.25) == 0.3, while round(0.25, 1) == 0.2.
    Values of 1e21 and above come back unchanged.
    """
    if not math.isfinite(value):
        return 0.0
    # fixed notation stops at 1e21; larger values are returned unrounded
    if abs(value) >= 1e21:
        return float(value)
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
