"""Lenient coercion of loosely-typed field data.

Progress records arrive from spreadsheet imports and hand-filled forms, so
numbers may be comma-formatted strings and dates may be missing or garbage.
Nothing here raises: quantities degrade to ``0.0`` and dates to ``None``.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any

from dateutil import parser as date_parser

_NUMERIC_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_quantity(value: Any) -> float:
    """Parse a quantity such as ``"1,250.5"`` or ``"40 m3"``.

    Thousands separators are stripped and the leading numeric part is used.
    Anything unparseable yields ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMERIC_PREFIX.match(str(value).replace(",", "").strip())
        if not match:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_date(value: Any) -> date | None:
    """Return the calendar date of *value*, or ``None`` if it has none."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = clean_text(value)
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError):
        return None
