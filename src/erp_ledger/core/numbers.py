"""Lenient numeric coercion for records coming from the ERP backend."""

from __future__ import annotations

import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce an upstream value to a finite float.

    Accepts ints, floats and numeric strings (thousands separators and a
    leading currency symbol are stripped). Anything else, including NaN and
    infinities, falls back to ``default``.

    Args:
        value: Raw value from an upstream record
        default: Value returned when coercion fails

    Returns:
        A finite float
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "").lstrip("$")
        if not cleaned:
            return default
        try:
            number = float(cleaned)
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number):
        return default
    return number


def is_number_like(value: Any) -> bool:
    """Check whether ``value`` coerces to a number without falling back."""
    sentinel = math.nan
    return not math.isnan(to_number(value, default=sentinel))
