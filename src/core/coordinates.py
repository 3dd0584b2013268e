"""Coordinate parsing - Pure functions.

The feed emits latitude/longitude either as plain decimal numbers or as
compass-prefixed strings (e.g. "N38.3", "E141.7"), depending on the
record source. This module normalizes both into signed decimal degrees.
"""

import math
import re
from typing import Any


# One hemisphere letter before or after the number; an exponent "e" is left alone
_COMPASS = re.compile(r"^\s*([NSEW])?\s*(.*?)\s*([NSEW])?\s*$", re.IGNORECASE | re.DOTALL)


def parse_coordinate(value: Any) -> float | None:
    """Parse a coordinate into signed decimal degrees.

    Pure function. Numbers are returned as-is (zero included; validity is
    judged by is_valid_coordinate). Strings have their compass letters
    stripped and are negated when that letter is S or W.

    Args:
        value: Number, compass-prefixed string, or anything else

    Returns:
        Decimal degrees, or None if the value cannot be parsed
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        match = _COMPASS.match(value)
        leading, number, trailing = match.groups()
        try:
            result = float(number)
        except ValueError:
            return None
        hemispheres = f"{leading or ''}{trailing or ''}".upper()
        if "S" in hemispheres or "W" in hemispheres:
            result = -result
    else:
        return None

    if not math.isfinite(result):
        return None

    return result


def is_valid_coordinate(value: float | None) -> bool:
    """Check whether a parsed coordinate can be plotted.

    Zero counts as invalid, so an event exactly on the equator or prime
    meridian is listed but not plotted.
    """
    return value is not None and value != 0
