"""Seismic intensity codes - Pure functions.

The feed reports maximum observed intensity as a numeric code
(intensity level x 10, with half-steps for the "lower"/"upper" levels).
This module translates codes to display labels and severity buckets.
All functions are pure with no side effects.
"""

import math
from typing import Any


UNKNOWN_LABEL = "unknown"

# Severity buckets
LOW = "low"
MEDIUM = "medium"
HIGH = "high"

SEVERITY_BUCKETS = (LOW, MEDIUM, HIGH)

# Feed intensity code -> display label
INTENSITY_LABELS: dict[int, str] = {
    -1: UNKNOWN_LABEL,
    10: "1",
    20: "2",
    30: "3",
    40: "4",
    45: "5-lower",
    50: "5-upper",
    55: "6-lower",
    60: "6-upper",
    70: "7",
}

# Options for the minimum-intensity selector: (code, label), ascending
SCALE_CHOICES: tuple[tuple[int, str], ...] = tuple(
    (code, label) for code, label in sorted(INTENSITY_LABELS.items()) if code > 0
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_intensity_label(code: Any) -> str:
    """Get the display label for an intensity code.

    Pure function. Codes outside the known table label as "unknown".

    Args:
        code: Intensity code from the feed

    Returns:
        Label string (e.g., "5-lower")
    """
    if not _is_number(code) or not math.isfinite(code) or code != int(code):
        return UNKNOWN_LABEL
    return INTENSITY_LABELS.get(int(code), UNKNOWN_LABEL)


def get_severity_bucket(code: float) -> str:
    """Get the severity bucket for an intensity code.

    Pure function. Any numeric code buckets by comparison, including
    codes that are not in the label table.

    Args:
        code: Intensity code from the feed

    Returns:
        "low" (code < 30), "medium" (30 <= code < 50) or "high" (code >= 50)
    """
    if code >= 50:
        return HIGH
    elif code >= 30:
        return MEDIUM
    return LOW
