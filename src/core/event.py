"""Earthquake event model and normalization - Pure functions.

This module handles turning raw feed records into typed Event objects.
Feed records are loosely typed: nested fields may be absent, coordinates
come in two encodings, and -1 stands for "unknown". All functions are
pure with no side effects.
"""

import math
from dataclasses import dataclass
from typing import Any

from src.core.coordinates import is_valid_coordinate, parse_coordinate
from src.core.intensity import get_intensity_label, get_severity_bucket

UNKNOWN_VALUE = -1


@dataclass(frozen=True)
class Event:
    """Immutable normalized earthquake event.

    Attributes:
        occurred_at: Occurrence timestamp, verbatim from the feed
        hypocenter_name: Hypocenter region name
        magnitude: Magnitude, None if unknown
        depth_km: Depth in kilometers, None if unknown
        max_intensity_code: Feed intensity code (-1 if unknown)
        latitude: Hypocenter latitude, None if invalid
        longitude: Hypocenter longitude, None if invalid
    """
    occurred_at: str
    hypocenter_name: str
    magnitude: float | None
    depth_km: float | None
    max_intensity_code: int | float
    latitude: float | None = None
    longitude: float | None = None

    @property
    def max_intensity_label(self) -> str:
        return get_intensity_label(self.max_intensity_code)

    @property
    def severity_bucket(self) -> str:
        return get_severity_bucket(self.max_intensity_code)

    @property
    def has_valid_coordinates(self) -> bool:
        """True if the event can be placed on the map."""
        return is_valid_coordinate(self.latitude) and is_valid_coordinate(self.longitude)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "occurred_at": self.occurred_at,
            "hypocenter_name": self.hypocenter_name,
            "magnitude": self.magnitude,
            "depth_km": self.depth_km,
            "max_intensity_code": self.max_intensity_code,
            "max_intensity_label": self.max_intensity_label,
            "severity_bucket": self.severity_bucket,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


def _optional_measure(value: Any) -> float | None:
    """Return a numeric measurement, or None for absent/unknown values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value == UNKNOWN_VALUE:
        return None
    return float(value)


def _valid_coordinate_or_none(value: Any) -> float | None:
    coordinate = parse_coordinate(value)
    return coordinate if is_valid_coordinate(coordinate) else None


def normalize_record(record: Any) -> Event | None:
    """Normalize a single raw feed record into an Event.

    Pure function: takes a raw dict, returns an Event or None if the
    record is incomplete (no earthquake, no hypocenter, or no name).

    Args:
        record: Raw record from the feed

    Returns:
        Event object or None if the record is skipped
    """
    if not isinstance(record, dict):
        return None

    earthquake = record.get("earthquake")
    if not isinstance(earthquake, dict):
        return None

    hypocenter = earthquake.get("hypocenter")
    if not isinstance(hypocenter, dict):
        return None

    name = hypocenter.get("name")
    if not isinstance(name, str) or not name.strip():
        return None

    max_scale = earthquake.get("maxScale")
    if (
        isinstance(max_scale, bool)
        or not isinstance(max_scale, (int, float))
        or not math.isfinite(max_scale)
    ):
        max_scale = UNKNOWN_VALUE

    return Event(
        occurred_at=str(earthquake.get("time") or ""),
        hypocenter_name=name,
        magnitude=_optional_measure(hypocenter.get("magnitude")),
        depth_km=_optional_measure(hypocenter.get("depth")),
        max_intensity_code=max_scale,
        latitude=_valid_coordinate_or_none(hypocenter.get("latitude")),
        longitude=_valid_coordinate_or_none(hypocenter.get("longitude")),
    )


def normalize_events(records: list[Any]) -> list[Event]:
    """Normalize a feed response into a list of Events.

    Pure function: skips incomplete records and keeps the feed's order.
    No deduplication is done.

    Args:
        records: Raw records from the feed

    Returns:
        List of valid Event objects
    """
    events = []

    for record in records:
        event = normalize_record(record)
        if event is not None:
            events.append(event)

    return events
