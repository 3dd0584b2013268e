"""Geographic bounds - Pure functions.

This module provides bounding-box calculations for plotted earthquakes.
All functions are pure with no side effects.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float

    @property
    def center(self) -> tuple[float, float]:
        """Return (latitude, longitude) of the box center."""
        return (
            (self.min_latitude + self.max_latitude) / 2,
            (self.min_longitude + self.max_longitude) / 2,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "min_latitude": self.min_latitude,
            "max_latitude": self.max_latitude,
            "min_longitude": self.min_longitude,
            "max_longitude": self.max_longitude,
        }


def bounds_of_points(points: Iterable[tuple[float, float]]) -> BoundingBox:
    """Compute the smallest bounding box containing all points.

    Pure function. A single point gives a zero-area box.

    Args:
        points: (latitude, longitude) pairs

    Returns:
        BoundingBox covering every point

    Raises:
        ValueError: If there are no points or a coordinate is not finite
    """
    points = list(points)
    if not points:
        raise ValueError("Cannot compute bounds of an empty point set")

    for lat, lon in points:
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"Non-finite coordinate ({lat}, {lon})")

    latitudes = [lat for lat, _ in points]
    longitudes = [lon for _, lon in points]

    return BoundingBox(
        min_latitude=min(latitudes),
        max_latitude=max(latitudes),
        min_longitude=min(longitudes),
        max_longitude=max(longitudes),
    )
