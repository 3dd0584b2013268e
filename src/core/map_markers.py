"""Map marker configuration - Pure functions.

This module turns normalized events into map markers and viewports.
The actual drawing (I/O) is handled by the shell layer.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from src.core.event import Event
from src.core.formatter import format_popup
from src.core.geo import BoundingBox, bounds_of_points
from src.core.intensity import HIGH, MEDIUM


T = TypeVar("T")

DEFAULT_MARKER_RADIUS = 8
MARKER_OUTLINE_COLOR = "#ffffff"
MARKER_OUTLINE_WIDTH = 2


class RenderingDegenerate(ValueError):
    """Raised when marker bounds cannot be computed."""


@dataclass(frozen=True)
class Marker:
    """Immutable map marker for one event.

    Attributes:
        latitude: Marker latitude
        longitude: Marker longitude
        color: Hex fill color
        popup_content: HTML shown when the marker is selected
        severity: Severity bucket of the event
        radius: Circle radius in pixels
    """
    latitude: float
    longitude: float
    color: str
    popup_content: str
    severity: str
    radius: int = DEFAULT_MARKER_RADIUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "color": self.color,
            "popup": self.popup_content,
            "severity": self.severity,
            "radius": self.radius,
        }


@dataclass(frozen=True)
class Viewport:
    """What part of the map is shown.

    Either fitted to `bounds` with `padding` pixels, or the default
    whole-region view at `center` and `zoom`.
    """
    center: tuple[float, float]
    zoom: int | None = None
    bounds: BoundingBox | None = None
    padding: int = 0

    @property
    def is_fitted(self) -> bool:
        return self.bounds is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "center": {"lat": self.center[0], "lng": self.center[1]},
            "zoom": self.zoom,
            "bounds": self.bounds.to_dict() if self.bounds else None,
            "padding": self.padding,
        }


def get_severity_color(severity: str) -> str:
    """Get hex color for a severity bucket.

    Pure function.
    """
    if severity == HIGH:
        return "#d32f2f"  # red
    elif severity == MEDIUM:
        return "#f57c00"  # orange
    return "#388e3c"  # green


def build_marker(event: Event, radius: int = DEFAULT_MARKER_RADIUS) -> Marker | None:
    """Create a marker for an event.

    Pure function.

    Returns:
        Marker, or None if the event has no valid coordinates
    """
    if not event.has_valid_coordinates:
        return None

    severity = event.severity_bucket

    return Marker(
        latitude=event.latitude,
        longitude=event.longitude,
        color=get_severity_color(severity),
        popup_content=format_popup(event),
        severity=severity,
        radius=radius,
    )


def build_markers(events: list[Event], radius: int = DEFAULT_MARKER_RADIUS) -> list[Marker]:
    """Create markers for all plottable events, keeping their order.

    Pure function.
    """
    markers = []
    for event in events:
        marker = build_marker(event, radius)
        if marker is not None:
            markers.append(marker)
    return markers


def batched(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Split items into consecutive chunks of at most `size`.

    Raises:
        ValueError: If size is less than 1
    """
    if size < 1:
        raise ValueError(f"Batch size must be at least 1, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def compute_marker_bounds(markers: list[Marker]) -> BoundingBox:
    """Compute the bounding box of a set of markers.

    Pure function.

    Raises:
        RenderingDegenerate: If the markers have no usable extent
    """
    try:
        return bounds_of_points((m.latitude, m.longitude) for m in markers)
    except ValueError as e:
        raise RenderingDegenerate(str(e)) from e
