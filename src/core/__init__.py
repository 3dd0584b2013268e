"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Intensity code translation
- Coordinate parsing
- Feed query building and validation
- Event normalization
- List and popup formatting
- Map marker and bounds calculation

All functions here are deterministic and have no I/O.
"""

from src.core.coordinates import is_valid_coordinate, parse_coordinate
from src.core.event import Event, normalize_events, normalize_record
from src.core.formatter import format_popup, render_event_list
from src.core.intensity import get_intensity_label, get_severity_bucket
from src.core.map_markers import Marker, build_markers, compute_marker_bounds
from src.core.query import EventQuery, build_feed_params, validate_query

__all__ = [
    # Intensity
    "get_intensity_label",
    "get_severity_bucket",
    # Coordinates
    "parse_coordinate",
    "is_valid_coordinate",
    # Query
    "EventQuery",
    "build_feed_params",
    "validate_query",
    # Event
    "Event",
    "normalize_record",
    "normalize_events",
    # Formatter
    "render_event_list",
    "format_popup",
    # Map markers
    "Marker",
    "build_markers",
    "compute_marker_bounds",
]
