"""Display formatting - Pure functions.

This module formats normalized events into list display instructions
and map popup content. All functions are pure with no side effects.
"""

from html import escape
from typing import Any

from src.core.event import Event
from src.core.intensity import SEVERITY_BUCKETS, UNKNOWN_LABEL


NO_DATA_TEXT = "No earthquake information matches the selected conditions."


def format_magnitude(magnitude: float | None) -> str:
    """Format a magnitude to one decimal place (e.g., "M5.8").

    Pure function.
    """
    if magnitude is None:
        return UNKNOWN_LABEL
    return f"M{magnitude:.1f}"


def format_depth(depth_km: float | None) -> str:
    """Format a depth in kilometers (e.g., "10km").

    Pure function.
    """
    if depth_km is None:
        return UNKNOWN_LABEL
    return f"{depth_km:g}km"


def format_event_summary(event: Event) -> str:
    """Format a one-line summary of an event.

    Pure function.

    Args:
        event: Event to summarize

    Returns:
        One-line summary string
    """
    return (
        f"{format_magnitude(event.magnitude)} - {event.hypocenter_name} "
        f"at {event.occurred_at} "
        f"(intensity {event.max_intensity_label}, depth {format_depth(event.depth_km)})"
    )


def format_event_card(event: Event) -> dict[str, Any]:
    """Format an event as a list card.

    Pure function. The timestamp is shown verbatim from the feed.

    Args:
        event: Event to format

    Returns:
        Card dict with display fields and severity styling
    """
    severity = event.severity_bucket

    return {
        "type": "earthquake_item",
        "css_class": f"earthquake-item scale-{severity}",
        "time": event.occurred_at,
        "intensity": {
            "label": event.max_intensity_label,
            "text": f"Intensity {event.max_intensity_label}",
            "severity": severity,
        },
        "hypocenter": event.hypocenter_name,
        "magnitude": format_magnitude(event.magnitude),
    }


def render_event_list(events: list[Event]) -> dict[str, Any]:
    """Render events as list display instructions.

    Pure function. An empty input renders a single "no data" placeholder.

    Args:
        events: Normalized events, in display order

    Returns:
        Display payload dict
    """
    if not events:
        return {
            "type": "no_data",
            "text": NO_DATA_TEXT,
        }

    severity_counts = {bucket: 0 for bucket in SEVERITY_BUCKETS}
    for event in events:
        severity_counts[event.severity_bucket] += 1

    return {
        "type": "earthquake_list",
        "count": len(events),
        "severity_counts": severity_counts,
        "items": [format_event_card(event) for event in events],
    }


def format_popup(event: Event) -> str:
    """Format the HTML popup shown for a map marker.

    Pure function. All feed-provided values are HTML-escaped.

    Args:
        event: Event the marker represents

    Returns:
        HTML fragment
    """
    return (
        '<div class="earthquake-popup">'
        f"<h4>{escape(event.hypocenter_name)}</h4>"
        f"<p><strong>Time:</strong> {escape(event.occurred_at)}</p>"
        f'<p class="scale scale-{event.severity_bucket}">'
        f"<strong>Max intensity:</strong> {escape(event.max_intensity_label)}</p>"
        f"<p><strong>Magnitude:</strong> {format_magnitude(event.magnitude)}</p>"
        f"<p><strong>Depth:</strong> {format_depth(event.depth_km)}</p>"
        "</div>"
    )
