"""Tests for map marker configuration - Pure functions.

These are fast unit tests with no mocks needed since they test pure functions.
"""

import pytest

from src.core.event import Event
from src.core.geo import BoundingBox
from src.core.map_markers import (
    Marker,
    RenderingDegenerate,
    Viewport,
    batched,
    build_marker,
    build_markers,
    compute_marker_bounds,
    get_severity_color,
)


def _event(name="Test", code=30, latitude=35.0, longitude=135.0):
    return Event(
        occurred_at="2025/01/15 09:30:00",
        hypocenter_name=name,
        magnitude=4.0,
        depth_km=10.0,
        max_intensity_code=code,
        latitude=latitude,
        longitude=longitude,
    )


class TestGetSeverityColor:
    """Tests for get_severity_color()."""

    def test_high_is_red(self):
        assert get_severity_color("high") == "#d32f2f"

    def test_medium_is_orange(self):
        assert get_severity_color("medium") == "#f57c00"

    def test_low_is_green(self):
        assert get_severity_color("low") == "#388e3c"


class TestBuildMarker:
    """Tests for build_marker()."""

    def test_marker_from_event(self):
        marker = build_marker(_event(code=60, latitude=37.5, longitude=137.3))

        assert marker is not None
        assert marker.latitude == 37.5
        assert marker.longitude == 137.3
        assert marker.color == "#d32f2f"
        assert marker.severity == "high"
        assert marker.radius == 8
        assert "Test" in marker.popup_content

    def test_missing_coordinates(self):
        assert build_marker(_event(latitude=None)) is None
        assert build_marker(_event(longitude=None)) is None

    def test_custom_radius(self):
        assert build_marker(_event(), radius=12).radius == 12


class TestBuildMarkers:
    """Tests for build_markers()."""

    def test_filters_unplottable_events(self):
        events = [
            _event(name="A"),
            _event(name="B", latitude=None),
            _event(name="C", longitude=None),
            _event(name="D"),
        ]
        markers = build_markers(events)

        assert len(markers) == 2
        assert "A" in markers[0].popup_content
        assert "D" in markers[1].popup_content

    def test_all_invalid_gives_no_markers(self):
        events = [_event(latitude=None), _event(longitude=None)]
        assert build_markers(events) == []


class TestBatched:
    """Tests for batched()."""

    def test_even_split(self):
        assert list(batched([1, 2, 3, 4], 2)) == [[1, 2], [3, 4]]

    def test_remainder_in_last_batch(self):
        assert list(batched([1, 2, 3, 4, 5], 2)) == [[1, 2], [3, 4], [5]]

    def test_empty(self):
        assert list(batched([], 50)) == []

    @pytest.mark.parametrize("size", [1, 3, 50, 1000])
    def test_concatenation_preserves_items(self, size):
        """Batch size never changes the items or their order."""
        items = list(range(120))
        flattened = [x for batch in batched(items, size) for x in batch]
        assert flattened == items

    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            list(batched([1, 2], 0))


class TestComputeMarkerBounds:
    """Tests for compute_marker_bounds()."""

    def test_bounds_of_several_markers(self):
        markers = build_markers([
            _event(latitude=31.0, longitude=130.5),
            _event(latitude=43.0, longitude=145.0),
            _event(latitude=35.7, longitude=139.7),
        ])
        bounds = compute_marker_bounds(markers)

        assert bounds == BoundingBox(
            min_latitude=31.0,
            max_latitude=43.0,
            min_longitude=130.5,
            max_longitude=145.0,
        )

    def test_single_marker_gives_point_box(self):
        markers = build_markers([_event(latitude=37.5, longitude=137.3)])
        bounds = compute_marker_bounds(markers)

        assert bounds.min_latitude == bounds.max_latitude == 37.5
        assert bounds.min_longitude == bounds.max_longitude == 137.3

    def test_empty_is_degenerate(self):
        with pytest.raises(RenderingDegenerate):
            compute_marker_bounds([])

    def test_non_finite_is_degenerate(self):
        marker = Marker(
            latitude=float("nan"),
            longitude=135.0,
            color="#388e3c",
            popup_content="",
            severity="low",
        )
        with pytest.raises(RenderingDegenerate):
            compute_marker_bounds([marker])


class TestViewport:
    """Tests for Viewport."""

    def test_default_view_is_not_fitted(self):
        viewport = Viewport(center=(36.5, 138.0), zoom=5)

        assert viewport.is_fitted is False
        assert viewport.to_dict() == {
            "center": {"lat": 36.5, "lng": 138.0},
            "zoom": 5,
            "bounds": None,
            "padding": 0,
        }

    def test_fitted_view(self):
        bounds = BoundingBox(35.0, 36.0, 135.0, 136.0)
        viewport = Viewport(center=bounds.center, bounds=bounds, padding=50)

        assert viewport.is_fitted is True
        assert viewport.to_dict()["bounds"]["max_longitude"] == 136.0
        assert viewport.to_dict()["padding"] == 50
