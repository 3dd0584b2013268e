"""Unit tests for event normalization.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

import pytest

from src.core.event import Event, normalize_events, normalize_record


# Sample feed record for testing
SAMPLE_RECORD = {
    "code": 551,
    "earthquake": {
        "time": "2025/01/15 09:30:00",
        "hypocenter": {
            "name": "石川県能登地方",
            "latitude": 37.5,
            "longitude": 137.3,
            "magnitude": 5.8,
            "depth": 10,
        },
        "maxScale": 60,
    },
}


def _record(**hypocenter_overrides):
    """Build a record with hypocenter fields replaced."""
    hypocenter = dict(SAMPLE_RECORD["earthquake"]["hypocenter"])
    hypocenter.update(hypocenter_overrides)
    return {
        "earthquake": {
            "time": "2025/01/15 09:30:00",
            "hypocenter": hypocenter,
            "maxScale": 40,
        },
    }


class TestNormalizeRecord:
    """Tests for normalize_record() pure function."""

    def test_normalizes_valid_record(self):
        """Should project every field of a complete record."""
        event = normalize_record(SAMPLE_RECORD)

        assert event is not None
        assert event.occurred_at == "2025/01/15 09:30:00"
        assert event.hypocenter_name == "石川県能登地方"
        assert event.magnitude == 5.8
        assert event.depth_km == 10
        assert event.max_intensity_code == 60
        assert event.max_intensity_label == "6-upper"
        assert event.severity_bucket == "high"
        assert event.latitude == 37.5
        assert event.longitude == 137.3

    def test_timestamp_passed_through_verbatim(self):
        """The feed's timestamp format is not reinterpreted."""
        record = _record()
        record["earthquake"]["time"] = "2025/01/15 09:30"
        event = normalize_record(record)
        assert event.occurred_at == "2025/01/15 09:30"

    def test_unknown_magnitude_is_none(self):
        """Magnitude -1 means unknown."""
        event = normalize_record(_record(magnitude=-1))
        assert event.magnitude is None

    def test_unknown_depth_is_none(self):
        """Depth -1 means unknown."""
        event = normalize_record(_record(depth=-1))
        assert event.depth_km is None

    def test_missing_magnitude_and_depth_are_none(self):
        hypocenter = {"name": "Test", "latitude": 35.0, "longitude": 135.0}
        record = {"earthquake": {"time": "t", "hypocenter": hypocenter, "maxScale": 30}}
        event = normalize_record(record)
        assert event.magnitude is None
        assert event.depth_km is None

    def test_zero_depth_is_kept(self):
        """Only -1 means unknown; a depth of 0 km is a real value."""
        event = normalize_record(_record(depth=0))
        assert event.depth_km == 0

    def test_compass_coordinates(self):
        """Compass-prefixed strings are parsed into signed degrees."""
        event = normalize_record(_record(latitude="N38.3", longitude="E141.7"))
        assert event.latitude == 38.3
        assert event.longitude == 141.7

    def test_invalid_coordinates_kept_for_list(self):
        """Invalid coordinates become None but the event is kept."""
        event = normalize_record(_record(latitude=0, longitude="garbage"))

        assert event is not None
        assert event.latitude is None
        assert event.longitude is None
        assert event.has_valid_coordinates is False

    def test_missing_max_scale_is_unknown(self):
        record = _record()
        del record["earthquake"]["maxScale"]
        event = normalize_record(record)
        assert event.max_intensity_code == -1
        assert event.max_intensity_label == "unknown"
        assert event.severity_bucket == "low"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_skips_empty_name(self, name):
        """Nameless records are incomplete and excluded."""
        assert normalize_record(_record(name=name)) is None

    def test_skips_missing_name(self):
        record = _record()
        del record["earthquake"]["hypocenter"]["name"]
        assert normalize_record(record) is None

    def test_skips_missing_hypocenter(self):
        assert normalize_record({"earthquake": {"time": "t", "maxScale": 30}}) is None

    def test_skips_missing_earthquake(self):
        """Non-earthquake feed records (e.g. tsunami notices) are skipped."""
        assert normalize_record({"code": 552, "issue": {}}) is None

    def test_skips_non_dict_record(self):
        assert normalize_record(None) is None
        assert normalize_record("record") is None


class TestNormalizeEvents:
    """Tests for normalize_events() pure function."""

    def test_output_size_counts_named_records(self):
        """Output size equals the number of records with a non-empty name."""
        records = [
            _record(name="A"),
            _record(name=""),
            _record(name="B"),
            {"earthquake": {"hypocenter": {}}},
            _record(name="C"),
        ]
        events = normalize_events(records)
        assert len(events) == 3

    def test_preserves_feed_order(self):
        records = [_record(name="newest"), _record(name="middle"), _record(name="oldest")]
        names = [e.hypocenter_name for e in normalize_events(records)]
        assert names == ["newest", "middle", "oldest"]

    def test_no_deduplication(self):
        """Duplicate records are kept."""
        events = normalize_events([SAMPLE_RECORD, SAMPLE_RECORD])
        assert len(events) == 2

    def test_empty_input(self):
        assert normalize_events([]) == []


class TestEvent:
    """Tests for the Event model."""

    def test_derived_fields_follow_code(self):
        """Label and bucket are computed from the intensity code."""
        event = Event(
            occurred_at="t",
            hypocenter_name="X",
            magnitude=None,
            depth_km=None,
            max_intensity_code=45,
        )
        assert event.max_intensity_label == "5-lower"
        assert event.severity_bucket == "medium"

    def test_to_dict_includes_derived_fields(self):
        event = normalize_record(SAMPLE_RECORD)
        data = event.to_dict()

        assert data["hypocenter_name"] == "石川県能登地方"
        assert data["max_intensity_label"] == "6-upper"
        assert data["severity_bucket"] == "high"
        assert data["latitude"] == 37.5

    def test_is_immutable(self):
        event = normalize_record(SAMPLE_RECORD)
        with pytest.raises(Exception):
            event.magnitude = 1.0
