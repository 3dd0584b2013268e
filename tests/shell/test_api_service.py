"""Tests for the FastAPI earthquake viewer service.

The process-wide orchestrator is replaced with one backed by a mocked
feed client, so no network calls are made.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

import api.main
from src.core.config import Config
from src.orchestrator import Orchestrator
from src.shell.feed_client import FeedUnavailable
from src.shell.map_context import MapContext, MapImageResult
from src.shell.map_renderer import MapRenderer


RECORD = {
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


@pytest.fixture
def feed_client():
    client = Mock()
    client.fetch_events = AsyncMock(return_value=[RECORD])
    return client


@pytest.fixture
def orchestrator(feed_client, monkeypatch):
    config = Config()
    context = MapContext(config.map)
    orchestrator = Orchestrator(
        config,
        feed_client=feed_client,
        map_context=context,
        map_renderer=MapRenderer(context, sleep=AsyncMock()),
    )
    monkeypatch.setattr(api.main, "_orchestrator", orchestrator)
    return orchestrator


@pytest.fixture
def client(orchestrator):
    return TestClient(api.main.app)


class TestEarthquakesEndpoint:
    """Tests for GET /api-earthquakes."""

    def test_returns_list_and_map(self, client, feed_client):
        response = client.get("/api-earthquakes", params={
            "start_date": "2025-01-08",
            "end_date": "2025-01-15",
            "min_scale": "30",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "success"
        assert data["list"]["count"] == 1
        assert data["list"]["items"][0]["hypocenter"] == "石川県能登地方"
        assert data["map"]["markers"][0]["color"] == "#d32f2f"
        assert data["events"][0]["max_intensity_label"] == "6-upper"

        args = feed_client.fetch_events.await_args.args
        assert args[2] == 30

    def test_reversed_dates_are_rejected(self, client, feed_client):
        response = client.get("/api-earthquakes", params={
            "start_date": "2025-01-16",
            "end_date": "2025-01-15",
        })

        assert response.status_code == 400
        feed_client.fetch_events.assert_not_awaited()

    def test_malformed_date_is_rejected(self, client):
        response = client.get("/api-earthquakes", params={"start_date": "yesterday"})

        assert response.status_code == 400
        assert "Invalid input" in response.json()["detail"]["error"]

    def test_feed_failure_is_bad_gateway(self, client, feed_client):
        feed_client.fetch_events.side_effect = FeedUnavailable(500)

        response = client.get("/api-earthquakes")

        assert response.status_code == 502
        assert "500" in response.json()["detail"]["error"]


class TestStateEndpoint:
    """Tests for GET /api-state."""

    def test_first_call_runs_default_load(self, client, feed_client):
        response = client.get("/api-state")

        assert response.status_code == 200
        assert response.json()["last_outcome"] == "success"
        feed_client.fetch_events.assert_awaited_once()

    def test_later_calls_only_report(self, client, feed_client):
        client.get("/api-state")
        client.get("/api-state")

        assert feed_client.fetch_events.await_count == 1


class TestMapEndpoint:
    """Tests for GET /api-map.png."""

    def test_returns_png(self, client, orchestrator):
        orchestrator.map_context.render = Mock(
            return_value=MapImageResult(success=True, image_bytes=b"PNG_IMAGE_DATA"),
        )

        response = client.get("/api-map.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == b"PNG_IMAGE_DATA"

    def test_render_failure(self, client, orchestrator):
        orchestrator.map_context.render = Mock(
            return_value=MapImageResult(success=False, error="tile server down"),
        )

        response = client.get("/api-map.png")

        assert response.status_code == 502


class TestMiscEndpoints:
    """Tests for selector options and health check."""

    def test_scale_choices(self, client):
        response = client.get("/api-scale-choices")

        choices = response.json()["choices"]
        assert len(choices) == 9
        assert choices[0] == {"code": 10, "label": "1"}
        assert choices[-1] == {"code": 70, "label": "7"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
