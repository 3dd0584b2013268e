"""Web API Handler - Serves earthquake list and map data.

This module provides HTTP endpoints for the web frontend.
Part of the imperative shell - handles HTTP I/O.

Each request runs one cycle on a fresh orchestrator; the long-lived
service with a persistent map lives in api/main.py.
"""

import asyncio
import json
import logging
from datetime import date
from typing import Any

from flask import Request, Response

from src.core.config import Config
from src.core.intensity import SCALE_CHOICES
from src.core.query import query_from_inputs
from src.orchestrator import (
    OUTCOME_FEED_ERROR,
    OUTCOME_VALIDATION_ERROR,
    CycleResult,
    Orchestrator,
)

logger = logging.getLogger(__name__)

# CORS allowed origins
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8080",
]


def _cors_headers(origin: str | None) -> dict[str, str]:
    """Generate CORS headers for the response."""
    headers = {
        "Access-Control-Allow-Methods": "GET, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": "3600",
    }
    if origin and origin in ALLOWED_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    else:
        headers["Access-Control-Allow-Origin"] = ALLOWED_ORIGINS[0]
    return headers


def _json_response(
    data: dict[str, Any],
    status: int = 200,
    origin: str | None = None,
) -> Response:
    """Create a JSON response with CORS headers."""
    response = Response(
        json.dumps(data, default=str, ensure_ascii=False),
        status=status,
        mimetype="application/json",
    )
    for key, value in _cors_headers(origin).items():
        response.headers[key] = value
    return response


def _preflight(origin: str | None) -> Response:
    response = Response("", status=204)
    for key, value in _cors_headers(origin).items():
        response.headers[key] = value
    return response


def _status_for(result: CycleResult) -> int:
    if result.outcome == OUTCOME_VALIDATION_ERROR:
        return 400
    if result.outcome == OUTCOME_FEED_ERROR:
        return 502
    return 200


def _run_cycle(
    request: Request,
    config: Config,
    orchestrator: Orchestrator | None = None,
) -> tuple[Orchestrator, CycleResult | None, str | None]:
    """Parse request args and run one cycle.

    Returns:
        Tuple of (orchestrator, cycle result, input error message)
    """
    orchestrator = orchestrator or Orchestrator(config)

    try:
        query = query_from_inputs(
            request.args.get("start_date"),
            request.args.get("end_date"),
            request.args.get("min_scale"),
            today=date.today(),
            lookback_days=config.lookback_days,
            default_min_intensity_code=config.default_min_intensity_code,
        )
    except ValueError as e:
        return orchestrator, None, f"Invalid input: {e}"

    result = asyncio.run(orchestrator.load(query))
    logger.info("Completed: %s", result.summary)

    return orchestrator, result, None


def get_earthquakes(
    request: Request,
    config: Config,
    orchestrator: Orchestrator | None = None,
) -> Response:
    """API endpoint: Fetch earthquakes for a date range.

    Query params:
        start_date: First day, YYYY-MM-DD (default: 7 days ago)
        end_date: Last day, YYYY-MM-DD (default: today)
        min_scale: Minimum intensity code (default: 10)

    Returns:
        JSON with list display, map markers and viewport
    """
    origin = request.headers.get("Origin")

    if request.method == "OPTIONS":
        return _preflight(origin)

    orchestrator, result, input_error = _run_cycle(request, config, orchestrator)

    if input_error:
        return _json_response({"error": input_error}, status=400, origin=origin)

    response_data = orchestrator.snapshot()
    response_data["outcome"] = result.outcome
    response_data["events"] = [event.to_dict() for event in result.events]
    if result.error:
        response_data["error"] = result.error

    return _json_response(response_data, status=_status_for(result), origin=origin)


def get_earthquake_map(
    request: Request,
    config: Config,
    orchestrator: Orchestrator | None = None,
) -> Response:
    """API endpoint: Render the earthquake map for a date range as PNG.

    Takes the same query params as get_earthquakes.
    """
    origin = request.headers.get("Origin")

    if request.method == "OPTIONS":
        return _preflight(origin)

    orchestrator, result, input_error = _run_cycle(request, config, orchestrator)

    if input_error:
        return _json_response({"error": input_error}, status=400, origin=origin)

    if not result.success:
        return _json_response(
            {"error": result.error},
            status=_status_for(result),
            origin=origin,
        )

    image = orchestrator.map_context.render()
    if not image.success:
        logger.error("Failed to render map: %s", image.error)
        return _json_response(
            {"error": "Failed to render map"},
            status=502,
            origin=origin,
        )

    response = Response(image.image_bytes, status=200, mimetype="image/png")
    for key, value in _cors_headers(origin).items():
        response.headers[key] = value
    return response


def get_scale_choices(request: Request) -> Response:
    """API endpoint: List the minimum-intensity selector options."""
    origin = request.headers.get("Origin")

    if request.method == "OPTIONS":
        return _preflight(origin)

    choices = [{"code": code, "label": label} for code, label in SCALE_CHOICES]

    return _json_response({"choices": choices}, origin=origin)
