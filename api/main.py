"""Earthquake Viewer API - FastAPI service.

Long-lived service that owns one orchestrator (and therefore one map)
for the whole process. The map keeps its markers between requests, so a
failed fetch leaves the previously plotted markers in place.
"""

import asyncio
import logging
import os
from datetime import date

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from src.core.intensity import SCALE_CHOICES
from src.core.query import query_from_inputs
from src.orchestrator import (
    OUTCOME_FEED_ERROR,
    OUTCOME_VALIDATION_ERROR,
    Orchestrator,
)
from src.shell.config_loader import get_config

log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Earthquake Viewer API",
    description="Recent earthquakes from the P2PQuake JMA feed as a list and map",
    version="1.0.0",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


# ===== Response Models =====

class ScaleChoice(BaseModel):
    code: int
    label: str


class ScaleChoicesResponse(BaseModel):
    choices: list[ScaleChoice]


# ===== Orchestrator =====

_orchestrator: Orchestrator | None = None


def _get_orchestrator() -> Orchestrator:
    """Get or create the process-wide orchestrator."""
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = Orchestrator(get_config())
        logger.info("Orchestrator initialized")
    return _orchestrator


# ===== Public Endpoints =====

@app.get("/api-earthquakes")
async def get_earthquakes(
    start_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    end_date: str | None = Query(default=None, description="YYYY-MM-DD"),
    min_scale: str | None = Query(default=None, description="Minimum intensity code"),
):
    """Fetch earthquakes and update the list and map.

    Without dates the last 7 days up to today are shown.
    """
    orchestrator = _get_orchestrator()

    try:
        query = query_from_inputs(
            start_date,
            end_date,
            min_scale,
            today=date.today(),
            lookback_days=orchestrator.config.lookback_days,
            default_min_intensity_code=orchestrator.config.default_min_intensity_code,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"error": f"Invalid input: {e}"})

    result = await orchestrator.load(query)
    logger.info("Completed: %s", result.summary)

    if result.outcome == OUTCOME_VALIDATION_ERROR:
        raise HTTPException(status_code=400, detail={"error": result.error})

    if result.outcome == OUTCOME_FEED_ERROR:
        raise HTTPException(status_code=502, detail={"error": result.error})

    response = orchestrator.snapshot()
    response["outcome"] = result.outcome
    response["events"] = [event.to_dict() for event in result.events]
    return response


@app.get("/api-state")
async def get_state():
    """Current list, map and error state.

    The first call (page load) runs the default-range load; later calls
    only report state.
    """
    orchestrator = _get_orchestrator()

    if orchestrator.state.last_outcome is None and not orchestrator.state.loading:
        result = await orchestrator.load_default()
        logger.info("Initial load completed: %s", result.summary)

    return orchestrator.snapshot()


@app.get("/api-map.png")
async def get_map_image():
    """Render the current map as a PNG image."""
    orchestrator = _get_orchestrator()

    image = await asyncio.to_thread(orchestrator.map_context.render)
    if not image.success:
        logger.error("Failed to render map: %s", image.error)
        raise HTTPException(status_code=502, detail="Failed to render map")

    return Response(content=image.image_bytes, media_type="image/png")


@app.get("/api-scale-choices", response_model=ScaleChoicesResponse)
async def get_scale_choices():
    """List the minimum-intensity selector options."""
    return ScaleChoicesResponse(
        choices=[ScaleChoice(code=code, label=label) for code, label in SCALE_CHOICES],
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}
