"""Cloud Function Entry Point.

This module provides the entry points for Google Cloud Functions.
It's a thin wrapper that loads configuration and invokes the API handlers.
"""

import logging
import os

import functions_framework
from flask import Request, Response

from src.api_handler import get_earthquake_map, get_earthquakes, get_scale_choices
from src.shell.config_loader import get_config


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@functions_framework.http
def earthquake_viewer(request: Request) -> Response:
    """HTTP Cloud Function: earthquake list, markers and viewport as JSON.

    Args:
        request: Flask request with start_date, end_date, min_scale args

    Returns:
        JSON response
    """
    logger.info("Starting earthquake fetch cycle")
    return get_earthquakes(request, get_config())


@functions_framework.http
def earthquake_map(request: Request) -> Response:
    """HTTP Cloud Function: earthquake map as a PNG image."""
    logger.info("Starting earthquake map cycle")
    return get_earthquake_map(request, get_config())


@functions_framework.http
def earthquake_scale_choices(request: Request) -> Response:
    """HTTP Cloud Function: minimum-intensity selector options."""
    return get_scale_choices(request)
