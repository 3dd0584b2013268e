"""Earthquake Feed Client - Imperative Shell.

This module handles HTTP communication with the P2PQuake JMA earthquake feed.
All I/O is contained here; parsing and validation are in the core module.
"""

import asyncio
import logging
from datetime import date
from typing import Any

import requests

from src.core.config import FEED_API_BASE
from src.core.query import EventQuery, build_feed_params


logger = logging.getLogger(__name__)

# The feed default is small; multi-day ranges need a much higher cap
DEFAULT_LIMIT = 1000


class FeedError(Exception):
    """Raised when earthquake data cannot be fetched.

    Attributes:
        cause: Human-readable description of the failure
    """

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause


class FeedUnavailable(FeedError):
    """The feed answered with a non-success HTTP status."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"Feed request failed (status: {status_code})")
        self.status_code = status_code


class FeedUnreachable(FeedError):
    """The request could not be completed (network failure, bad body)."""


class FeedClient:
    """Client for fetching earthquake records from the feed.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = FEED_API_BASE,
        limit: int = DEFAULT_LIMIT,
        timeout: float | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            base_url: Feed endpoint URL
            limit: Maximum number of records per query
            timeout: Request timeout in seconds (None for no timeout)
        """
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout

    def fetch_raw(self, query: EventQuery) -> list[dict[str, Any]]:
        """Fetch raw records from the feed (blocking).

        This method performs HTTP I/O.

        Args:
            query: Query parameters

        Returns:
            Raw records, newest first

        Raises:
            FeedUnavailable: If the feed returns a non-success status
            FeedUnreachable: If the request cannot be completed
            FeedError: If the body is not a list of records
        """
        params = build_feed_params(query, self.limit)

        logger.info(
            "Fetching earthquakes from feed",
            extra={"params": params},
        )

        try:
            response = requests.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Feed request failed: %s", e)
            raise FeedUnreachable(str(e)) from e

        if not response.ok:
            logger.error("Feed returned status %d", response.status_code)
            raise FeedUnavailable(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise FeedUnreachable(f"Invalid response body: {e}") from e

        if not isinstance(data, list):
            raise FeedError(
                f"Unexpected response format: expected a list, got {type(data).__name__}"
            )

        logger.info("Fetched %d records from feed", len(data))

        return data

    async def fetch_events(
        self,
        since_date: date,
        until_date: date,
        min_intensity_code: int,
    ) -> list[dict[str, Any]]:
        """Fetch raw records for a date range and minimum intensity.

        The blocking request runs in a worker thread so the event loop
        stays responsive while waiting for the transport.

        Args:
            since_date: First day of the range
            until_date: Last day of the range
            min_intensity_code: Minimum intensity code (feed units)

        Returns:
            Raw records, newest first
        """
        query = EventQuery(
            since_date=since_date,
            until_date=until_date,
            min_intensity_code=min_intensity_code,
        )
        return await asyncio.to_thread(self.fetch_raw, query)
