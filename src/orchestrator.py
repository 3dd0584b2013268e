"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates one fetch -> normalize -> render cycle: it turns
a user query into a feed request, hands the normalized events to the list
and map renderers, and owns the loading/error display state.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from src.core.config import Config
from src.core.event import Event, normalize_events
from src.core.formatter import format_event_summary, render_event_list
from src.core.query import EventQuery, default_date_range, validate_query
from src.shell.feed_client import FeedClient, FeedError
from src.shell.map_context import MapContext
from src.shell.map_renderer import MapRenderer


logger = logging.getLogger(__name__)

# View phases
IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"

# Cycle outcomes
OUTCOME_SUCCESS = "success"
OUTCOME_EMPTY = "empty"
OUTCOME_VALIDATION_ERROR = "validation_error"
OUTCOME_FEED_ERROR = "feed_error"
OUTCOME_SUPERSEDED = "superseded"


@dataclass
class ViewState:
    """Display state driven by the orchestrator.

    Attributes:
        phase: Current phase (idle/loading)
        last_outcome: Phase the last finished cycle ended in (success/error)
        loading: Whether the loading indicator is shown
        trigger_enabled: Whether the fetch trigger accepts input
        list_display: List renderer output, None when the list is cleared
        error_message: Last error message shown
        error_expires_at: Clock time after which the error is hidden
    """
    phase: str = IDLE
    last_outcome: str | None = None
    loading: bool = False
    trigger_enabled: bool = True
    list_display: dict[str, Any] | None = None
    error_message: str | None = None
    error_expires_at: float | None = None

    def error_visible(self, now: float) -> bool:
        """Errors dismiss themselves once their display time has passed."""
        if self.error_message is None or self.error_expires_at is None:
            return False
        return now < self.error_expires_at


@dataclass
class CycleResult:
    """Result of one fetch/render cycle.

    Attributes:
        outcome: success, empty, validation_error, feed_error or superseded
        events: Normalized events
        markers_plotted: Markers placed on the map
        error: Error message if the cycle failed
    """
    outcome: str
    events: list[Event] = field(default_factory=list)
    markers_plotted: int = 0
    error: str | None = None

    @property
    def success(self) -> bool:
        """Returns True if the cycle rendered results (possibly empty)."""
        return self.outcome in (OUTCOME_SUCCESS, OUTCOME_EMPTY)

    @property
    def summary(self) -> str:
        """Human-readable summary of the cycle."""
        if self.error:
            return f"{self.outcome}: {self.error}"
        return (
            f"{self.outcome}: {len(self.events)} events, "
            f"{self.markers_plotted} markers"
        )


class Orchestrator:
    """Coordinates earthquake display.

    This class wires together:
    - Feed client (fetches raw records)
    - Core functions (validation, normalization, list formatting)
    - Map renderer (plots markers onto the owned map context)

    Overlapping loads are resolved with a generation counter: only the
    most recently started cycle may update the display.
    """

    def __init__(
        self,
        config: Config,
        feed_client: FeedClient | None = None,
        map_context: MapContext | None = None,
        map_renderer: MapRenderer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            feed_client: Feed client (created if not provided)
            map_context: Map context (created if not provided)
            map_renderer: Map renderer (created if not provided)
            clock: Monotonic clock used for error auto-dismiss
        """
        self.config = config
        self.feed_client = feed_client or FeedClient(
            base_url=config.feed.base_url,
            limit=config.feed.limit,
            timeout=config.feed.timeout_seconds,
        )
        self.map_context = map_context or MapContext(config.map)
        self.map_renderer = map_renderer or MapRenderer(
            self.map_context,
            batch_size=config.map.batch_size,
            batch_delay_seconds=config.map.batch_delay_seconds,
            padding=config.map.fit_padding,
            marker_radius=config.map.marker_radius,
        )
        self.clock = clock
        self.state = ViewState()
        self._generation = 0

    def _show_error(self, message: str) -> None:
        self.state.error_message = message
        self.state.error_expires_at = self.clock() + self.config.error_dismiss_seconds

    def _clear_error(self) -> None:
        self.state.error_message = None
        self.state.error_expires_at = None

    def _set_loading(self, loading: bool) -> None:
        self.state.loading = loading
        self.state.trigger_enabled = not loading
        if loading:
            self.state.phase = LOADING

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def load(self, query: EventQuery) -> CycleResult:
        """Run a complete fetch/render cycle.

        This is the main entry point that:
        1. Validates the query (no fetch on failure)
        2. Fetches raw records from the feed
        3. Normalizes them into events
        4. Renders the list and plots the map

        On failure the list is cleared and the map is left untouched.

        Args:
            query: Date range and minimum intensity

        Returns:
            CycleResult with details of what happened
        """
        errors = validate_query(query)
        if errors:
            message = errors[0].message
            logger.warning("Invalid query: %s", message)
            self._show_error(message)
            self.state.list_display = None
            self.state.last_outcome = ERROR
            return CycleResult(
                outcome=OUTCOME_VALIDATION_ERROR,
                error=message,
            )

        self._generation += 1
        generation = self._generation

        self._set_loading(True)
        self._clear_error()

        try:
            return await self._run_cycle(query, generation)
        finally:
            if self._is_current(generation):
                self._set_loading(False)
                self.state.phase = IDLE

    async def _run_cycle(self, query: EventQuery, generation: int) -> CycleResult:
        """Fetch, normalize and render for one validated query."""
        try:
            records = await self.feed_client.fetch_events(
                query.since_date,
                query.until_date,
                query.min_intensity_code,
            )
        except FeedError as e:
            if not self._is_current(generation):
                logger.info("Discarding failure of superseded request: %s", e)
                return CycleResult(outcome=OUTCOME_SUPERSEDED)

            message = f"Failed to fetch earthquake data: {e}"
            logger.error(message)
            self._show_error(message)
            self.state.list_display = None
            self.state.last_outcome = ERROR
            return CycleResult(
                outcome=OUTCOME_FEED_ERROR,
                error=message,
            )

        if not self._is_current(generation):
            logger.info("Discarding %d records from superseded request", len(records))
            return CycleResult(outcome=OUTCOME_SUPERSEDED)

        events = normalize_events(records)

        logger.info(
            "Normalized %d events (%d records, %d skipped)",
            len(events),
            len(records),
            len(records) - len(events),
        )
        for event in events:
            logger.debug("Event: %s", format_event_summary(event))

        self.state.list_display = render_event_list(events)
        markers_plotted = await self.map_renderer.plot(
            events,
            is_current=lambda: self._is_current(generation),
        )

        if not self._is_current(generation):
            logger.info("Abandoned plotting for superseded request")
            return CycleResult(outcome=OUTCOME_SUPERSEDED)

        self.state.last_outcome = SUCCESS

        return CycleResult(
            outcome=OUTCOME_SUCCESS if events else OUTCOME_EMPTY,
            events=events,
            markers_plotted=markers_plotted,
        )

    async def load_default(self, today: date | None = None) -> CycleResult:
        """Run the initial-load cycle over the default date range.

        Args:
            today: Last day of the range (defaults to the current date)

        Returns:
            CycleResult of the cycle
        """
        since, until = default_date_range(
            today or date.today(),
            self.config.lookback_days,
        )
        return await self.load(EventQuery(
            since_date=since,
            until_date=until,
            min_intensity_code=self.config.default_min_intensity_code,
        ))

    def snapshot(self, now: float | None = None) -> dict[str, Any]:
        """Describe the current display state as a JSON-serializable dict."""
        if now is None:
            now = self.clock()

        visible = self.state.error_visible(now)

        return {
            "phase": self.state.phase,
            "last_outcome": self.state.last_outcome,
            "loading": self.state.loading,
            "trigger_enabled": self.state.trigger_enabled,
            "error": self.state.error_message if visible else None,
            "list": self.state.list_display,
            "map": {
                "markers": [m.to_dict() for m in self.map_context.markers],
                "viewport": self.map_context.viewport.to_dict(),
                "attribution": self.map_context.settings.attribution,
            },
        }
