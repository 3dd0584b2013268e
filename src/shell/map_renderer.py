"""Map Renderer - Imperative Shell.

Plots normalized events onto a MapContext. Markers are inserted in
fixed-size batches with a short pause between batches so large result
sets do not monopolize the event loop.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.core.event import Event
from src.core.map_markers import (
    DEFAULT_MARKER_RADIUS,
    RenderingDegenerate,
    batched,
    build_markers,
    compute_marker_bounds,
)
from src.shell.map_context import MapContext


logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_BATCH_DELAY_SECONDS = 0.01
DEFAULT_FIT_PADDING = 50


class MapRenderer:
    """Plots events as markers and fits the viewport to them."""

    def __init__(
        self,
        context: MapContext,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
        padding: int = DEFAULT_FIT_PADDING,
        marker_radius: int = DEFAULT_MARKER_RADIUS,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize map renderer.

        Args:
            context: Map context to draw on
            batch_size: Markers added per batch
            batch_delay_seconds: Pause between batches
            padding: Padding in pixels when fitting the viewport
            marker_radius: Marker circle radius in pixels
            sleep: Coroutine used to yield between batches (asyncio.sleep)
        """
        if batch_size < 1:
            raise ValueError(f"Batch size must be at least 1, got {batch_size}")

        self.context = context
        self.batch_size = batch_size
        self.batch_delay_seconds = batch_delay_seconds
        self.padding = padding
        self.marker_radius = marker_radius
        self._sleep = sleep or asyncio.sleep

    async def plot(
        self,
        events: list[Event],
        is_current: Callable[[], bool] | None = None,
    ) -> int:
        """Replace the plotted markers with markers for `events`.

        Events without valid coordinates are skipped. After plotting, the
        viewport is fitted to the markers, or reset to the default view
        when there are none or their bounds cannot be computed.

        `is_current` is checked after every pause. Once it returns False
        the plot stops without adding further markers or moving the
        viewport.

        Args:
            events: Normalized events
            is_current: Returns False once this plot has been superseded

        Returns:
            Number of markers on the map
        """
        self.context.clear()

        markers = build_markers(events, self.marker_radius)

        logger.info(
            "Plotting %d markers (%d events)",
            len(markers),
            len(events),
        )

        if not markers:
            self.context.set_default_view()
            return 0

        batches = list(batched(markers, self.batch_size))
        for index, batch in enumerate(batches):
            for marker in batch:
                self.context.add(marker)

            if index < len(batches) - 1:
                await self._sleep(self.batch_delay_seconds)
                if is_current is not None and not is_current():
                    logger.info(
                        "Stopped plotting after %d of %d markers (superseded)",
                        (index + 1) * self.batch_size,
                        len(markers),
                    )
                    return len(self.context.markers)

        try:
            bounds = compute_marker_bounds(self.context.markers)
            self.context.fit_bounds(bounds, self.padding)
        except RenderingDegenerate as e:
            logger.warning("Failed to fit map bounds, using default view: %s", e)
            self.context.set_default_view()

        logger.info("Plotted %d markers", len(self.context.markers))

        return len(self.context.markers)
