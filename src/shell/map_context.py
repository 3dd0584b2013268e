"""Map Context - Imperative Shell.

This module owns the map state (plotted markers and viewport) and renders
it to a static image using map tiles. Marker and viewport configuration
is in the core module.
"""

import io
import logging
from dataclasses import dataclass

from staticmap import StaticMap, CircleMarker

from src.core.config import MapSettings
from src.core.geo import BoundingBox
from src.core.map_markers import (
    MARKER_OUTLINE_COLOR,
    MARKER_OUTLINE_WIDTH,
    Marker,
    Viewport,
)


logger = logging.getLogger(__name__)


@dataclass
class MapImageResult:
    """Result of map image generation.

    Attributes:
        success: Whether the image was generated successfully
        image_bytes: PNG image data if successful
        error: Error message if failed
    """
    success: bool
    image_bytes: bytes | None = None
    error: str | None = None


class MapContext:
    """The map and its marker layer.

    Created once by the orchestrator and passed to the map renderer.
    Mutations (clear/add/fit) only touch in-memory state; tiles are
    fetched when render() is called.
    """

    def __init__(self, settings: MapSettings | None = None) -> None:
        """Initialize map context at the default view.

        Args:
            settings: Map settings (defaults if not provided)
        """
        self.settings = settings or MapSettings()
        self.markers: list[Marker] = []
        self.viewport = self._default_viewport()

    def _default_viewport(self) -> Viewport:
        return Viewport(
            center=(self.settings.default_latitude, self.settings.default_longitude),
            zoom=self.settings.default_zoom,
        )

    def clear(self) -> None:
        """Remove all plotted markers."""
        self.markers.clear()

    def add(self, marker: Marker) -> None:
        """Add a marker to the marker layer."""
        self.markers.append(marker)

    def fit_bounds(self, bounds: BoundingBox, padding: int) -> None:
        """Fit the viewport to a bounding box with padding in pixels."""
        self.viewport = Viewport(
            center=bounds.center,
            bounds=bounds,
            padding=padding,
        )

    def set_default_view(self) -> None:
        """Reset the viewport to the whole-region view."""
        self.viewport = self._default_viewport()

    def render(self) -> MapImageResult:
        """Render the current map state as a PNG image.

        This method performs I/O (fetches map tiles from the tile server).

        Returns:
            MapImageResult with image bytes or error
        """
        padding = self.viewport.padding if self.viewport.is_fitted else 0

        logger.info(
            "Rendering map with %d markers (fitted=%s)",
            len(self.markers),
            self.viewport.is_fitted,
        )

        try:
            static_map = StaticMap(
                self.settings.width,
                self.settings.height,
                padding_x=padding,
                padding_y=padding,
                url_template=self.settings.tile_url,
            )

            for marker in self.markers:
                # Outline first so it renders behind the colored circle
                static_map.add_marker(CircleMarker(
                    (marker.longitude, marker.latitude),  # (lon, lat) order for staticmap
                    MARKER_OUTLINE_COLOR,
                    (marker.radius + MARKER_OUTLINE_WIDTH) * 2,
                ))
                static_map.add_marker(CircleMarker(
                    (marker.longitude, marker.latitude),
                    marker.color,
                    marker.radius * 2,
                ))

            if self.viewport.is_fitted and self.markers:
                image = static_map.render()
            else:
                latitude, longitude = self.viewport.center
                image = static_map.render(
                    zoom=self.viewport.zoom or self.settings.default_zoom,
                    center=[longitude, latitude],
                )

            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            image_bytes = buffer.getvalue()

            logger.info(
                "Generated map image: %d bytes",
                len(image_bytes),
            )

            return MapImageResult(
                success=True,
                image_bytes=image_bytes,
            )

        except Exception as e:
            logger.error("Failed to render map: %s", str(e))
            return MapImageResult(
                success=False,
                error=str(e),
            )
