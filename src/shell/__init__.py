"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- Earthquake feed client (HTTP)
- Map context and renderer (tile server, rendering)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from src.shell.feed_client import FeedClient, FeedError, FeedUnavailable, FeedUnreachable
from src.shell.map_context import MapContext
from src.shell.map_renderer import MapRenderer
from src.shell.config_loader import load_config, Config

__all__ = [
    "FeedClient",
    "FeedError",
    "FeedUnavailable",
    "FeedUnreachable",
    "MapContext",
    "MapRenderer",
    "load_config",
    "Config",
]
