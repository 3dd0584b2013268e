"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, FeedSettings, MapSettings) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, FeedSettings, MapSettings, validate_config


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be an environment variable placeholder.

    Args:
        value: Value to resolve (may be a ${VAR} placeholder)

    Returns:
        Resolved value, or the original placeholder if the variable is unset
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _optional_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    return float(value)


def _parse_feed(data: dict[str, Any]) -> FeedSettings:
    """Parse feed settings from config data."""
    defaults = FeedSettings()
    return FeedSettings(
        base_url=_resolve_value(data.get("base_url", defaults.base_url)),
        limit=int(_resolve_value(data.get("limit", defaults.limit))),
        timeout_seconds=_optional_float(_resolve_value(data.get("timeout_seconds"))),
    )


def _parse_map(data: dict[str, Any]) -> MapSettings:
    """Parse map settings from config data."""
    defaults = MapSettings()
    default_view = data.get("default_view") or {}
    return MapSettings(
        tile_url=_resolve_value(data.get("tile_url", defaults.tile_url)),
        attribution=data.get("attribution", defaults.attribution),
        width=int(data.get("width", defaults.width)),
        height=int(data.get("height", defaults.height)),
        default_latitude=float(default_view.get("latitude", defaults.default_latitude)),
        default_longitude=float(default_view.get("longitude", defaults.default_longitude)),
        default_zoom=int(default_view.get("zoom", defaults.default_zoom)),
        fit_padding=int(data.get("fit_padding", defaults.fit_padding)),
        marker_radius=int(data.get("marker_radius", defaults.marker_radius)),
        batch_size=int(data.get("batch_size", defaults.batch_size)),
        batch_delay_seconds=float(data.get("batch_delay_seconds", defaults.batch_delay_seconds)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    defaults = Config()
    return Config(
        feed=_parse_feed(data.get("feed") or {}),
        map=_parse_map(data.get("map") or {}),
        lookback_days=int(data.get("lookback_days", defaults.lookback_days)),
        default_min_intensity_code=int(
            data.get("default_min_intensity_code", defaults.default_min_intensity_code)
        ),
        error_dismiss_seconds=float(
            data.get("error_dismiss_seconds", defaults.error_dismiss_seconds)
        ),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for error in result.critical_errors:
        logger.error("Config %s: %s", error.field, error.message)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: feed=%s, limit=%d, lookback=%d days",
        config.feed.base_url,
        config.feed.limit,
        config.lookback_days,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FEED_BASE_URL: Feed endpoint URL
        FEED_LIMIT: Result cap per query
        FEED_TIMEOUT_SECONDS: Request timeout (unset for no timeout)
        MAP_TILE_URL: Tile server URL template
        LOOKBACK_DAYS: Days covered by the default date range

    Returns:
        Config object from environment
    """
    feed_defaults = FeedSettings()
    map_defaults = MapSettings()

    feed = FeedSettings(
        base_url=os.environ.get("FEED_BASE_URL", feed_defaults.base_url),
        limit=int(os.environ.get("FEED_LIMIT", str(feed_defaults.limit))),
        timeout_seconds=_optional_float(os.environ.get("FEED_TIMEOUT_SECONDS")),
    )

    map_settings = MapSettings(
        tile_url=os.environ.get("MAP_TILE_URL", map_defaults.tile_url),
    )

    config = Config(
        feed=feed,
        map=map_settings,
        lookback_days=int(os.environ.get("LOOKBACK_DAYS", "7")),
    )
    _log_validation(config)

    return config


def get_config() -> Config:
    """Load configuration from file or environment.

    Uses the YAML file when CONFIG_PATH is set or the default file exists,
    otherwise environment variables.
    """
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif Path("config/config.yaml").exists():
        return load_config()
    return load_config_from_env()
