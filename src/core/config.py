"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field


# P2PQuake JMA earthquake feed
FEED_API_BASE = "https://api.p2pquake.net/v2/jma/quake"

# GSI "pale" tiles keep colored markers readable
GSI_PALE_TILE_URL = "https://cyberjapandata.gsi.go.jp/xyz/pale/{z}/{x}/{y}.png"
GSI_ATTRIBUTION = "Geospatial Information Authority of Japan (GSI)"


@dataclass
class FeedSettings:
    """Earthquake feed connection settings.

    Attributes:
        base_url: Feed endpoint URL
        limit: Result cap requested per query (the feed default is small)
        timeout_seconds: Request timeout, None to use the transport default
    """
    base_url: str = FEED_API_BASE
    limit: int = 1000
    timeout_seconds: float | None = None


@dataclass
class MapSettings:
    """Map rendering settings.

    Attributes:
        tile_url: Tile server URL template
        attribution: Attribution text for the tile provider
        width: Rendered image width in pixels
        height: Rendered image height in pixels
        default_latitude: Center latitude of the whole-region view
        default_longitude: Center longitude of the whole-region view
        default_zoom: Zoom level of the whole-region view
        fit_padding: Padding in pixels when fitting to marker bounds
        marker_radius: Marker circle radius in pixels
        batch_size: Markers added per batch
        batch_delay_seconds: Pause between marker batches
    """
    tile_url: str = GSI_PALE_TILE_URL
    attribution: str = GSI_ATTRIBUTION
    width: int = 800
    height: int = 600
    default_latitude: float = 36.5
    default_longitude: float = 138.0
    default_zoom: int = 5
    fit_padding: int = 50
    marker_radius: int = 8
    batch_size: int = 50
    batch_delay_seconds: float = 0.01


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        feed: Feed connection settings
        map: Map rendering settings
        lookback_days: Days before today covered by the default date range
        default_min_intensity_code: Selector value used on initial load
        error_dismiss_seconds: How long an error message stays visible
    """
    feed: FeedSettings = field(default_factory=FeedSettings)
    map: MapSettings = field(default_factory=MapSettings)
    lookback_days: int = 7
    default_min_intensity_code: int = 10
    error_dismiss_seconds: float = 5.0


@dataclass
class ValidationError:
    """A validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.feed.base_url.startswith(("http://", "https://")):
        errors.append(ValidationError(
            field="feed.base_url",
            message=f"Feed URL must be http(s), got {config.feed.base_url!r}",
        ))

    if config.feed.limit < 1:
        errors.append(ValidationError(
            field="feed.limit",
            message=f"Limit must be positive, got {config.feed.limit}",
        ))
    elif config.feed.limit <= 100:
        errors.append(ValidationError(
            field="feed.limit",
            message=f"Limit {config.feed.limit} may truncate multi-day ranges",
            severity="warning",
        ))

    if config.feed.timeout_seconds is not None and config.feed.timeout_seconds <= 0:
        errors.append(ValidationError(
            field="feed.timeout_seconds",
            message=f"Timeout must be positive, got {config.feed.timeout_seconds}",
        ))

    errors.extend(validate_coordinates(
        config.map.default_latitude,
        config.map.default_longitude,
        "map.default",
    ))

    if config.map.batch_size < 1:
        errors.append(ValidationError(
            field="map.batch_size",
            message=f"Batch size must be at least 1, got {config.map.batch_size}",
        ))

    if config.map.batch_delay_seconds < 0:
        errors.append(ValidationError(
            field="map.batch_delay_seconds",
            message=f"Batch delay cannot be negative, got {config.map.batch_delay_seconds}",
        ))

    if config.map.fit_padding < 0:
        errors.append(ValidationError(
            field="map.fit_padding",
            message=f"Padding cannot be negative, got {config.map.fit_padding}",
        ))

    if config.lookback_days < 0:
        errors.append(ValidationError(
            field="lookback_days",
            message=f"Lookback days cannot be negative, got {config.lookback_days}",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
