"""Feed query building and validation - Pure functions.

This module turns user input (date range, minimum intensity) into feed
query parameters. All functions are pure with no side effects.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from src.core.config import ValidationError


@dataclass(frozen=True)
class EventQuery:
    """Parameters for one feed query.

    Attributes:
        since_date: First day of the range (inclusive)
        until_date: Last day of the range (inclusive)
        min_intensity_code: Minimum maximum-intensity code (feed units)
    """
    since_date: date
    until_date: date
    min_intensity_code: int = 10


def format_feed_date(value: date) -> str:
    """Format a date as the feed's 8-digit YYYYMMDD form."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def build_feed_params(query: EventQuery, limit: int) -> dict[str, str]:
    """Build URL query parameters for a feed request.

    Pure function. `order=1` asks for newest-first results.

    Args:
        query: Query to encode
        limit: Maximum number of records to request

    Returns:
        Dict of URL query parameters
    """
    return {
        "limit": str(limit),
        "order": "1",
        "since_date": format_feed_date(query.since_date),
        "until_date": format_feed_date(query.until_date),
        "min_scale": str(query.min_intensity_code),
    }


def validate_query(query: EventQuery) -> list[ValidationError]:
    """Validate a query before it is sent.

    Pure function.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if query.since_date > query.until_date:
        errors.append(ValidationError(
            field="since_date",
            message="Start date must be on or before the end date",
        ))

    return errors


def default_date_range(today: date, lookback_days: int = 7) -> tuple[date, date]:
    """Return the (since, until) range shown on initial load."""
    return today - timedelta(days=lookback_days), today


def parse_date_input(text: str) -> date:
    """Parse a YYYY-MM-DD date input value.

    Raises:
        ValueError: If the text is not a valid date
    """
    return datetime.strptime(text.strip(), "%Y-%m-%d").date()


def parse_min_scale(text: str | None, default: int) -> int:
    """Parse the minimum-intensity selector value.

    Raises:
        ValueError: If the text is not an integer code
    """
    if text is None or not text.strip():
        return default
    return int(text.strip())


def query_from_inputs(
    start_text: str | None,
    end_text: str | None,
    min_scale_text: str | None,
    today: date,
    lookback_days: int = 7,
    default_min_intensity_code: int = 10,
) -> EventQuery:
    """Build a query from raw input-field values.

    Pure function. Empty fields fall back to the default date range and
    minimum intensity. Date order is not checked here (see validate_query).

    Raises:
        ValueError: If a field cannot be parsed
    """
    default_since, default_until = default_date_range(today, lookback_days)

    since = parse_date_input(start_text) if start_text else default_since
    until = parse_date_input(end_text) if end_text else default_until

    return EventQuery(
        since_date=since,
        until_date=until,
        min_intensity_code=parse_min_scale(min_scale_text, default_min_intensity_code),
    )
