"""Parsers turning the SWPC feeds into chart series."""

import logging
import math
import re
import zoneinfo
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from aurora_forecast.forecast.errors import FeedFormatError
from aurora_forecast.forecast.models import ChartSeries, RawForecastEntry

logger = logging.getLogger(__name__)

OBSERVED_STATUS = "observed"

# A 27-day data row starts with the year
DATA_ROW_PATTERN = re.compile(r"^[0-9]{4}")
KP_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")
KP_DECIMAL_PATTERN = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
MIN_DATA_ROW_TOKENS = 6


def filter_forecast_rows(rows: List[Any]) -> List[RawForecastEntry]:
    """Convert three-day feed rows to entries, dropping the header and observed rows.

    Args:
        rows: Decoded JSON array; row 0 is the column header

    Returns:
        Estimated and predicted entries in feed order

    Raises:
        FeedFormatError: If a data row does not have the expected shape
    """
    if not isinstance(rows, list):
        raise FeedFormatError(f"Expected a JSON array, got {type(rows).__name__}")

    entries = []
    for row in rows[1:]:
        entry = RawForecastEntry.from_row(row)
        if entry.status != OBSERVED_STATUS:
            entries.append(entry)

    logger.info(f"Kept {len(entries)} of {max(len(rows) - 1, 0)} three-day rows")
    return entries


def resolve_timezone(timezone_str: str) -> zoneinfo.ZoneInfo:
    """Look up an IANA timezone.

    Raises:
        ValueError: If the timezone name is unknown
    """
    try:
        return zoneinfo.ZoneInfo(timezone_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError, TypeError) as e:
        raise ValueError(f"Unknown timezone: {timezone_str!r}") from e


def parse_kp(value: str) -> float:
    """Parse a Kp value, returning NaN for anything that is not a plain decimal number."""
    if isinstance(value, str) and KP_DECIMAL_PATTERN.match(value.strip()):
        return float(value)

    logger.warning(f"Malformed Kp value {value!r}, keeping it as NaN")
    return math.nan


def format_three_day_label(time_tag: str, tz: zoneinfo.ZoneInfo) -> str:
    """Format a UTC feed timestamp as 'Mon D\\nHH:MM' in the given timezone.

    Args:
        time_tag: Timestamp 'YYYY-MM-DD HH:MM:SS' in UTC
        tz: Target timezone

    Returns:
        Chart label, e.g. 'Jan 1\\n00:00'

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    utc_time = datetime.fromisoformat(time_tag)
    if utc_time.tzinfo is None:
        utc_time = utc_time.replace(tzinfo=timezone.utc)

    local_time = utc_time.astimezone(tz)
    return f"{local_time.strftime('%b')} {local_time.day}\n{local_time.strftime('%H:%M')}"


def parse_three_day(
    entries: Optional[Iterable[RawForecastEntry]],
    timezone_str: str
) -> Optional[ChartSeries]:
    """Build the three-day chart series for a timezone.

    Args:
        entries: Filtered forecast entries, or None when nothing was fetched yet
        timezone_str: IANA timezone used for the labels

    Returns:
        ChartSeries in feed order, or None if there is no data

    Raises:
        ValueError: If the timezone or a timestamp is invalid
    """
    if entries is None:
        return None

    tz = resolve_timezone(timezone_str)

    labels = []
    data_points = []
    for entry in entries:
        if entry.status == OBSERVED_STATUS:
            continue
        labels.append(format_three_day_label(entry.time_tag, tz))
        data_points.append(parse_kp(entry.kp))

    return ChartSeries(labels=labels, data_points=data_points)


def parse_twenty_seven_day(text: str) -> ChartSeries:
    """Build the 27-day chart series from the outlook report.

    Only lines starting with a year are data rows; headers, comments and
    blank lines are skipped. Data rows with fewer than six columns are
    dropped without error.

    Args:
        text: Raw text of the 27-day outlook

    Returns:
        ChartSeries in file order
    """
    labels = []
    data_points = []
    skipped = 0

    for line in text.split("\n"):
        trimmed = line.strip()
        if not DATA_ROW_PATTERN.match(trimmed):
            continue

        # Year Month Day Flux A-index Kp
        parts = trimmed.split()
        if len(parts) < MIN_DATA_ROW_TOKENS:
            skipped += 1
            continue

        labels.append(f"{parts[1]} {parts[2]}")
        if KP_INTEGER_PATTERN.match(parts[5]):
            data_points.append(int(parts[5]))
        else:
            logger.warning(f"Malformed Kp value {parts[5]!r} in 27-day row, keeping it as NaN")
            data_points.append(math.nan)

    if skipped:
        logger.debug(f"Dropped {skipped} short 27-day rows")
    logger.info(f"Parsed {len(labels)} 27-day rows")
    return ChartSeries(labels=labels, data_points=data_points)
