"""Controller owning the selected mode, timezone and loaded series."""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from aurora_forecast.config import DEFAULT_TIMEZONE
from aurora_forecast.forecast.client import SwpcClient
from aurora_forecast.forecast.errors import FeedError
from aurora_forecast.forecast.models import (
    ChartRender, ChartSeries, ForecastStatus, Mode, RawForecastEntry
)
from aurora_forecast.forecast.parsers import (
    filter_forecast_rows, parse_three_day, parse_twenty_seven_day, resolve_timezone
)
from aurora_forecast.forecast.severity import series_colors

logger = logging.getLogger(__name__)

THREE_DAY_ERROR = "Error fetching 3-Day Forecast"
TWENTY_SEVEN_DAY_ERROR = "Error fetching 27-Day Forecast"
NO_DATA_ERROR = "Could not load forecast data."


@dataclass
class ForecastState:
    """Everything the controller knows between user actions."""
    mode: Mode = Mode.THREE_DAY
    timezone: str = DEFAULT_TIMEZONE
    raw_three_day: Optional[List[RawForecastEntry]] = None
    three_day: Optional[ChartSeries] = None
    twenty_seven_day: Optional[ChartSeries] = None
    errors: List[str] = field(default_factory=list)

    def series_for(self, mode: Mode) -> Optional[ChartSeries]:
        if mode == Mode.THREE_DAY:
            return self.three_day
        return self.twenty_seven_day


class ForecastController:
    """Loads both feeds and answers mode and timezone changes with render requests."""

    def __init__(self, client: Optional[SwpcClient] = None, state: Optional[ForecastState] = None):
        """Initialize the controller.

        Args:
            client: Feed client (creates default if None)
            state: Initial state (fresh state if None)
        """
        self.client = client or SwpcClient()
        self.state = state or ForecastState()

    async def load_all(self) -> Optional[ChartRender]:
        """Fetch both feeds concurrently and rebuild both series.

        A failing feed records its error and leaves its series absent
        without affecting the other feed.

        Returns:
            Render request for the active mode, or None if it has no data
        """
        self.state.errors = []

        three_day, twenty_seven_day = await asyncio.gather(
            self._load_three_day(),
            self._load_twenty_seven_day()
        )
        self.state.three_day = three_day
        self.state.twenty_seven_day = twenty_seven_day

        render = self.render()
        if render is None:
            self.state.errors.append(NO_DATA_ERROR)
        return render

    async def _load_three_day(self) -> Optional[ChartSeries]:
        try:
            rows = await self.client.get_three_day_forecast()
            entries = filter_forecast_rows(rows)
            series = parse_three_day(entries, self.state.timezone)
        except (FeedError, ValueError) as e:
            logger.error(f"Three-day forecast failed: {e}")
            self.state.errors.append(f"{THREE_DAY_ERROR}: {e}")
            return None

        self.state.raw_three_day = entries
        self._warn_on_nan(series, Mode.THREE_DAY)
        return series

    async def _load_twenty_seven_day(self) -> Optional[ChartSeries]:
        try:
            text = await self.client.get_twenty_seven_day_outlook()
            series = parse_twenty_seven_day(text)
        except (FeedError, ValueError) as e:
            logger.error(f"27-day forecast failed: {e}")
            self.state.errors.append(f"{TWENTY_SEVEN_DAY_ERROR}: {e}")
            return None

        self._warn_on_nan(series, Mode.TWENTY_SEVEN_DAY)
        return series

    def switch_mode(self, mode: Mode) -> Optional[ChartRender]:
        """Make a mode active and render its already loaded series.

        Returns:
            Render request, or None if that mode has no data
        """
        self.state.mode = Mode(mode)
        logger.info(f"Switched to {self.state.mode.value} mode")
        return self.render()

    def set_timezone(self, timezone_str: str) -> Optional[ChartRender]:
        """Relabel the cached three-day data for a new timezone.

        Args:
            timezone_str: IANA timezone name

        Returns:
            Render request when the three-day chart is showing, otherwise None

        Raises:
            ValueError: If the timezone is unknown
        """
        resolve_timezone(timezone_str)
        self.state.timezone = timezone_str
        logger.info(f"Timezone set to {timezone_str}")

        if self.state.raw_three_day is None:
            return None

        self.state.three_day = parse_three_day(self.state.raw_three_day, timezone_str)
        if self.state.mode == Mode.THREE_DAY:
            return self.render()
        return None

    def render(self, mode: Optional[Mode] = None) -> Optional[ChartRender]:
        """Build the render request for a mode (the active one by default)."""
        mode = Mode(mode) if mode is not None else self.state.mode
        series = self.state.series_for(mode)
        if series is None:
            return None

        return ChartRender(
            mode=mode,
            labels=series.labels,
            data_points=series.data_points,
            colors=series_colors(series)
        )

    def status(self) -> ForecastStatus:
        """Snapshot of the current state."""
        return ForecastStatus(
            mode=self.state.mode,
            timezone=self.state.timezone,
            chart=self.render(),
            errors=list(self.state.errors),
            three_day_available=self.state.three_day is not None,
            twenty_seven_day_available=self.state.twenty_seven_day is not None
        )

    def _warn_on_nan(self, series: ChartSeries, mode: Mode):
        missing = sum(1 for value in series.data_points if math.isnan(value))
        if missing:
            logger.warning(f"{missing} of {len(series)} {mode.value} Kp values are not numbers")

    async def aclose(self):
        """Close the feed client."""
        try:
            await self.client.aclose()
        except Exception as e:
            logger.error(f"Error closing feed client: {e}")
