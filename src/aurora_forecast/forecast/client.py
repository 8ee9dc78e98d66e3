"""HTTP client for the NOAA SWPC forecast feeds."""

import logging
from typing import Any, List

import httpx

from aurora_forecast.config import (
    THREE_DAY_URL, TWENTY_SEVEN_DAY_URL, USER_AGENT, REQUEST_TIMEOUT_SECONDS
)
from aurora_forecast.forecast.errors import FeedFormatError, FeedUnavailableError

logger = logging.getLogger(__name__)


class SwpcClient:
    """Async client for the three-day and 27-day Kp forecast feeds."""

    def __init__(
        self,
        three_day_url: str = THREE_DAY_URL,
        twenty_seven_day_url: str = TWENTY_SEVEN_DAY_URL,
        user_agent: str = USER_AGENT,
        timeout: float = REQUEST_TIMEOUT_SECONDS
    ):
        """Initialize the feed client.

        Args:
            three_day_url: URL of the three-day Kp forecast JSON product
            twenty_seven_day_url: URL of the 27-day outlook text product
            user_agent: User-Agent header for feed requests
            timeout: Request timeout in seconds
        """
        self.three_day_url = three_day_url
        self.twenty_seven_day_url = twenty_seven_day_url
        self.user_agent = user_agent
        self.client = httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=timeout
        )

    async def _get(self, url: str) -> httpx.Response:
        """Issue a GET and fail on transport errors or non-success status.

        Raises:
            FeedUnavailableError: If the feed cannot be reached or answers with an error status
        """
        logger.info(f"Fetching {url}")

        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from {url}: {e.response.status_code}")
            raise FeedUnavailableError(f"HTTP {e.response.status_code} from {url}") from e
        except httpx.RequestError as e:
            logger.error(f"Request error to {url}: {e}")
            raise FeedUnavailableError(f"Could not reach {url}: {e}") from e

    async def get_three_day_forecast(self) -> List[Any]:
        """Fetch the three-day Kp forecast.

        Returns:
            Decoded JSON array; the first row is the column header

        Raises:
            FeedUnavailableError: If the request fails
            FeedFormatError: If the body is not a JSON array
        """
        response = await self._get(self.three_day_url)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Three-day feed is not valid JSON: {e}")
            raise FeedFormatError("Three-day feed is not valid JSON") from e

        if not isinstance(data, list):
            raise FeedFormatError(f"Three-day feed is a {type(data).__name__}, expected an array")

        logger.info(f"Fetched three-day forecast with {len(data)} rows")
        return data

    async def get_twenty_seven_day_outlook(self) -> str:
        """Fetch the 27-day outlook report.

        Returns:
            Report text

        Raises:
            FeedUnavailableError: If the request fails
        """
        response = await self._get(self.twenty_seven_day_url)
        logger.info(f"Fetched 27-day outlook ({len(response.text)} characters)")
        return response.text

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
