"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from aurora_forecast.forecast.client import SwpcClient

FIXTURE_DIR = Path(__file__).parent / "fixtures"

THREE_DAY_URL = "https://test-swpc.example.com/products/noaa-planetary-k-index-forecast.json"
TWENTY_SEVEN_DAY_URL = "https://test-swpc.example.com/text/27-day-outlook.txt"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def three_day_rows() -> list:
    """Three-day feed rows including the header row."""
    with open(FIXTURE_DIR / "kp_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def outlook_text() -> str:
    """27-day outlook report text."""
    return (FIXTURE_DIR / "27-day-outlook.txt").read_text()


@pytest.fixture
async def swpc_client():
    """Feed client pointed at the mocked test host."""
    client = SwpcClient(
        three_day_url=THREE_DAY_URL,
        twenty_seven_day_url=TWENTY_SEVEN_DAY_URL,
        timeout=5.0
    )
    yield client
    await client.aclose()
