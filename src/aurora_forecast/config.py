"""Configuration settings for the aurora forecast service."""

import os
from typing import Final, List
from dotenv import load_dotenv

load_dotenv()

# SWPC feed configuration
THREE_DAY_URL: str = os.getenv(
    "THREE_DAY_URL",
    "https://services.swpc.noaa.gov/products/noaa-planetary-k-index-forecast.json"
)
TWENTY_SEVEN_DAY_URL: str = os.getenv(
    "TWENTY_SEVEN_DAY_URL",
    "https://services.swpc.noaa.gov/text/27-day-outlook.txt"
)
USER_AGENT: Final[str] = "AuroraForecastService/0.1 (user@example.com)"
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

# Timezone settings
DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")
TIMEZONE_CHOICES: Final[List[str]] = [
    "UTC",
    "America/New_York",
    "America/Chicago",
    "America/Denver",
    "America/Los_Angeles",
    "America/Anchorage",
    "Europe/London",
    "Europe/Oslo",
    "Europe/Belgrade",
    "Asia/Tokyo",
    "Australia/Sydney",
]

# Kp severity thresholds
KP_STORM_THRESHOLD: Final[float] = 5.0
KP_ACTIVE_THRESHOLD: Final[float] = 4.0

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "8000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOAD_ON_STARTUP: bool = os.getenv("LOAD_ON_STARTUP", "true").lower() == "true"
