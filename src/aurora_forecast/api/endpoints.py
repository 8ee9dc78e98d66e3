"""API endpoints for the aurora forecast service."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from aurora_forecast.config import (
    THREE_DAY_URL, TWENTY_SEVEN_DAY_URL, DEFAULT_TIMEZONE, TIMEZONE_CHOICES,
    KP_ACTIVE_THRESHOLD, KP_STORM_THRESHOLD
)
from aurora_forecast.forecast.controller import ForecastController
from aurora_forecast.forecast.models import ForecastStatus, Mode
from aurora_forecast.forecast.severity import SeverityTier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forecast", tags=["forecast"])


def get_controller(request: Request) -> ForecastController:
    """Dependency returning the controller owned by the application."""
    return request.app.state.controller


@router.get("/", response_model=ForecastStatus)
async def get_forecast(controller: ForecastController = Depends(get_controller)) -> ForecastStatus:
    """Get the chart for the active mode along with any feed errors."""
    return controller.status()


@router.post("/mode/{mode}", response_model=ForecastStatus)
async def switch_mode(
    mode: Mode,
    controller: ForecastController = Depends(get_controller)
) -> ForecastStatus:
    """Switch between the three-day and 27-day charts.

    Args:
        mode: '3day' or '27day'

    Returns:
        ForecastStatus with the chart for the new mode
    """
    controller.switch_mode(mode)
    return controller.status()


@router.post("/timezone", response_model=ForecastStatus)
async def set_timezone(
    tz: str = Query(..., description="IANA timezone name, e.g. 'America/New_York'"),
    controller: ForecastController = Depends(get_controller)
) -> ForecastStatus:
    """Relabel the three-day chart for a timezone.

    Raises:
        HTTPException: If the timezone is unknown
    """
    try:
        controller.set_timezone(tz)
    except ValueError as e:
        logger.warning(f"Rejected timezone {tz!r}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return controller.status()


@router.post("/reload", response_model=ForecastStatus)
async def reload_forecast(controller: ForecastController = Depends(get_controller)) -> ForecastStatus:
    """Fetch both feeds again."""
    await controller.load_all()
    status = controller.status()
    logger.info(f"Reloaded forecast with {len(status.errors)} errors")
    return status


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "aurora-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including feeds, timezones and severity tiers
    """
    return {
        "service": "Aurora Kp Forecast Service",
        "version": "0.1.0",
        "feeds": {
            Mode.THREE_DAY.value: THREE_DAY_URL,
            Mode.TWENTY_SEVEN_DAY.value: TWENTY_SEVEN_DAY_URL
        },
        "default_timezone": DEFAULT_TIMEZONE,
        "timezones": TIMEZONE_CHOICES,
        "severity": {
            "storm": {"min_kp": KP_STORM_THRESHOLD, "color": SeverityTier.STORM.color},
            "active": {"min_kp": KP_ACTIVE_THRESHOLD, "color": SeverityTier.ACTIVE.color},
            "quiet": {"min_kp": None, "color": SeverityTier.QUIET.color}
        },
        "data_source": "NOAA Space Weather Prediction Center"
    }
