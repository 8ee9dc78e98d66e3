"""Kp severity tiers and bar colours."""

from enum import Enum
from typing import List

from aurora_forecast.config import KP_ACTIVE_THRESHOLD, KP_STORM_THRESHOLD
from aurora_forecast.forecast.models import ChartSeries


class SeverityTier(str, Enum):
    """Geomagnetic activity tier with its bar colour."""
    QUIET = "#39ff14"
    ACTIVE = "#ffcc00"
    STORM = "#ff3333"

    @property
    def color(self) -> str:
        return self.value


def kp_tier(kp: float) -> SeverityTier:
    """Map a Kp value to its tier.

    NaN fails both comparisons and falls into the quiet tier.
    """
    if kp >= KP_STORM_THRESHOLD:
        return SeverityTier.STORM
    if kp >= KP_ACTIVE_THRESHOLD:
        return SeverityTier.ACTIVE
    return SeverityTier.QUIET


def kp_color(kp: float) -> str:
    """Bar colour for a Kp value."""
    return kp_tier(kp).color


def series_colors(series: ChartSeries) -> List[str]:
    """One bar colour per data point, in series order."""
    return [kp_color(value) for value in series.data_points]
