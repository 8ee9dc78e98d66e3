"""Data models for the aurora forecast service."""

import math
from enum import Enum
from collections.abc import Sequence
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from aurora_forecast.forecast.errors import FeedFormatError


class Mode(str, Enum):
    """Selectable chart data source."""
    THREE_DAY = "3day"
    TWENTY_SEVEN_DAY = "27day"


class RawForecastEntry(BaseModel):
    """One row of the three-day Kp forecast feed."""
    model_config = ConfigDict(frozen=True)

    time_tag: str = Field(..., description="UTC timestamp, 'YYYY-MM-DD HH:MM:SS' without zone")
    kp: str = Field(..., description="Kp index as sent by the feed")
    status: str = Field(..., description="observed, estimated or predicted")

    @classmethod
    def from_row(cls, row: Any) -> "RawForecastEntry":
        """Build an entry from a feed row.

        Args:
            row: Sequence of at least [time_tag, kp, status]; extra columns are ignored

        Returns:
            RawForecastEntry for the row

        Raises:
            FeedFormatError: If the row does not have the expected shape
        """
        if isinstance(row, (str, bytes)) or not isinstance(row, Sequence) or len(row) < 3:
            raise FeedFormatError(f"Unexpected three-day row: {row!r}")

        time_tag, kp, status = row[0], row[1], row[2]
        if not isinstance(time_tag, str) or not isinstance(status, str):
            raise FeedFormatError(f"Unexpected three-day row: {row!r}")

        return cls(time_tag=time_tag, kp="" if kp is None else str(kp), status=status)


class ChartSeries(BaseModel):
    """Chart-ready series: one label per data point."""
    model_config = ConfigDict(populate_by_name=True)

    labels: List[str] = Field(default_factory=list, description="Bar labels in display order")
    data_points: List[float] = Field(
        default_factory=list,
        alias="dataPoints",
        description="Kp values; not-a-number values are sent as null"
    )

    @model_validator(mode="after")
    def check_lengths(self) -> "ChartSeries":
        if len(self.labels) != len(self.data_points):
            raise ValueError(
                f"labels ({len(self.labels)}) and dataPoints ({len(self.data_points)}) differ in length"
            )
        return self

    @field_serializer("data_points")
    def serialize_data_points(self, data_points: List[float]) -> List[Optional[float]]:
        return [None if math.isnan(value) else value for value in data_points]

    def __len__(self) -> int:
        return len(self.labels)


class ChartRender(ChartSeries):
    """Render request handed to the chart renderer."""
    mode: Mode = Field(..., description="Data source the series came from")
    colors: List[str] = Field(default_factory=list, description="One bar colour per data point")

    @model_validator(mode="after")
    def check_colors(self) -> "ChartRender":
        if len(self.colors) != len(self.data_points):
            raise ValueError("colors must have one entry per data point")
        return self


class ForecastStatus(BaseModel):
    """Snapshot of the controller state exposed over HTTP."""
    mode: Mode = Field(..., description="Active data source")
    timezone: str = Field(..., description="Timezone used for three-day labels")
    chart: Optional[ChartRender] = Field(None, description="Chart for the active mode, if loaded")
    errors: List[str] = Field(default_factory=list, description="Feed errors from the last load")
    three_day_available: bool = Field(False, description="Three-day series is loaded")
    twenty_seven_day_available: bool = Field(False, description="27-day series is loaded")

