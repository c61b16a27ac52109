# ABOUTME: Data models for hourly forecasts, aggregated conditions and surf windows
# ABOUTME: Provides structured representation of per-provider wave and wind data

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional


class Provider(str, Enum):
    """Forecast providers reported by Storm Glass"""
    NOAA = "noaa"
    METEO = "meteo"
    SG = "sg"


@dataclass(frozen=True)
class HourlyReading:
    """One forecast hour, each metric keyed by provider"""
    time: datetime
    wave_height: Mapping[Provider, float] = field(default_factory=dict)   # meters
    wave_period: Mapping[Provider, float] = field(default_factory=dict)   # seconds
    wind_speed: Mapping[Provider, float] = field(default_factory=dict)    # knots
    wind_direction: Mapping[Provider, float] = field(default_factory=dict)  # degrees, blowing from


@dataclass(frozen=True)
class AggregatedConditions:
    """Single representative values for an hour or a window"""
    wave_height: float
    wave_period: float
    wind_speed: float
    wind_direction: float

    @property
    def wave_height_ft(self) -> float:
        return self.wave_height * 3.28

    def __str__(self) -> str:
        return (
            f"Waves: {self.wave_height:.1f}m @ {self.wave_period:.0f}s, "
            f"Wind: {self.wind_speed:.0f}kts from {self.wind_direction:.0f}°"
        )


@dataclass(frozen=True)
class SurfWindow:
    """Best contiguous block of hours for a day"""
    wave_height: float
    wave_period: float
    wind_speed: float
    wind_direction: float
    start_time: datetime
    end_time: datetime
    hour_count: int
    score: Optional[int] = None

    @property
    def conditions(self) -> AggregatedConditions:
        return AggregatedConditions(
            wave_height=self.wave_height,
            wave_period=self.wave_period,
            wind_speed=self.wind_speed,
            wind_direction=self.wind_direction,
        )

    def __str__(self) -> str:
        return (
            f"{self.start_time:%H:%M}-{self.end_time:%H:%M} "
            f"{self.wave_height:.1f}m @ {self.wave_period:.0f}s, "
            f"{self.wind_speed:.0f}kts from {self.wind_direction:.0f}°"
        )
