# ABOUTME: Application configuration including location, thresholds and API settings
# ABOUTME: Built once from the environment into frozen dataclasses and passed explicitly

import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv

from surfcal.weather.models import Provider

load_dotenv()

log = logging.getLogger(__name__)


def env_flag(name: str) -> bool:
    """True when the variable is set to 'true', any case"""
    return os.getenv(name, "false").lower() == "true"


# Debug mode, read once at import; drives debug_log and the CLI log level
DEBUG = env_flag("DEBUG")

DEFAULT_PROVIDER_WEIGHTS = {
    Provider.NOAA: 0.70,   # preferred source
    Provider.METEO: 0.15,
    Provider.SG: 0.15,
}


def parse_clock(value: str) -> int:
    """Convert 'HH:MM' to minutes after midnight."""
    try:
        hours, minutes = value.strip().split(":")
        total = int(hours) * 60 + int(minutes)
    except ValueError:
        raise ValueError(f"Invalid time of day {value!r}, expected HH:MM")
    if not 0 <= total <= 24 * 60:
        raise ValueError(f"Time of day out of range: {value!r}")
    return total


def parse_provider_weights(raw: str) -> dict[Provider, float]:
    """
    Parse 'noaa=0.7,meteo=0.15,sg=0.15' into a provider weight table.

    Unknown provider names are ignored with a warning.
    """
    weights: dict[Provider, float] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        name, _, value = item.partition("=")
        try:
            provider = Provider(name.strip().lower())
        except ValueError:
            log.warning(f"Ignoring weight for unknown provider {name!r}")
            continue
        weights[provider] = float(value)
    return weights


@dataclass(frozen=True)
class Location:
    name: str = "Herzliya"
    lat: float = 32.1752
    lon: float = 34.7998
    timezone: str = "Asia/Jerusalem"
    # Protected spot suggested when big south swell meets strong wind
    sheltered_venue: str = "Herzliya Marina"


@dataclass(frozen=True)
class HardRequirements:
    """Thresholds that reject an hour outright"""
    min_wave_height: float = 0.3
    max_wave_height: float = 2.5
    min_wave_period: float = 6.0
    max_wind_speed: float = 8.0


@dataclass(frozen=True)
class OptimalRanges:
    wave_height_min: float = 0.8
    wave_height_max: float = 1.5
    wave_period_min: float = 8.0
    wave_period_max: float = 12.0
    wind_speed_perfect: float = 3.0
    wind_speed_excellent: float = 5.0
    wind_speed_acceptable: float = 8.0


@dataclass(frozen=True)
class QualityWeights:
    # Period matters most: short-period offshore swell is just wind chop
    wave_height: float = 0.30
    wave_period: float = 0.50
    wind_speed: float = 0.15
    wind_direction: float = 0.05

    def total(self) -> float:
        return self.wave_height + self.wave_period + self.wind_speed + self.wind_direction


@dataclass(frozen=True)
class SurfHours:
    """Daily range when surfing is possible, in minutes after midnight"""
    start_minute: int = 6 * 60
    end_minute: int = 18 * 60

    def contains(self, minute_of_day: int) -> bool:
        return self.start_minute <= minute_of_day < self.end_minute


@dataclass(frozen=True)
class Config:
    """Application configuration"""

    location: Location = field(default_factory=Location)
    hard_requirements: HardRequirements = field(default_factory=HardRequirements)
    optimal_ranges: OptimalRanges = field(default_factory=OptimalRanges)
    quality_weights: QualityWeights = field(default_factory=QualityWeights)
    min_quality_score: int = 65
    surf_hours: SurfHours = field(default_factory=SurfHours)
    event_duration_hours: int = 2
    provider_weights: Mapping[Provider, float] = field(
        default_factory=lambda: dict(DEFAULT_PROVIDER_WEIGHTS)
    )

    # Collaborators
    forecast_horizon_hours: int = 48
    stormglass_api_key: str = ""
    calendar_id: str = ""
    service_account_key: str = "./credentials.json"
    cache_file: str = "forecast-cache.json"
    cache_refresh_hours: int = 6
    gemini_api_key: str = ""
    degrade_action: str = "mark"  # "mark" retitles the event, "delete" removes it

    def __post_init__(self):
        # Read-only copy so the frozen config cannot change underneath a run
        object.__setattr__(self, "provider_weights", MappingProxyType(dict(self.provider_weights)))

        if self.surf_hours.end_minute <= self.surf_hours.start_minute:
            raise ValueError(
                f"Surf hours must end after they start, got "
                f"{self.surf_hours.start_minute}-{self.surf_hours.end_minute} minutes"
            )
        if self.event_duration_hours < 1:
            raise ValueError(f"Event duration must be at least 1 hour, got {self.event_duration_hours}")
        if self.degrade_action not in ("mark", "delete"):
            raise ValueError(f"DEGRADE_ACTION must be 'mark' or 'delete', got {self.degrade_action!r}")
        total = self.quality_weights.total()
        if abs(total - 1.0) > 0.001:
            log.warning(f"Quality weights sum to {total:.3f}, expected 1.0 - scores will not span 0-100")

    @classmethod
    def from_env(cls) -> "Config":
        """Build configuration from environment variables (and .env)."""
        load_dotenv()

        location = Location(
            name=os.getenv("LOCATION_NAME", "Herzliya"),
            lat=float(os.getenv("LOCATION_LAT", "32.1752")),
            lon=float(os.getenv("LOCATION_LON", "34.7998")),
            timezone=os.getenv("TIMEZONE", "Asia/Jerusalem"),
            sheltered_venue=os.getenv("SHELTERED_VENUE", "Herzliya Marina"),
        )

        hard_requirements = HardRequirements(
            min_wave_height=float(os.getenv("MIN_WAVE_HEIGHT", "0.3")),
            max_wave_height=float(os.getenv("MAX_WAVE_HEIGHT", "2.5")),
            min_wave_period=float(os.getenv("MIN_WAVE_PERIOD", "6")),
            max_wind_speed=float(os.getenv("MAX_WIND_SPEED", "8")),
        )

        optimal_ranges = OptimalRanges(
            wave_height_min=float(os.getenv("OPTIMAL_WAVE_HEIGHT_MIN", "0.8")),
            wave_height_max=float(os.getenv("OPTIMAL_WAVE_HEIGHT_MAX", "1.5")),
            wave_period_min=float(os.getenv("OPTIMAL_WAVE_PERIOD_MIN", "8")),
            wave_period_max=float(os.getenv("OPTIMAL_WAVE_PERIOD_MAX", "12")),
            wind_speed_perfect=float(os.getenv("OPTIMAL_WIND_SPEED_PERFECT", "3")),
            wind_speed_excellent=float(os.getenv("OPTIMAL_WIND_SPEED_EXCELLENT", "5")),
            wind_speed_acceptable=float(os.getenv("OPTIMAL_WIND_SPEED_ACCEPTABLE", "8")),
        )

        quality_weights = QualityWeights(
            wave_height=float(os.getenv("WEIGHT_WAVE_HEIGHT", "0.30")),
            wave_period=float(os.getenv("WEIGHT_WAVE_PERIOD", "0.50")),
            wind_speed=float(os.getenv("WEIGHT_WIND_SPEED", "0.15")),
            wind_direction=float(os.getenv("WEIGHT_WIND_DIRECTION", "0.05")),
        )

        surf_hours = SurfHours(
            start_minute=parse_clock(os.getenv("SURF_DAY_START", "06:00")),
            end_minute=parse_clock(os.getenv("SURF_DAY_END", "18:00")),
        )

        raw_weights = os.getenv("PROVIDER_WEIGHTS", "")
        provider_weights = parse_provider_weights(raw_weights) if raw_weights else dict(DEFAULT_PROVIDER_WEIGHTS)

        return cls(
            location=location,
            hard_requirements=hard_requirements,
            optimal_ranges=optimal_ranges,
            quality_weights=quality_weights,
            min_quality_score=int(os.getenv("MIN_QUALITY_SCORE", "65")),
            surf_hours=surf_hours,
            event_duration_hours=int(os.getenv("EVENT_DURATION_HOURS", "2")),
            provider_weights=provider_weights,
            forecast_horizon_hours=int(os.getenv("FORECAST_HORIZON_HOURS", "48")),
            stormglass_api_key=os.getenv("STORMGLASS_API_KEY", ""),
            calendar_id=os.getenv("GOOGLE_CALENDAR_ID", ""),
            service_account_key=os.getenv("GOOGLE_SERVICE_ACCOUNT_KEY", "./credentials.json"),
            cache_file=os.getenv("CACHE_FILE", "forecast-cache.json"),
            cache_refresh_hours=int(os.getenv("CACHE_REFRESH_HOURS", "6")),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            degrade_action=os.getenv("DEGRADE_ACTION", "mark").lower(),
        )
