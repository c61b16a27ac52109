# ABOUTME: Storm Glass API client for hourly multi-provider marine forecasts
# ABOUTME: Fetches the raw payload and parses it into HourlyReading objects

import logging
from datetime import datetime
from typing import Any, Optional

import requests

from surfcal.debug import debug_log
from surfcal.scoring.aggregator import to_provider
from surfcal.weather.models import HourlyReading, Provider

log = logging.getLogger(__name__)

MS_TO_KNOTS = 1.943844


class StormGlassClient:
    """Client for fetching point forecasts from Storm Glass"""

    BASE_URL = "https://api.stormglass.io/v2/weather/point"
    PARAMS = "swellHeight,swellPeriod,windSpeed,windDirection"

    def __init__(self, api_key: str, timeout: int = 30):
        if not api_key:
            raise ValueError("STORMGLASS_API_KEY is not set")
        self.api_key = api_key
        self.timeout = timeout

    def fetch_forecast(self, lat: float, lon: float) -> dict:
        """
        Fetch the hourly forecast for given coordinates

        Args:
            lat: Latitude
            lon: Longitude

        Returns:
            Raw Storm Glass payload ({"hours": [...], "meta": {...}})
        """
        params = {"lat": lat, "lng": lon, "params": self.PARAMS}
        headers = {"Authorization": self.api_key}

        try:
            response = requests.get(self.BASE_URL, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            log.error(f"Storm Glass request failed for {lat},{lon}: {e}")
            raise

        data = response.json()
        debug_log(f"Fetched {len(data.get('hours', []))} forecast hours", "FORECAST")
        return data


def parse_hours(payload: dict) -> list[HourlyReading]:
    """
    Parse a Storm Glass payload into readings ordered by time.

    Hours without a parseable timestamp are skipped. Wind speed is converted
    from m/s to knots.
    """
    readings = []
    for hour in payload.get("hours", []):
        timestamp = _parse_time(hour.get("time"))
        if timestamp is None:
            debug_log(f"Skipping hour with bad timestamp: {hour.get('time')!r}", "FORECAST")
            continue

        readings.append(HourlyReading(
            time=timestamp,
            wave_height=_provider_values(hour.get("swellHeight")),
            wave_period=_provider_values(hour.get("swellPeriod")),
            wind_speed=_provider_values(hour.get("windSpeed"), scale=MS_TO_KNOTS),
            wind_direction=_provider_values(hour.get("windDirection")),
        ))

    readings.sort(key=lambda r: r.time)
    return readings


def _parse_time(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def _provider_values(raw: Any, scale: float = 1.0) -> dict[Provider, float]:
    """Keep numeric values from known providers, preserving payload order"""
    if not isinstance(raw, dict):
        return {}

    values = {}
    for key, value in raw.items():
        provider = to_provider(key)
        if provider is None:
            continue
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            continue
        values[provider] = float(value) * scale
    return values
