from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from surfcal.cache.manager import CacheManager
from surfcal.calendar.description import wind_direction_text
from surfcal.config import Config
from surfcal.scoring.window import WindowSelector
from surfcal.weather.sources import StormGlassClient, parse_hours


# =============================================================================
# DATA
# =============================================================================
def load_forecast(config):
    """Use the cached forecast if fresh, otherwise fetch one."""
    cache = CacheManager(config.cache_file, refresh_hours=config.cache_refresh_hours)
    forecast = cache.get_forecast()
    if forecast is None:
        client = StormGlassClient(api_key=config.stormglass_api_key)
        forecast = client.fetch_forecast(config.location.lat, config.location.lon)
        cache.set_forecast(forecast)
    return forecast


# =============================================================================
# REPORT
# =============================================================================
def print_hourly_report(config, readings):
    """Print every surf-hours forecast hour with its score, grouped by day."""
    tz = ZoneInfo(config.location.timezone)
    now = datetime.now(timezone.utc)
    selector = WindowSelector(config)

    days = {}
    for reading in readings:
        if reading.time >= now:
            days.setdefault(reading.time.astimezone(tz).date(), []).append(reading)

    for day in sorted(days):
        print("\n" + "=" * 70)
        print(f"📅 {day}")
        print("=" * 70)
        for hour in selector.score_hours(days[day]):
            c = hour.conditions
            verdict = "✅" if selector.scorer.is_acceptable(hour.result) else ("⚠️" if hour.result.valid else "❌")
            print(
                f"{hour.time:%H:%M}  {c.wave_height:4.1f}m @ {c.wave_period:4.1f}s  "
                f"{wind_direction_text(c.wind_direction):>2} {c.wind_speed:4.1f}kts  "
                f"score {hour.result.score:3d} {verdict}"
            )

        window = selector.find_best_window(days[day])
        print("-" * 70)
        print(f"Best window: {window if window else 'none'}")


# =============================================================================
# MAIN
# =============================================================================
if __name__ == "__main__":
    config = Config.from_env()
    print(f"Scoring forecast hours for {config.location.name}...")
    print_hourly_report(config, parse_hours(load_forecast(config)))
