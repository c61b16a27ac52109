# ABOUTME: Collapses per-provider forecast values into one value per metric
# ABOUTME: Weighted mean for wave/wind speed metrics, first reported value for direction

from typing import Any, Mapping, Optional

from surfcal.weather.models import AggregatedConditions, HourlyReading, Provider


def weighted_average(values: Mapping[Any, Any], weights: Mapping[Provider, float]) -> float:
    """
    Weighted mean of provider values.

    Providers missing from the weights table, and values that are not numbers,
    contribute nothing. Returns 0.0 when no weight is available.

    Args:
        values: {provider: value} for one metric of one hour
        weights: {provider: weight}

    Returns:
        sum(value * weight) / sum(weight), or 0.0
    """
    weighted_sum = 0.0
    total_weight = 0.0

    for key, value in values.items():
        provider = to_provider(key)
        if provider is None or provider not in weights:
            continue
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            continue
        weight = weights[provider]
        weighted_sum += value * weight
        total_weight += weight

    return weighted_sum / total_weight if total_weight > 0 else 0.0


def first_value(values: Mapping[Any, Any]) -> float:
    """First numeric provider value, used verbatim for wind direction"""
    for value in values.values():
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return 0.0


def to_provider(key: Any) -> Optional[Provider]:
    """Map a raw provider key onto the Provider enum, None if unknown"""
    if isinstance(key, Provider):
        return key
    try:
        return Provider(str(key).lower())
    except ValueError:
        return None


def aggregate_reading(reading: HourlyReading, weights: Mapping[Provider, float]) -> AggregatedConditions:
    """Aggregate one forecast hour into single wave and wind values."""
    return AggregatedConditions(
        wave_height=weighted_average(reading.wave_height, weights),
        wave_period=weighted_average(reading.wave_period, weights),
        wind_speed=weighted_average(reading.wind_speed, weights),
        wind_direction=first_value(reading.wind_direction),
    )
