# ABOUTME: Titles and description text for surf window calendar events
# ABOUTME: Also reads an existing event's title back into its good/degraded state

import re
from typing import Optional

from surfcal.calendar.reconciler import EventState
from surfcal.scoring.recommender import METERS_TO_FEET, Recommendation
from surfcal.weather.models import SurfWindow

# Every event we own has this in its title
EVENT_MARKER = "surf window"
DEGRADED_MARKER = "conditions weakened"
DEGRADED_TITLE = "Surf window - conditions weakened"

COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]

DISCLAIMER = "Automatic forecast. Conditions may change.\nCheck the sea before going in."

_WAVE_LINE = re.compile(r"Wave height: [\d.]+ m[^\n]*")


def good_title(location_name: str) -> str:
    return f"Good surf window - {location_name}"


def wind_direction_text(degrees: float) -> str:
    """8-point compass name for a bearing"""
    return COMPASS_POINTS[int(round(degrees / 45)) % 8]


def wind_assessment(degrees: float) -> str:
    if degrees >= 270 or degrees <= 90:
        return "offshore"
    return "onshore"


def is_surf_event(summary: Optional[str]) -> bool:
    return bool(summary) and EVENT_MARKER in summary.lower()


def event_state(summary: Optional[str]) -> EventState:
    """Read the good/degraded state back from an event title"""
    if not is_surf_event(summary):
        return EventState.NONE
    if DEGRADED_MARKER in summary.lower():
        return EventState.DEGRADED
    return EventState.GOOD


def build_description(
    window: SurfWindow,
    location_name: str,
    recommendation: Recommendation,
    timestamp: str,
    note: Optional[str] = None,
) -> str:
    """
    Description for a good surf window event.

    Args:
        window: Selected window
        location_name: Spot name for the heading
        recommendation: Skill-level recommendation for the window
        timestamp: Human-readable "last updated" stamp
        note: Optional extra line (e.g. LLM session note)

    Returns:
        Multi-line description text
    """
    lines = [
        f"Good surf window at {location_name}",
        "",
        f"{recommendation.emoji} {recommendation.label}: {recommendation.recommendation}",
        f"Who: {recommendation.audience}",
        "",
        "Forecast:",
        f"• Wave height: {window.wave_height:.1f} m ({window.wave_height * METERS_TO_FEET:.1f} ft)",
        f"• Period: {round(window.wave_period)} s",
        f"• Wind: {wind_direction_text(window.wind_direction)} {round(window.wind_speed)} kts "
        f"({wind_assessment(window.wind_direction)})",
    ]
    if window.score is not None:
        lines.append(f"• Quality score: {window.score}/100")
    lines.append(f"• Last updated: {timestamp}")

    if note:
        lines.extend(["", note])

    lines.extend(["", DISCLAIMER])
    return "\n".join(lines)


def build_degraded_description(previous_description: Optional[str], timestamp: str) -> str:
    """Description for an event whose conditions dropped below the threshold"""
    match = _WAVE_LINE.search(previous_description or "")
    last_forecast = f"Last forecast: {match.group(0)}" if match else "Previous forecast data not available"

    return "\n".join([
        "Conditions dropped below the required threshold",
        "",
        last_forecast,
        "",
        f"Forecast updated: {timestamp}",
        "",
        DISCLAIMER,
    ])
