# ABOUTME: Skill-level and venue recommendations based on wave height and wind
# ABOUTME: Feeds human-readable event text only, never the score or calendar decision

from dataclasses import dataclass

from surfcal.weather.models import SurfWindow

METERS_TO_FEET = 3.28


@dataclass(frozen=True)
class Recommendation:
    level: str
    label: str
    emoji: str
    recommendation: str
    audience: str


class SurfRecommender:
    """Recommends who should paddle out, and where"""

    def __init__(self, sheltered_venue: str = "the marina"):
        self.sheltered_venue = sheltered_venue

    def classify(self, wave_height_m: float, wind_speed_kts: float, wind_direction_deg: float) -> Recommendation:
        """
        Classify conditions by wave height in feet and wind.

        Args:
            wave_height_m: Wave height in meters
            wind_speed_kts: Wind speed in knots
            wind_direction_deg: Direction the wind blows from

        Returns:
            Recommendation for the description text
        """
        height_ft = wave_height_m * METERS_TO_FEET

        # Big swell with strong wind: only a sheltered spot works, and only
        # when the wind is southerly
        if height_ft > 8 and wind_speed_kts > 15:
            if 135 <= wind_direction_deg <= 225:
                return Recommendation(
                    level="extreme-sheltered",
                    label="Extreme - sheltered spot only",
                    emoji="🌊⚠️",
                    recommendation=(
                        f"Extreme conditions! Try {self.sheltered_venue}, "
                        f"it is better protected in a southerly wind"
                    ),
                    audience=f"Experienced surfers only - {self.sheltered_venue}",
                )
            return Recommendation(
                level="extreme",
                label="Extreme",
                emoji="⚠️",
                recommendation="Extreme conditions! Surfing not recommended",
                audience="Dangerous - not recommended",
            )

        if height_ft > 5:
            return Recommendation(
                level="advanced",
                label="Advanced",
                emoji="🏄‍♂️",
                recommendation="Big waves - suited to advanced surfers",
                audience="Advanced surfers",
            )

        if 3 <= height_ft <= 5:
            return Recommendation(
                level="optimal",
                label="Ideal",
                emoji="✨",
                recommendation="Excellent conditions! Ideal wave height for most surfers",
                audience="All levels",
            )

        if height_ft < 3:
            return Recommendation(
                level="beginner-friendly",
                label="Beginner friendly",
                emoji="🌊",
                recommendation="Small waves - bring a board with volume (longboard/funboard)",
                audience="Beginners and intermediates - take volume",
            )

        # Only reachable for NaN heights
        return Recommendation(
            level="moderate",
            label="Moderate",
            emoji="🏄",
            recommendation="Reasonable surf conditions",
            audience="Most surfers",
        )

    def classify_window(self, window: SurfWindow) -> Recommendation:
        return self.classify(window.wave_height, window.wind_speed, window.wind_direction)
