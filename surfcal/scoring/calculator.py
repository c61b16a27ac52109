# ABOUTME: Core surf quality scoring: hard-requirement gate plus four weighted sub-scores
# ABOUTME: Converts aggregated wave and wind conditions into a 0-100 quality score

import math

from surfcal.config import Config
from surfcal.debug import debug_log
from surfcal.scoring.models import Breakdown, QualityResult, SubScore
from surfcal.weather.models import AggregatedConditions

# Herzliya faces west: wind from 270-360 and 0-90 blows off the land
OFFSHORE_FROM = 270.0
OFFSHORE_TO = 90.0
BEST_OFFSHORE_BEARING = 315.0

REJECTED_REASON = "Does not meet minimum requirements"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class QualityScorer:
    """Calculates 0-100 surf quality scores for one location"""

    def __init__(self, config: Config):
        self.config = config

    def score(self, conditions: AggregatedConditions) -> QualityResult:
        """
        Score conditions for surfing.

        Hours that fail a hard requirement are rejected with score 0 and no
        breakdown. Everything else gets the weighted sum of the four
        sub-scores, rounded to an integer.

        Args:
            conditions: Aggregated conditions for an hour or window

        Returns:
            QualityResult with score, validity and breakdown
        """
        if not self.meets_hard_requirements(conditions):
            debug_log(f"Rejected: {conditions}", "SCORING")
            return QualityResult(score=0, valid=False, reason=REJECTED_REASON)

        wave = self.score_wave_height(conditions.wave_height)
        period = self.score_wave_period(conditions.wave_period, conditions.wave_height)
        wind_speed = self.score_wind_speed(conditions.wind_speed)
        wind_direction = self.score_wind_direction(conditions.wind_direction)

        weights = self.config.quality_weights
        total = (
            wave.score * weights.wave_height
            + period.score * weights.wave_period
            + wind_speed.score * weights.wind_speed
            + wind_direction.score * weights.wind_direction
        )

        # Clamp guards against misconfigured weights summing above 1.0
        score = max(0, min(100, round_half_up(total)))
        debug_log(f"{conditions} -> {score}", "SCORING")

        return QualityResult(
            score=score,
            valid=True,
            breakdown=Breakdown(
                wave_height=wave,
                wave_period=period,
                wind_speed=wind_speed,
                wind_direction=wind_direction,
            ),
        )

    def is_acceptable(self, result: QualityResult) -> bool:
        """True if the result passed the gate and reaches the minimum score"""
        return result.valid and result.score >= self.config.min_quality_score

    def meets_hard_requirements(self, conditions: AggregatedConditions) -> bool:
        thresholds = self.config.hard_requirements

        if conditions.wave_height < thresholds.min_wave_height:
            return False
        if conditions.wave_height > thresholds.max_wave_height:
            return False
        if conditions.wind_speed > thresholds.max_wind_speed:
            return False

        return conditions.wave_period >= self.min_period_for(conditions.wave_height)

    def min_period_for(self, wave_height: float) -> float:
        """
        Minimum acceptable period for a given wave height.

        Swell height is an offshore figure. Short period energy at height is
        wind chop, so taller waves need a longer period to count as swell.
        """
        base_period = self.config.hard_requirements.min_wave_period

        if wave_height < 0.8:
            return max(base_period, 6.0)
        if wave_height < 1.5:
            return max(base_period, 7.0)
        if wave_height < 2.5:
            # Fixed, not base + 2
            return 8.0
        return max(base_period + 4, 10.0)

    def score_wave_height(self, height: float) -> SubScore:
        optimal = self.config.optimal_ranges
        opt_min, opt_max = optimal.wave_height_min, optimal.wave_height_max

        if opt_min <= height <= opt_max:
            return SubScore(100.0, "optimal", f"Ideal height: {height:.1f}m")

        # Above optimum but still good, up to 2.0m
        if opt_max < height <= 2.0:
            score = 100 - ((height - opt_max) / (2.0 - opt_max)) * 20
            return SubScore(max(score, 80.0), "good", f"Good height: {height:.1f}m")

        # Below optimum but still rideable, down to 0.4m
        if 0.4 <= height < opt_min:
            score = 100 - ((opt_min - height) / (opt_min - 0.4)) * 30
            return SubScore(max(score, 70.0), "acceptable", f"Fair height: {height:.1f}m")

        return SubScore(60.0, "minimal", f"Marginal height: {height:.1f}m")

    def score_wave_period(self, period: float, wave_height: float) -> SubScore:
        """
        Longer period means stronger, cleaner waves. A short period can still
        work when the wave is tall enough: powerful but choppy.
        """
        optimal = self.config.optimal_ranges
        opt_min, opt_max = optimal.wave_period_min, optimal.wave_period_max

        if opt_min <= period <= opt_max:
            return SubScore(100.0, "optimal", f"Excellent period: {period:.0f}s")

        if period > opt_max:
            score = 100 - ((period - opt_max) / 5) * 10
            return SubScore(max(score, 85.0), "long", f"Long period: {period:.0f}s")

        if 6 <= period < opt_min:
            progress = (period - 6) / (opt_min - 6)
            if wave_height > 1.0:
                height_bonus = min((wave_height - 1.0) * 20, 15)
                score = 70 + progress * 15 + height_bonus
                return SubScore(
                    min(score, 95.0),
                    "short-but-decent",
                    f"Short period but tall wave: {period:.0f}s",
                )

            score = 60 + progress * 20
            return SubScore(max(score, 60.0), "short", f"Short period: {period:.0f}s")

        if period >= 4:
            if wave_height > 1.5:
                return SubScore(65.0, "very-short-but-high", f"Very short period but tall wave: {period:.0f}s")
            return SubScore(50.0, "minimal", f"Very short period: {period:.0f}s")

        return SubScore(30.0, "poor", f"Poor period: {period:.0f}s")

    def score_wind_speed(self, speed: float) -> SubScore:
        """Lighter wind is better"""
        optimal = self.config.optimal_ranges
        perfect = optimal.wind_speed_perfect
        excellent = optimal.wind_speed_excellent
        acceptable = optimal.wind_speed_acceptable

        if speed <= perfect:
            return SubScore(100.0, "perfect", f"Very light wind: {speed:.0f}kts")

        if speed <= excellent:
            score = 100 - ((speed - perfect) / (excellent - perfect)) * 10
            return SubScore(max(score, 90.0), "excellent", f"Light wind: {speed:.0f}kts")

        if speed <= acceptable:
            score = 90 - ((speed - excellent) / (acceptable - excellent)) * 30
            return SubScore(max(score, 60.0), "acceptable", f"Moderate wind: {speed:.0f}kts")

        return SubScore(40.0, "poor", f"Strong wind: {speed:.0f}kts")

    def score_wind_direction(self, direction: float) -> SubScore:
        """Offshore is best, onshore is worst"""
        # These two bands cover the whole compass; cross-shore stays unreachable
        is_offshore = direction >= OFFSHORE_FROM or direction <= OFFSHORE_TO
        is_onshore = OFFSHORE_TO < direction < OFFSHORE_FROM

        if is_offshore:
            # Straight-line distance, so the 0-90 side sits on the 90 floor
            distance = abs(direction - BEST_OFFSHORE_BEARING)
            score = 100 - (distance / 180) * 10
            return SubScore(max(score, 90.0), "offshore", "Offshore wind (excellent)")

        if is_onshore:
            return SubScore(60.0, "onshore", "Onshore wind (less than ideal)")

        return SubScore(75.0, "cross", "Cross-shore wind")


def score_hour(conditions: AggregatedConditions, config: Config) -> QualityResult:
    """Score one hour's aggregated conditions."""
    return QualityScorer(config).score(conditions)
