# ABOUTME: Data models for surf quality scores and their per-factor breakdown
# ABOUTME: Provides structured representation of sub-scores and scored hours

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from surfcal.weather.models import AggregatedConditions


@dataclass(frozen=True)
class SubScore:
    """Score for a single factor"""
    score: float  # 0-100
    category: str
    description: str


@dataclass(frozen=True)
class Breakdown:
    wave_height: SubScore
    wave_period: SubScore
    wind_speed: SubScore
    wind_direction: SubScore


@dataclass(frozen=True)
class QualityResult:
    """Overall surf quality for an hour or window"""
    score: int  # 0-100
    valid: bool
    breakdown: Optional[Breakdown] = None
    reason: Optional[str] = None

    def __post_init__(self):
        if not 0 <= self.score <= 100:
            raise ValueError(f"Score must be 0-100, got {self.score}")
        if not self.valid and (self.score != 0 or self.breakdown is not None):
            raise ValueError("Rejected conditions must have score 0 and no breakdown")


@dataclass(frozen=True)
class ScoredHour:
    time: datetime
    conditions: AggregatedConditions
    result: QualityResult
