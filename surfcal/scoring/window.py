# ABOUTME: Finds the best surfable window of the configured length within a day
# ABOUTME: Scores each hour, then grows windows around the best hours until one fully passes

import logging
from datetime import datetime, time, timedelta
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from surfcal.config import Config
from surfcal.debug import debug_log
from surfcal.scoring.aggregator import aggregate_reading
from surfcal.scoring.calculator import QualityScorer, round_half_up
from surfcal.scoring.models import ScoredHour
from surfcal.weather.models import AggregatedConditions, HourlyReading, SurfWindow

log = logging.getLogger(__name__)

# Best hour sits roughly a third of the way into the window
LEAD_TIME = timedelta(hours=1)


class WindowSelector:
    """Selects the best multi-hour surf window for a day"""

    def __init__(self, config: Config, scorer: Optional[QualityScorer] = None):
        self.config = config
        self.scorer = scorer or QualityScorer(config)
        self.tz = ZoneInfo(config.location.timezone)
        self.duration = timedelta(hours=config.event_duration_hours)

    def score_hours(self, day_hours: Sequence[HourlyReading]) -> list[ScoredHour]:
        """Aggregate and score every hour inside the daily surf hours."""
        scored = []
        for reading in day_hours:
            local_time = reading.time.astimezone(self.tz)
            if not self.config.surf_hours.contains(local_time.hour * 60 + local_time.minute):
                continue

            conditions = aggregate_reading(reading, self.config.provider_weights)
            scored.append(ScoredHour(
                time=local_time,
                conditions=conditions,
                result=self.scorer.score(conditions),
            ))
        return scored

    def find_best_window(self, day_hours: Sequence[HourlyReading]) -> Optional[SurfWindow]:
        """
        Find the best window for one day.

        Candidates are tried from highest score down (earliest first on ties).
        A candidate must be acceptable on its own; its window must fit inside
        the surf hours at full length and every hour in it must pass the hard
        requirements.

        Args:
            day_hours: Forecast hours for a single local day, any order

        Returns:
            SurfWindow with averaged conditions, or None if nothing qualifies
        """
        scored = self.score_hours(day_hours)
        if not scored:
            debug_log("No hours inside surf hours", "WINDOW")
            return None

        candidates = sorted(scored, key=lambda h: (-h.result.score, h.time))

        for candidate in candidates:
            if not self.scorer.is_acceptable(candidate.result):
                continue

            built = self._build_window(candidate, scored)
            if built is None:
                continue

            window = self._summarize(*built)
            log.info(f"Best window {window} (candidate {candidate.time:%H:%M} scored {candidate.result.score})")
            return window

        debug_log(f"No acceptable window among {len(scored)} hours", "WINDOW")
        return None

    def _build_window(self, candidate: ScoredHour, scored: Sequence[ScoredHour]):
        """(start, end, hours) of the window around a candidate, or None if it cannot be used."""
        day_start, day_end = self._surf_bounds(candidate.time)

        ideal_start = candidate.time - LEAD_TIME
        start = max(ideal_start, day_start)
        end = min(ideal_start + self.duration, day_end)

        if end - start < self.duration:
            debug_log(f"Window for {candidate.time:%H:%M} clipped to {start:%H:%M}-{end:%H:%M}", "WINDOW")
            return None

        window_hours = sorted(
            (h for h in scored if start <= h.time < end),
            key=lambda h: h.time,
        )

        if len(window_hours) != self.config.event_duration_hours:
            debug_log(f"Window {start:%H:%M}-{end:%H:%M} has {len(window_hours)} forecast hours", "WINDOW")
            return None

        if not all(h.result.valid for h in window_hours):
            debug_log(f"Window {start:%H:%M}-{end:%H:%M} contains a rejected hour", "WINDOW")
            return None

        return start, end, window_hours

    def _surf_bounds(self, moment: datetime) -> tuple[datetime, datetime]:
        midnight = datetime.combine(moment.date(), time(0, 0), tzinfo=self.tz)
        hours = self.config.surf_hours
        return (
            midnight + timedelta(minutes=hours.start_minute),
            midnight + timedelta(minutes=hours.end_minute),
        )

    def _summarize(self, start: datetime, end: datetime, window_hours: Sequence[ScoredHour]) -> SurfWindow:
        count = len(window_hours)
        conditions = AggregatedConditions(
            wave_height=sum(h.conditions.wave_height for h in window_hours) / count,
            wave_period=sum(h.conditions.wave_period for h in window_hours) / count,
            wind_speed=sum(h.conditions.wind_speed for h in window_hours) / count,
            wind_direction=window_hours[0].conditions.wind_direction,
        )

        return SurfWindow(
            wave_height=conditions.wave_height,
            wave_period=conditions.wave_period,
            wind_speed=conditions.wind_speed,
            wind_direction=conditions.wind_direction,
            start_time=start,
            end_time=end,
            hour_count=count,
            score=self._window_score(conditions, window_hours),
        )

    def _window_score(self, conditions: AggregatedConditions, window_hours: Sequence[ScoredHour]) -> int:
        """Score of the averaged conditions, or the mean hourly score when the average fails the gate."""
        result = self.scorer.score(conditions)
        if result.valid:
            return result.score

        # Averages can cross a height tier and miss its period minimum even
        # though every hour passed on its own
        debug_log(f"Averaged window conditions rejected ({conditions}), using mean hourly score", "WINDOW")
        return round_half_up(sum(h.result.score for h in window_hours) / len(window_hours))


def find_best_window(hours: Sequence[HourlyReading], config: Config) -> Optional[SurfWindow]:
    """Best surf window for one day's forecast hours, or None."""
    return WindowSelector(config).find_best_window(hours)
