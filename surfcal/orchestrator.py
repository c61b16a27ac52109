# ABOUTME: Main orchestrator coordinating forecast fetch, window selection and calendar sync
# ABOUTME: Processes each forecast day in order and applies one calendar action per day

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from surfcal.ai.llm_client import LLMClient
from surfcal.cache.manager import CacheManager
from surfcal.calendar.client import CalendarClient, CalendarEvent, DryRunCalendar, EventDetails, GoogleCalendarClient
from surfcal.calendar.description import (
    DEGRADED_TITLE,
    build_degraded_description,
    build_description,
    event_state,
    good_title,
)
from surfcal.calendar.reconciler import Action, EventState, decide
from surfcal.config import Config
from surfcal.debug import debug_log
from surfcal.scoring.recommender import Recommendation, SurfRecommender
from surfcal.scoring.window import WindowSelector
from surfcal.weather.models import HourlyReading, SurfWindow
from surfcal.weather.sources import StormGlassClient, parse_hours

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayReport:
    """What happened for one forecast day"""
    day: date
    existing_state: EventState
    action: Action
    window: Optional[SurfWindow] = None
    recommendation: Optional[Recommendation] = None


class SurfOrchestrator:
    """Orchestrates forecast, scoring and calendar components"""

    def __init__(
        self,
        config: Config,
        dry_run: bool = False,
        calendar: Optional[CalendarClient] = None,
        forecast_client: Optional[StormGlassClient] = None,
        cache: Optional[CacheManager] = None,
        llm_client: Optional[LLMClient] = None,
    ):
        self.config = config
        self.dry_run = dry_run
        self.tz = ZoneInfo(config.location.timezone)

        self.window_selector = WindowSelector(config)
        self.recommender = SurfRecommender(sheltered_venue=config.location.sheltered_venue)
        self.cache = cache or CacheManager(config.cache_file, refresh_hours=config.cache_refresh_hours)
        self.forecast_client = forecast_client

        if calendar is None:
            if dry_run:
                calendar = DryRunCalendar()
            else:
                calendar = GoogleCalendarClient(
                    calendar_id=config.calendar_id,
                    service_account_key=config.service_account_key,
                    timezone=config.location.timezone,
                )
        self.calendar = calendar

        if llm_client is None and config.gemini_api_key:
            llm_client = LLMClient(api_key=config.gemini_api_key)
        self.llm_client = llm_client

    def run(self, now: Optional[datetime] = None) -> list[DayReport]:
        """
        Process every day in the forecast horizon.

        Args:
            now: Current time (defaults to the real clock)

        Returns:
            One DayReport per processed day, in date order
        """
        now = now or datetime.now(timezone.utc)
        log.info(f"Checking surf conditions for {self.config.location.name}...")

        readings = parse_hours(self.load_forecast())
        days = self.group_by_day(readings, now)
        log.info(f"{len(readings)} forecast hours, {len(days)} days inside the horizon")

        reports = []
        for day in sorted(days):
            reports.append(self.process_day(day, days[day], now))
        return reports

    def load_forecast(self) -> dict:
        """Cached forecast if fresh, otherwise fetch and cache a new one."""
        cached = self.cache.get_forecast()
        if cached is not None:
            log.info("Using cached forecast data")
            return cached

        if self.forecast_client is None:
            self.forecast_client = StormGlassClient(api_key=self.config.stormglass_api_key)

        log.info("Fetching fresh forecast from Storm Glass...")
        forecast = self.forecast_client.fetch_forecast(self.config.location.lat, self.config.location.lon)
        self.cache.set_forecast(forecast)
        return forecast

    def group_by_day(self, readings: Sequence[HourlyReading], now: datetime) -> dict[date, list[HourlyReading]]:
        """Group readings inside [now, now + horizon] by local date."""
        horizon_end = now + timedelta(hours=self.config.forecast_horizon_hours)
        days: dict[date, list[HourlyReading]] = defaultdict(list)

        for reading in readings:
            if now <= reading.time <= horizon_end:
                days[reading.time.astimezone(self.tz).date()].append(reading)

        return dict(days)

    def process_day(self, day: date, hours: Sequence[HourlyReading], now: datetime) -> DayReport:
        """Select the day's window, decide the calendar action and apply it."""
        window = self.window_selector.find_best_window(hours)
        recommendation = self.recommender.classify_window(window) if window else None

        existing = self.calendar.get_existing_event(day)
        state = event_state(existing.summary) if existing else EventState.NONE
        action = decide(state, window)

        log.info(f"{day}: existing={state.value}, window={window or 'none'} -> {action.value}")
        self._apply(action, window, recommendation, existing, now)

        return DayReport(
            day=day,
            existing_state=state,
            action=action,
            window=window,
            recommendation=recommendation,
        )

    def _apply(
        self,
        action: Action,
        window: Optional[SurfWindow],
        recommendation: Optional[Recommendation],
        existing: Optional[CalendarEvent],
        now: datetime,
    ) -> None:
        if action == Action.NOOP:
            return

        timestamp = now.astimezone(self.tz).strftime("%d/%m/%Y %H:%M")

        if action == Action.DEGRADE:
            if self.config.degrade_action == "delete":
                self.calendar.delete_event(existing.id)
                return
            self.calendar.update_event(existing.id, EventDetails(
                title=DEGRADED_TITLE,
                description=build_degraded_description(existing.description, timestamp),
                start=existing.start,
                end=existing.end,
            ))
            return

        details = EventDetails(
            title=good_title(self.config.location.name),
            description=build_description(
                window,
                self.config.location.name,
                recommendation,
                timestamp,
                note=self._session_note(window, recommendation),
            ),
            start=window.start_time,
            end=window.end_time,
        )

        if action == Action.CREATE:
            self.calendar.create_event(details)
        else:
            # UPDATE and RECOVER both rewrite the existing event as good
            self.calendar.update_event(existing.id, details)

    def _session_note(self, window: SurfWindow, recommendation: Recommendation) -> Optional[str]:
        if self.llm_client is None:
            return None
        debug_log("Generating session note", "ORCHESTRATOR")
        return self.llm_client.generate_session_note(window, self.config.location.name, recommendation)
