# ABOUTME: Tests for main application orchestrator
# ABOUTME: Validates the forecast -> window -> calendar action flow for each day

from datetime import date, datetime, timezone
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

from surfcal.calendar.client import CalendarEvent, DryRunCalendar
from surfcal.calendar.description import DEGRADED_TITLE, good_title
from surfcal.calendar.reconciler import Action, EventState
from surfcal.config import Config
from surfcal.orchestrator import SurfOrchestrator
from surfcal.weather.sources import parse_hours

TZ = ZoneInfo("Asia/Jerusalem")
NOW = datetime(2025, 6, 1, 0, 0, tzinfo=timezone.utc)
DAY = date(2025, 6, 1)


def hour(utc_hour, day=1, wind_ms=1.5, height=1.0):
    """One Storm Glass hour; 1.5 m/s is about 2.9 kts"""
    return {
        "time": datetime(2025, 6, day, utc_hour, tzinfo=timezone.utc).isoformat(),
        "swellHeight": {"noaa": height},
        "swellPeriod": {"noaa": 9.0},
        "windSpeed": {"noaa": wind_ms},
        "windDirection": {"noaa": 315.0},
    }


# 03Z-14Z is 06:00-17:00 local in June
GOOD_DAY = {"hours": [hour(h) for h in range(3, 15)]}
BAD_DAY = {"hours": [hour(h, wind_ms=10.0) for h in range(3, 15)]}

PREVIOUS_DESCRIPTION = "Good surf window at Herzliya\n\nForecast:\n• Wave height: 1.1 m (3.6 ft)\n• Period: 9 s"


def existing_event(summary):
    return CalendarEvent(
        id="abc",
        summary=summary,
        description=PREVIOUS_DESCRIPTION,
        start=datetime(2025, 6, 1, 10, tzinfo=TZ),
        end=datetime(2025, 6, 1, 12, tzinfo=TZ),
    )


def make_orchestrator(payload, calendar=None, config=None, **kwargs):
    cache = MagicMock()
    cache.get_forecast.return_value = payload
    return SurfOrchestrator(
        config or Config(),
        dry_run=True,
        calendar=calendar or DryRunCalendar(),
        cache=cache,
        **kwargs,
    )


class TestCalendarActions:
    """Tests for each calendar action the orchestrator applies"""

    def test_creates_event_for_good_day(self):
        calendar = DryRunCalendar()
        orchestrator = make_orchestrator(GOOD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert len(reports) == 1
        assert reports[0].action == Action.CREATE
        assert reports[0].existing_state == EventState.NONE

        event = calendar.get_existing_event(DAY)
        assert event.summary == good_title("Herzliya")
        # Equal scores all day: earliest full window wins
        assert event.start == datetime(2025, 6, 1, 6, tzinfo=TZ)
        assert event.end == datetime(2025, 6, 1, 8, tzinfo=TZ)
        assert "Quality score:" in event.description
        assert "Last updated: 01/06/2025 03:00" in event.description

    def test_updates_existing_good_event(self):
        calendar = DryRunCalendar([existing_event(good_title("Herzliya"))])
        orchestrator = make_orchestrator(GOOD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert reports[0].action == Action.UPDATE
        assert calendar.events["abc"].start == datetime(2025, 6, 1, 6, tzinfo=TZ)
        assert calendar.log[0].startswith("WOULD UPDATE abc")

    def test_recovers_degraded_event(self):
        calendar = DryRunCalendar([existing_event(DEGRADED_TITLE)])
        orchestrator = make_orchestrator(GOOD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert reports[0].existing_state == EventState.DEGRADED
        assert reports[0].action == Action.RECOVER
        assert calendar.events["abc"].summary == good_title("Herzliya")

    def test_degrades_good_event_by_marking(self):
        calendar = DryRunCalendar([existing_event(good_title("Herzliya"))])
        orchestrator = make_orchestrator(BAD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert reports[0].action == Action.DEGRADE
        assert reports[0].window is None
        event = calendar.events["abc"]
        assert event.summary == DEGRADED_TITLE
        # Degraded event keeps its original slot
        assert event.start == datetime(2025, 6, 1, 10, tzinfo=TZ)
        assert "Last forecast: Wave height: 1.1 m (3.6 ft)" in event.description

    def test_degrades_good_event_by_deleting(self):
        calendar = DryRunCalendar([existing_event(good_title("Herzliya"))])
        orchestrator = make_orchestrator(BAD_DAY, calendar=calendar, config=Config(degrade_action="delete"))

        orchestrator.run(now=NOW)

        assert calendar.events == {}
        assert calendar.log == ["WOULD DELETE abc"]

    def test_bad_day_without_event_does_nothing(self):
        calendar = DryRunCalendar()
        orchestrator = make_orchestrator(BAD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert reports[0].action == Action.NOOP
        assert calendar.log == []

    def test_degraded_event_stays_degraded_on_bad_day(self):
        calendar = DryRunCalendar([existing_event(DEGRADED_TITLE)])
        orchestrator = make_orchestrator(BAD_DAY, calendar=calendar)

        reports = orchestrator.run(now=NOW)

        assert reports[0].action == Action.NOOP
        assert calendar.events["abc"].summary == DEGRADED_TITLE

    def test_days_processed_in_order(self):
        payload = {"hours": [hour(h, day=2) for h in range(3, 15)] + GOOD_DAY["hours"]}
        orchestrator = make_orchestrator(payload)

        reports = orchestrator.run(now=NOW)

        assert [r.day for r in reports] == [date(2025, 6, 1), date(2025, 6, 2)]
        assert all(r.action == Action.CREATE for r in reports)


class TestForecastLoading:
    """Tests for cache reuse and fetching"""

    def test_uses_cached_forecast(self):
        forecast_client = MagicMock()
        orchestrator = make_orchestrator(GOOD_DAY, forecast_client=forecast_client)

        assert orchestrator.load_forecast() == GOOD_DAY
        forecast_client.fetch_forecast.assert_not_called()

    def test_fetches_and_caches_when_stale(self):
        forecast_client = MagicMock()
        forecast_client.fetch_forecast.return_value = GOOD_DAY
        cache = MagicMock()
        cache.get_forecast.return_value = None

        orchestrator = SurfOrchestrator(
            Config(),
            dry_run=True,
            cache=cache,
            forecast_client=forecast_client,
        )

        assert orchestrator.load_forecast() == GOOD_DAY
        forecast_client.fetch_forecast.assert_called_once_with(32.1752, 34.7998)
        cache.set_forecast.assert_called_once_with(GOOD_DAY)


class TestGrouping:
    """Tests for horizon filtering and local-day grouping"""

    def test_group_by_local_day_within_horizon(self):
        payload = {"hours": [
            {"time": "2025-05-31T23:00:00+00:00"},  # before now
            {"time": "2025-06-01T03:00:00+00:00"},
            {"time": "2025-06-01T22:00:00+00:00"},  # 01:00 local on the 2nd
            {"time": "2025-06-03T01:00:00+00:00"},  # past the 48h horizon
        ]}
        orchestrator = make_orchestrator(payload)

        days = orchestrator.group_by_day(parse_hours(payload), NOW)

        assert sorted(days) == [date(2025, 6, 1), date(2025, 6, 2)]
        assert len(days[date(2025, 6, 1)]) == 1
        assert len(days[date(2025, 6, 2)]) == 1


class TestSessionNote:
    """Tests for the optional LLM note"""

    def test_note_added_to_description(self):
        llm_client = MagicMock()
        llm_client.generate_session_note.return_value = "Paddle out early."
        calendar = DryRunCalendar()
        orchestrator = make_orchestrator(GOOD_DAY, calendar=calendar, llm_client=llm_client)

        orchestrator.run(now=NOW)

        assert "Paddle out early." in calendar.get_existing_event(DAY).description
        llm_client.generate_session_note.assert_called_once()

    def test_no_llm_without_api_key(self):
        orchestrator = make_orchestrator(GOOD_DAY)
        assert orchestrator.llm_client is None
