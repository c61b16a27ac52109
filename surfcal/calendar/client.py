# ABOUTME: Google Calendar client and an in-memory dry-run calendar
# ABOUTME: Reads the day's surf window event and creates, updates or deletes it

import base64
import json
import logging
import os
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Optional, Protocol
from zoneinfo import ZoneInfo

from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from surfcal.calendar.description import is_surf_event
from surfcal.debug import debug_log

log = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


@dataclass(frozen=True)
class CalendarEvent:
    """Existing surf window event"""
    id: str
    summary: str
    description: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class EventDetails:
    """Content to write for a day's event"""
    title: str
    description: str
    start: datetime
    end: datetime


class CalendarClient(Protocol):
    def get_existing_event(self, day: date) -> Optional[CalendarEvent]: ...

    def create_event(self, details: EventDetails) -> CalendarEvent: ...

    def update_event(self, event_id: str, details: EventDetails) -> CalendarEvent: ...

    def delete_event(self, event_id: str) -> None: ...


def load_service_account_info(key: str) -> dict:
    """
    Service account credentials from inline JSON, base64 JSON or a file path.

    Inline forms are how CI secrets usually arrive. An existing file always
    wins; otherwise a long value is base64 and a short one is a path.
    """
    if key.lstrip().startswith("{"):
        return json.loads(key)
    if os.path.isfile(key):
        return json.loads(Path(key).read_text(encoding="utf-8"))
    if len(key) > 100:
        return json.loads(base64.b64decode(key).decode("utf-8"))
    return json.loads(Path(key).read_text(encoding="utf-8"))


class GoogleCalendarClient:
    """Client for the Google Calendar v3 REST API using a service account"""

    BASE_URL = "https://www.googleapis.com/calendar/v3/calendars"

    def __init__(self, calendar_id: str, service_account_key: str, timezone: str, session=None):
        if not calendar_id:
            raise ValueError("GOOGLE_CALENDAR_ID is not set")
        self.calendar_id = calendar_id
        self.timezone = timezone
        self.tz = ZoneInfo(timezone)

        if session is None:
            credentials = service_account.Credentials.from_service_account_info(
                load_service_account_info(service_account_key), scopes=SCOPES
            )
            session = AuthorizedSession(credentials)
        self.session = session

    @property
    def events_url(self) -> str:
        return f"{self.BASE_URL}/{self.calendar_id}/events"

    def get_existing_event(self, day: date) -> Optional[CalendarEvent]:
        """
        Get the surf window event for a local day, if any.

        Args:
            day: Local calendar date

        Returns:
            First surf window event of the day, or None
        """
        start_of_day = datetime.combine(day, time(0, 0), tzinfo=self.tz)
        params = {
            "timeMin": start_of_day.isoformat(),
            "timeMax": (start_of_day + timedelta(days=1)).isoformat(),
            "singleEvents": "true",
            "orderBy": "startTime",
        }

        response = self.session.get(self.events_url, params=params)
        if response.status_code != 200:
            log.error(f"Calendar list failed for {day}: {response.status_code} - {response.text}")
        response.raise_for_status()

        items = response.json().get("items", [])
        events = [self._parse_event(item) for item in items if is_surf_event(item.get("summary"))]
        debug_log(f"{day}: {len(items)} events, {len(events)} surf window events", "CALENDAR")
        return events[0] if events else None

    def create_event(self, details: EventDetails) -> CalendarEvent:
        response = self.session.post(self.events_url, json=self._event_body(details))
        if response.status_code not in (200, 201):
            log.error(f"Calendar insert failed: {response.status_code} - {response.text}")
        response.raise_for_status()

        data = response.json()
        log.info(f"Created event for {details.start.date()}: {data.get('htmlLink', data.get('id'))}")
        return self._parse_event(data)

    def update_event(self, event_id: str, details: EventDetails) -> CalendarEvent:
        response = self.session.put(f"{self.events_url}/{event_id}", json=self._event_body(details))
        if response.status_code != 200:
            log.error(f"Calendar update failed for {event_id}: {response.status_code} - {response.text}")
        response.raise_for_status()

        data = response.json()
        log.info(f"Updated event for {details.start.date()}: {data.get('htmlLink', event_id)}")
        return self._parse_event(data)

    def delete_event(self, event_id: str) -> None:
        response = self.session.delete(f"{self.events_url}/{event_id}")
        if response.status_code not in (200, 204):
            log.error(f"Calendar delete failed for {event_id}: {response.status_code} - {response.text}")
        response.raise_for_status()
        log.info(f"Deleted event {event_id}")

    def _event_body(self, details: EventDetails) -> dict:
        return {
            "summary": details.title,
            "description": details.description,
            "start": {"dateTime": details.start.isoformat(), "timeZone": self.timezone},
            "end": {"dateTime": details.end.isoformat(), "timeZone": self.timezone},
        }

    def _parse_event(self, item: dict) -> CalendarEvent:
        return CalendarEvent(
            id=item.get("id", ""),
            summary=item.get("summary", ""),
            description=item.get("description", ""),
            start=self._parse_time(item.get("start", {})),
            end=self._parse_time(item.get("end", {})),
        )

    def _parse_time(self, value: dict) -> datetime:
        if "dateTime" in value:
            return datetime.fromisoformat(value["dateTime"].replace("Z", "+00:00"))
        # All-day events only carry a date
        return datetime.combine(date.fromisoformat(value["date"]), time(0, 0), tzinfo=self.tz)


class DryRunCalendar:
    """
    In-memory calendar that records what would have happened.

    Seed it with existing events to rehearse update/degrade/recover paths.
    """

    def __init__(self, events: Optional[list[CalendarEvent]] = None):
        self.events: dict[str, CalendarEvent] = {e.id: e for e in events or []}
        self.log: list[str] = []
        self._next_id = 1

    def get_existing_event(self, day: date) -> Optional[CalendarEvent]:
        matches = sorted(
            (e for e in self.events.values() if e.start.date() == day and is_surf_event(e.summary)),
            key=lambda e: e.start,
        )
        return matches[0] if matches else None

    def create_event(self, details: EventDetails) -> CalendarEvent:
        event = CalendarEvent(
            id=f"dry-run-{self._next_id}",
            summary=details.title,
            description=details.description,
            start=details.start,
            end=details.end,
        )
        self._next_id += 1
        self.events[event.id] = event
        self._record(f"WOULD CREATE '{details.title}' {details.start:%Y-%m-%d %H:%M}-{details.end:%H:%M}")
        return event

    def update_event(self, event_id: str, details: EventDetails) -> CalendarEvent:
        if event_id not in self.events:
            raise KeyError(f"No event with id {event_id}")
        event = CalendarEvent(
            id=event_id,
            summary=details.title,
            description=details.description,
            start=details.start,
            end=details.end,
        )
        self.events[event_id] = event
        self._record(f"WOULD UPDATE {event_id} to '{details.title}' {details.start:%Y-%m-%d %H:%M}-{details.end:%H:%M}")
        return event

    def delete_event(self, event_id: str) -> None:
        if self.events.pop(event_id, None) is None:
            raise KeyError(f"No event with id {event_id}")
        self._record(f"WOULD DELETE {event_id}")

    def _record(self, message: str) -> None:
        self.log.append(message)
        log.info(f"[DRY RUN] {message}")
