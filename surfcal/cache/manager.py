# ABOUTME: File-backed cache for the raw forecast payload
# ABOUTME: Reuses the last fetch until it is older than the refresh interval

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


class CacheManager:
    """
    Forecast cache stored as JSON on disk.

    Layout: {"fetched_at": ISO timestamp, "forecast": raw payload}
    """

    def __init__(self, path: str, refresh_hours: int = 6):
        self.path = Path(path)
        self.refresh_hours = refresh_hours

    def get_forecast(self) -> Optional[dict]:
        """
        Get cached forecast if fresh.

        Returns:
            Raw forecast payload, or None if missing, unreadable or stale
        """
        entry = self._read()
        if entry is None or self._is_stale(entry):
            return None
        return entry.get("forecast")

    def set_forecast(self, forecast: dict) -> None:
        """Store a freshly fetched forecast payload."""
        entry = {
            "fetched_at": datetime.now(timezone.utc).isoformat(),
            "forecast": forecast,
        }
        self.path.write_text(json.dumps(entry, indent=2), encoding="utf-8")
        log.info(f"Forecast saved to cache {self.path}")

    def is_stale(self) -> bool:
        """Check if the cache needs a refresh."""
        entry = self._read()
        return entry is None or self._is_stale(entry)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def _read(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            entry = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log.warning(f"Ignoring unreadable forecast cache {self.path}: {e}")
            return None
        if not isinstance(entry, dict):
            return None
        return entry

    def _is_stale(self, entry: dict) -> bool:
        fetched_at = entry.get("fetched_at")
        if not fetched_at:
            return True

        try:
            fetched = datetime.fromisoformat(fetched_at)
        except (TypeError, ValueError):
            return True
        if fetched.tzinfo is None:
            fetched = fetched.replace(tzinfo=timezone.utc)

        age = datetime.now(timezone.utc) - fetched
        return age > timedelta(hours=self.refresh_hours)
