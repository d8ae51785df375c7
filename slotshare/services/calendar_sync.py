"""Google Calendar integration for refreshing availability busy times."""

import logging
import math
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from slotshare.config import get_app_config, get_settings
from slotshare.schemas.availability import BusyTimeBlock

logger = logging.getLogger(__name__)


class CalendarSyncError(Exception):
    """Fetching events from the calendar provider failed."""


def _parse_timestamp(value: str) -> int:
    """Convert an RFC 3339 timestamp to whole epoch seconds."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return math.floor(parsed.timestamp())


def events_to_busy_times(events: Iterable[dict[str, Any]]) -> list[BusyTimeBlock]:
    """Translate calendar events into busy blocks.

    All-day events (``date`` instead of ``dateTime``) are not busy time.
    """
    busy_times = []
    for event in events:
        start = (event.get("start") or {}).get("dateTime")
        end = (event.get("end") or {}).get("dateTime")
        if not start or not end:
            continue
        busy_times.append(
            BusyTimeBlock(start_time=_parse_timestamp(start), end_time=_parse_timestamp(end))
        )
    return busy_times


class CalendarSyncService:
    """Service for fetching an owner's busy times from Google Calendar."""

    def __init__(self) -> None:
        self.settings = get_settings()
        config = get_app_config().calendar
        self.base_url = self.settings.google_calendar_base_url
        self.lookahead_days = config["lookahead_days"]
        self.max_results = config["max_results"]
        self.timeout = config["timeout_seconds"]

    def _get_events_url(self) -> str:
        return f"{self.base_url}/calendars/primary/events"

    async def fetch_busy_times(
        self, access_token: str, now: datetime | None = None
    ) -> list[BusyTimeBlock]:
        """Fetch upcoming primary-calendar events as busy blocks.

        Args:
            access_token: OAuth bearer token for the calendar owner
            now: start of the window, defaults to the current time

        Returns:
            Busy blocks for timed events in the lookahead window
        """
        now = now or datetime.now(timezone.utc)
        params = {
            "timeMin": now.isoformat(),
            "timeMax": (now + timedelta(days=self.lookahead_days)).isoformat(),
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": str(self.max_results),
        }
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self._get_events_url(), params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch calendar events: {e}")
            raise CalendarSyncError(f"Calendar fetch failed: {e}") from e

        busy_times = events_to_busy_times(data.get("items", []))
        logger.info(f"Fetched {len(busy_times)} busy blocks from calendar")
        return busy_times


def get_calendar_sync_service() -> CalendarSyncService:
    """Get a calendar sync service instance."""
    return CalendarSyncService()
