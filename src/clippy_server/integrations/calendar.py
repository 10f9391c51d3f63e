"""Loader for remote iCalendar feeds."""

import logging
from dataclasses import dataclass
from datetime import date, datetime

import httpx
from icalendar import Calendar

logger = logging.getLogger(__name__)


class CalendarError(Exception):
    """The calendar feed could not be fetched or parsed."""


@dataclass(frozen=True)
class CalendarEvent:
    """An event with the date it starts on."""

    start: date
    summary: str


class CalendarClient:
    """Fetches and parses iCalendar feeds over HTTP."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    async def load_events(self, link: str) -> list[CalendarEvent]:
        """Load all dated events of a feed, in feed order.

        Events without a start date are skipped.

        Raises:
            CalendarError: If the feed can't be downloaded or parsed
        """
        logger.info(f"Loading calendar: {link}")

        try:
            response = await self._http.get(link, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CalendarError(f"failed to load calendar: {type(e).__name__}") from e

        try:
            calendar = Calendar.from_ical(response.content)
        except ValueError as e:
            raise CalendarError("failed to parse calendar") from e

        events: list[CalendarEvent] = []
        for component in calendar.walk("VEVENT"):
            dtstart = component.get("DTSTART")
            if dtstart is None:
                continue
            start = dtstart.dt
            if isinstance(start, datetime):
                start = start.date()
            events.append(CalendarEvent(start=start, summary=str(component.get("SUMMARY", ""))))

        logger.debug(f"Loaded {len(events)} calendar events")
        return events
