"""HTTP clients for the external services used by the built-in tools."""

from clippy_server.integrations.calendar import CalendarClient, CalendarError, CalendarEvent
from clippy_server.integrations.weather import WeatherClient, WeatherError

__all__ = [
    "CalendarClient",
    "CalendarError",
    "CalendarEvent",
    "WeatherClient",
    "WeatherError",
]
