"""Unit tests for the built-in tools.

Network-backed tools are exercised against httpx.MockTransport handlers.
"""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from clippy_server.integrations import CalendarClient, WeatherClient
from clippy_server.tools import (
    CalculatorTool,
    DateTool,
    HolidayTool,
    ToolExecutionError,
    WeatherTool,
)
from clippy_server.tools.calculator import evaluate

WEATHER_BODY = {
    "location": {"name": "Barcelona", "country": "Spain"},
    "current": {
        "temp_c": 21.0,
        "temp_f": 69.8,
        "feelslike_c": 20.5,
        "condition": {"text": "Sunny"},
        "wind_kph": 11.2,
        "wind_mph": 7.0,
        "humidity": 60,
    },
}

FORECAST_BODY = {
    **WEATHER_BODY,
    "forecast": {
        "forecastday": [
            {
                "date": "2025-06-01",
                "day": {
                    "maxtemp_c": 26.1,
                    "mintemp_c": 18.4,
                    "condition": {"text": "Partly cloudy"},
                    "daily_chance_of_rain": 10,
                },
            }
        ]
    },
}

HOLIDAY_FEED = b"""BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Test//Holidays//EN
BEGIN:VEVENT
UID:1
DTSTART;VALUE=DATE:20250101
SUMMARY:New Year's Day
END:VEVENT
BEGIN:VEVENT
UID:2
DTSTART;VALUE=DATE:20250106
SUMMARY:Epiphany
END:VEVENT
BEGIN:VEVENT
UID:3
DTSTART;VALUE=DATE:20250418
SUMMARY:Good Friday
END:VEVENT
BEGIN:VEVENT
UID:4
DTSTART;VALUE=DATE:20250623
SUMMARY:St John's Day
END:VEVENT
END:VCALENDAR
"""


def mock_http(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestDateTool:
    @pytest.mark.asyncio
    async def test_returns_rfc3339(self):
        tz = timezone(timedelta(hours=2))
        tool = DateTool(clock=lambda: datetime(2025, 6, 1, 12, 30, 5, 123456, tzinfo=tz))

        assert await tool.execute("{}") == "2025-06-01T12:30:05+02:00"

    @pytest.mark.asyncio
    async def test_default_clock_is_timezone_aware(self):
        result = await DateTool().execute("")
        assert datetime.fromisoformat(result).tzinfo is not None

    def test_declaration(self):
        declaration = DateTool().declaration()
        assert declaration.name == "get_today_date"
        assert "RFC3339" in declaration.description


class TestCalculatorTool:
    @pytest.mark.parametrize(
        "expression, expected",
        [
            ("2 + 2", "4"),
            ("(10 * 5) / 2", "25"),
            ("sqrt(16)", "4"),
            ("7 / 2", "3.5"),
            ("2 ** 10", "1024"),
            ("-3 + abs(-5)", "2"),
            ("max(1, 9, 4) % 4", "1"),
            ("floor(pi)", "3"),
        ],
    )
    @pytest.mark.asyncio
    async def test_evaluates_expressions(self, expression, expected):
        result = await CalculatorTool().execute(json.dumps({"expression": expression}))
        assert result == expected

    @pytest.mark.parametrize(
        "expression",
        [
            "__import__('os').system('ls')",
            "open('/etc/passwd')",
            "x + 1",
            "1 / 0",
            "2 ** 100000",
            "'a' * 3",
            "[1, 2, 3]",
            "True + 1",
            "2 +",
        ],
    )
    @pytest.mark.asyncio
    async def test_rejects_unsafe_or_invalid_expressions(self, expression):
        with pytest.raises(ToolExecutionError, match="failed to evaluate"):
            await CalculatorTool().execute(json.dumps({"expression": expression}))

    @pytest.mark.asyncio
    async def test_missing_expression(self):
        with pytest.raises(ToolExecutionError, match="failed to parse arguments"):
            await CalculatorTool().execute("{}")

    @pytest.mark.parametrize(
        "expression",
        [
            "((9**999)**999)**3",
            "((9**999)**999)**999",
            "3 ** 3000",
            "10**999*10**999*10**999*10**999*10**999",
            "abs(10**999 * 10**999)",
        ],
    )
    @pytest.mark.asyncio
    async def test_oversized_results_are_rejected_before_computing(self, expression):
        with pytest.raises(ToolExecutionError, match="failed to evaluate: result too large"):
            await asyncio.wait_for(
                CalculatorTool().execute(json.dumps({"expression": expression})),
                timeout=1.0,
            )

    @pytest.mark.asyncio
    async def test_large_result_within_bounds(self):
        result = await CalculatorTool().execute('{"expression": "2 ** 4000"}')
        assert result == str(2**4000)

    @pytest.mark.asyncio
    async def test_small_base_with_large_exponent(self):
        assert await CalculatorTool().execute('{"expression": "1 ** 999"}') == "1"
        assert await CalculatorTool().execute('{"expression": "(-1) ** 999"}') == "-1"

    def test_evaluate_keeps_float_precision(self):
        assert evaluate("0.1 + 0.2") == pytest.approx(0.3)


class TestWeatherTool:
    @pytest.mark.asyncio
    async def test_current_weather(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json=WEATHER_BODY)

        async with mock_http(handler) as http:
            tool = WeatherTool(WeatherClient(http, api_key="secret"))
            result = await tool.execute('{"location": "Barcelona"}')

        assert seen["path"] == "/v1/current.json"
        assert seen["params"] == {"key": "secret", "q": "Barcelona", "aqi": "no"}
        assert result == (
            "Weather in Barcelona, Spain:\n"
            "Temperature: 21.0°C (69.8°F), feels like 20.5°C\n"
            "Conditions: Sunny\n"
            "Wind: 11.2 km/h (7.0 mph)\n"
            "Humidity: 60%"
        )

    @pytest.mark.asyncio
    async def test_forecast(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["days"] = request.url.params.get("days")
            return httpx.Response(200, json=FORECAST_BODY)

        async with mock_http(handler) as http:
            tool = WeatherTool(WeatherClient(http, api_key="secret"))
            result = await tool.execute('{"location": "Barcelona", "include_forecast": true}')

        assert seen == {"path": "/v1/forecast.json", "days": "3"}
        assert "3-Day Forecast:" in result
        assert (
            "2025-06-01: Partly cloudy, High: 26.1°C, Low: 18.4°C, Rain chance: 10%"
            in result
        )

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        async with mock_http(lambda request: httpx.Response(200, json={})) as http:
            tool = WeatherTool(WeatherClient(http, api_key=None))
            with pytest.raises(ToolExecutionError, match="WEATHER_API_KEY"):
                await tool.execute('{"location": "Barcelona"}')

    @pytest.mark.asyncio
    async def test_error_status(self):
        def handler(request):
            return httpx.Response(400, json={"error": {"message": "No matching location found."}})

        async with mock_http(handler) as http:
            tool = WeatherTool(WeatherClient(http, api_key="secret"))
            with pytest.raises(ToolExecutionError, match="status 400"):
                await tool.execute('{"location": "Atlantis"}')

    @pytest.mark.asyncio
    async def test_transport_error_does_not_leak_key(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_http(handler) as http:
            tool = WeatherTool(WeatherClient(http, api_key="super-secret-key"))
            with pytest.raises(ToolExecutionError) as exc_info:
                await tool.execute('{"location": "Barcelona"}')

        assert "super-secret-key" not in str(exc_info.value)
        assert "ConnectError" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_malformed_arguments(self):
        async with mock_http(lambda request: httpx.Response(200, json=WEATHER_BODY)) as http:
            tool = WeatherTool(WeatherClient(http, api_key="secret"))
            with pytest.raises(ToolExecutionError, match="failed to parse arguments"):
                await tool.execute('{"location": ')


class TestHolidayTool:
    LINK = "https://calendar.test/holidays.ics"

    async def run(self, arguments, handler=None):
        handler = handler or (lambda request: httpx.Response(200, content=HOLIDAY_FEED))
        async with mock_http(handler) as http:
            tool = HolidayTool(CalendarClient(http), link=self.LINK)
            return await tool.execute(arguments)

    @pytest.mark.asyncio
    async def test_all_holidays(self):
        result = await self.run("{}")

        assert result.splitlines() == [
            "2025-01-01: New Year's Day",
            "2025-01-06: Epiphany",
            "2025-04-18: Good Friday",
            "2025-06-23: St John's Day",
        ]

    @pytest.mark.asyncio
    async def test_date_window(self):
        result = await self.run(
            '{"after_date": "2025-01-05T00:00:00Z", "before_date": "2025-05-01"}'
        )

        assert result.splitlines() == ["2025-01-06: Epiphany", "2025-04-18: Good Friday"]

    @pytest.mark.asyncio
    async def test_max_count(self):
        result = await self.run('{"max_count": 2}')

        assert result.splitlines() == ["2025-01-01: New Year's Day", "2025-01-06: Epiphany"]

    @pytest.mark.asyncio
    async def test_invalid_date(self):
        with pytest.raises(ToolExecutionError, match="failed to parse arguments"):
            await self.run('{"after_date": "next tuesday"}')

    @pytest.mark.asyncio
    async def test_feed_unavailable(self):
        with pytest.raises(ToolExecutionError, match="failed to load holiday events"):
            await self.run("{}", handler=lambda request: httpx.Response(503))
