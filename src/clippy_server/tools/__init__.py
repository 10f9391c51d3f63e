"""Tool contract, registry and the built-in tools.

This package defines what a tool is, the registry that resolves tool names
at dispatch time, and the tools registered by default: date, weather,
holidays and calculator.
"""

import httpx

from clippy_server.config import ClippyServerSettings
from clippy_server.integrations import CalendarClient, WeatherClient
from clippy_server.tools.base import (
    Tool,
    ToolDeclaration,
    ToolExecutionError,
    parse_arguments,
)
from clippy_server.tools.calculator import CalculatorTool
from clippy_server.tools.date import DateTool
from clippy_server.tools.holidays import HolidayTool
from clippy_server.tools.registry import ToolRegistry
from clippy_server.tools.weather import WeatherTool


def build_default_registry(
    settings: ClippyServerSettings, http_client: httpx.AsyncClient
) -> ToolRegistry:
    """Create a registry holding every built-in tool.

    Args:
        settings: Application settings (API keys, feed links)
        http_client: Shared HTTP client used by the network-backed tools

    Returns:
        ToolRegistry: The populated registry
    """
    registry = ToolRegistry()
    registry.register(
        WeatherTool(
            WeatherClient(
                http_client,
                api_key=settings.weather_api_key,
                base_url=settings.weather_api_url,
            )
        )
    )
    registry.register(DateTool())
    registry.register(
        HolidayTool(CalendarClient(http_client), link=settings.holiday_calendar_link)
    )
    registry.register(CalculatorTool())
    return registry


__all__ = [
    "CalculatorTool",
    "DateTool",
    "HolidayTool",
    "Tool",
    "ToolDeclaration",
    "ToolExecutionError",
    "ToolRegistry",
    "WeatherTool",
    "build_default_registry",
    "parse_arguments",
]
