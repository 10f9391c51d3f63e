"""Tool reporting current weather and an optional forecast."""

from pydantic import BaseModel, Field

from clippy_server.integrations.weather import WeatherClient, WeatherError
from clippy_server.tools.base import ToolDeclaration, ToolExecutionError, parse_arguments


class WeatherArguments(BaseModel):
    location: str = Field(min_length=1)
    include_forecast: bool = False


class WeatherTool:
    """Looks up the weather for a location through a WeatherClient."""

    name = "get_weather"

    def __init__(self, client: WeatherClient) -> None:
        self._client = client

    def declaration(self) -> ToolDeclaration:
        return ToolDeclaration(
            name=self.name,
            description=(
                "Get current weather and optional 3-day forecast for a given location"
            ),
            parameters={
                "type": "object",
                "properties": {
                    "location": {
                        "type": "string",
                        "description": (
                            "City name, zip code, or coordinates "
                            "(e.g., 'Barcelona', '10001', '48.8567,2.3508')"
                        ),
                    },
                    "include_forecast": {
                        "type": "boolean",
                        "description": "Whether to include 3-day forecast. Default is false.",
                        "default": False,
                    },
                },
                "required": ["location"],
            },
        )

    async def execute(self, arguments: str) -> str:
        args = parse_arguments(arguments, WeatherArguments)
        try:
            return await self._client.get_weather(args.location, args.include_forecast)
        except WeatherError as e:
            raise ToolExecutionError(str(e)) from e
