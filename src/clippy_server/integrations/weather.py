"""Client for the weatherapi.com current conditions and forecast endpoints."""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class WeatherError(Exception):
    """Weather lookup failed. Messages never contain the API key."""


def format_weather(data: dict[str, Any], include_forecast: bool) -> str:
    """Render a weatherapi.com response as readable text.

    Args:
        data: Decoded JSON body of current.json or forecast.json
        include_forecast: Whether to append the forecast block

    Returns:
        Multi-line weather summary
    """
    location = data.get("location") or {}
    current = data.get("current") or {}
    condition = current.get("condition") or {}

    lines = [
        f"Weather in {location.get('name', '')}, {location.get('country', '')}:",
        f"Temperature: {current.get('temp_c', 0.0):.1f}°C "
        f"({current.get('temp_f', 0.0):.1f}°F), "
        f"feels like {current.get('feelslike_c', 0.0):.1f}°C",
        f"Conditions: {condition.get('text', '')}",
        f"Wind: {current.get('wind_kph', 0.0):.1f} km/h "
        f"({current.get('wind_mph', 0.0):.1f} mph)",
        f"Humidity: {current.get('humidity', 0)}%",
    ]
    result = "\n".join(lines)

    forecast = data.get("forecast")
    if include_forecast and forecast:
        result += "\n\n3-Day Forecast:\n"
        for day in forecast.get("forecastday") or []:
            info = day.get("day") or {}
            result += (
                f"{day.get('date', '')}: {(info.get('condition') or {}).get('text', '')}, "
                f"High: {info.get('maxtemp_c', 0.0):.1f}°C, "
                f"Low: {info.get('mintemp_c', 0.0):.1f}°C, "
                f"Rain chance: {info.get('daily_chance_of_rain', 0)}%\n"
            )

    return result


class WeatherClient:
    """Fetches weather from weatherapi.com.

    Attributes:
        base_url: API root, e.g. "https://api.weatherapi.com/v1"
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str | None,
        base_url: str = "https://api.weatherapi.com/v1",
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def get_weather(self, location: str, include_forecast: bool = False) -> str:
        """Fetch current weather, and optionally a 3-day forecast, for a location.

        Args:
            location: City name, zip code, or "lat,lon" coordinates
            include_forecast: Whether to include the 3-day forecast

        Returns:
            Human-readable weather summary

        Raises:
            WeatherError: If the key is missing or the request fails
        """
        if not self._api_key:
            raise WeatherError("WEATHER_API_KEY environment variable not set")

        endpoint = "forecast.json" if include_forecast else "current.json"
        params = {"key": self._api_key, "q": location, "aqi": "no"}
        if include_forecast:
            params["days"] = "3"

        logger.info(f"Fetching weather data: location={location}, forecast={include_forecast}")

        try:
            response = await self._http.get(f"{self.base_url}/{endpoint}", params=params)
        except httpx.HTTPError as e:
            # The request URL carries the API key, so only the error type is reported
            logger.warning(f"Weather request failed: {type(e).__name__}")
            raise WeatherError(f"failed to fetch weather: {type(e).__name__}") from e

        if response.status_code != httpx.codes.OK:
            raise WeatherError(
                f"weather API returned status {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise WeatherError("failed to parse weather response") from e

        return format_weather(data, include_forecast)
