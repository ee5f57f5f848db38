"""Weather tool — current weather and hourly forecast via OpenWeatherMap API."""
import logging
from datetime import datetime, timezone

import httpx

from ...config import settings
from ..registry import register_tool, ToolResult
from ..schemas import WeatherParams

logger = logging.getLogger(__name__)

# Free tier: 1000 calls/day, no credit card required
# Sign up at https://openweathermap.org/api
_BASE_URL = "https://api.openweathermap.org/data/2.5"
_FORECAST_HOURS = 24


def _iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def _to_widget(current: dict, forecast: dict) -> dict:
    """Reshape OpenWeatherMap responses into the hourly/daily layout the weather card renders."""
    entries = forecast.get("list", [])[:_FORECAST_HOURS]
    now = datetime.now(timezone.utc)
    sys_info = current.get("sys", {})
    return {
        "latitude": current.get("coord", {}).get("lat"),
        "longitude": current.get("coord", {}).get("lon"),
        "timezone": "auto",
        "timezone_abbreviation": "GMT",
        "current_units": {"time": "iso8601", "interval": "seconds", "temperature_2m": "°C"},
        "current": {
            "time": now.isoformat(),
            "interval": 900,
            "temperature_2m": current.get("main", {}).get("temp"),
        },
        "hourly_units": {"time": "iso8601", "temperature_2m": "°C"},
        "hourly": {
            "time": [e.get("dt_txt") for e in entries],
            "temperature_2m": [e.get("main", {}).get("temp") for e in entries],
        },
        "daily_units": {"time": "iso8601", "sunrise": "iso8601", "sunset": "iso8601"},
        "daily": {
            "time": [now.date().isoformat()],
            "sunrise": [_iso(sys_info["sunrise"])] if "sunrise" in sys_info else [],
            "sunset": [_iso(sys_info["sunset"])] if "sunset" in sys_info else [],
        },
    }


@register_tool(
    "getWeather",
    params=WeatherParams,
    description="Get the current weather at a location",
    side_effect="external-read",
)
async def get_weather(location: str, session=None, **kwargs) -> ToolResult:
    api_key = settings.openweathermap_api_key
    if not api_key:
        return ToolResult(type="error", text="OpenWeatherMap API key not configured")

    params = {"q": location, "appid": api_key, "units": "metric", "lang": settings.weather_lang}
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.get(f"{_BASE_URL}/weather", params=params)
            resp.raise_for_status()
            current = resp.json()

            resp = await client.get(f"{_BASE_URL}/forecast", params=params)
            resp.raise_for_status()
            forecast = resp.json()
    except httpx.HTTPStatusError as e:
        if e.response.status_code == 404:
            return ToolResult(
                type="error",
                text=f"Could not find the city {location}. Please check the name and try again.",
            )
        logger.error(f"Weather API error: {e}")
        return ToolResult(type="error", text=f"Could not fetch weather for {location}, please try again later.")
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Weather API error: {e}")
        return ToolResult(type="error", text=f"Could not fetch weather for {location}, please try again later.")

    return ToolResult(type="ok", data=_to_widget(current, forecast))
