"""Open-Meteo API client for hourly weather forecasts."""
import logging
from typing import List

import httpx
import pandas as pd

from backend.config import settings
from flyability.errors import WeatherUnavailableError
from flyability.models.site import Coordinates
from flyability.models.weather import WeatherData

logger = logging.getLogger(__name__)

# Hourly variables to request
HOURLY_VARS = [
    "temperature_2m",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
    "precipitation",
    "cloud_cover",
    "pressure_msl",
    "visibility",
    "weather_code",
]

# Hours without wind data are dropped; other gaps take these values
FILL_VALUES = {
    "temperature_2m": 0.0,
    "wind_gusts_10m": 0.0,
    "precipitation": 0.0,
    "cloud_cover": 0.0,
    "pressure_msl": 1013.25,
    "visibility": 10000.0,
}

# WMO weather interpretation codes
WMO_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def describe_weather_code(code) -> str:
    """Short text for a WMO weather code."""
    if code is None or pd.isna(code):
        return "Unknown"
    return WMO_DESCRIPTIONS.get(int(code), "Unknown")


def parse_hourly_forecast(data: dict, coordinates: Coordinates) -> List[WeatherData]:
    """
    Parse an Open-Meteo hourly response into WeatherData.

    Args:
        data: Decoded JSON response (wind in m/s, times in UTC)
        coordinates: Point the forecast was requested for

    Returns:
        Hourly weather ordered by timestamp

    Raises:
        WeatherUnavailableError: if the response has no usable hourly block
    """
    hourly = data.get("hourly") if isinstance(data, dict) else None
    if not isinstance(hourly, dict) or "time" not in hourly:
        raise WeatherUnavailableError(
            coordinates.latitude, coordinates.longitude, "response has no hourly data"
        )

    try:
        df = pd.DataFrame(hourly)
        df["time"] = pd.to_datetime(df["time"], utc=True)
    except (ValueError, TypeError) as e:
        raise WeatherUnavailableError(
            coordinates.latitude, coordinates.longitude, f"malformed hourly data: {e}"
        ) from e

    for var in HOURLY_VARS:
        if var not in df.columns:
            df[var] = None
        if var != "weather_code":
            df[var] = pd.to_numeric(df[var], errors="coerce")

    df = df.dropna(subset=["wind_speed_10m", "wind_direction_10m"])
    df = df.fillna(FILL_VALUES).sort_values("time")

    return [
        WeatherData(
            timestamp=row.time.to_pydatetime(),
            temperature=float(row.temperature_2m),
            wind_speed=float(row.wind_speed_10m),
            wind_direction_degrees=float(row.wind_direction_10m),
            wind_gust=float(row.wind_gusts_10m),
            precipitation=float(row.precipitation),
            cloud_cover=float(row.cloud_cover),
            pressure=float(row.pressure_msl),
            visibility=float(row.visibility) / 1000.0,
            description=describe_weather_code(row.weather_code),
        )
        for row in df.itertuples(index=False)
    ]


class OpenMeteoWeatherProvider:
    """Async HTTP client for the Open-Meteo forecast API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient = None,
        base_url: str = None,
        forecast_days: int = None,
    ):
        self._client = http_client or httpx.AsyncClient(timeout=settings.weather_timeout_seconds)
        self.base_url = (base_url or settings.open_meteo_base_url).rstrip("/")
        self.forecast_days = forecast_days or settings.weather_forecast_days

    async def hourly_forecast(self, coordinates: Coordinates) -> List[WeatherData]:
        """
        Fetch hourly weather for a point.

        Raises:
            WeatherUnavailableError: on transport errors, HTTP errors or unparseable data
        """
        params = {
            "latitude": coordinates.latitude,
            "longitude": coordinates.longitude,
            "hourly": ",".join(HOURLY_VARS),
            "wind_speed_unit": "ms",
            "timezone": "UTC",
            "forecast_days": self.forecast_days,
        }
        logger.debug(
            "Requesting Open-Meteo forecast for (%.4f, %.4f)",
            coordinates.latitude, coordinates.longitude,
        )

        try:
            resp = await self._client.get(f"{self.base_url}/v1/forecast", params=params)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise WeatherUnavailableError(coordinates.latitude, coordinates.longitude, str(e)) from e
        except ValueError as e:
            raise WeatherUnavailableError(
                coordinates.latitude, coordinates.longitude, f"invalid JSON: {e}"
            ) from e

        return parse_hourly_forecast(data, coordinates)

    async def aclose(self) -> None:
        await self._client.aclose()
