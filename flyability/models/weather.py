"""Hourly weather model."""
from datetime import date, datetime, timezone
from attrs import field, frozen

from flyability.config import MS_TO_KMH


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@frozen
class WeatherData:
    """One hour of forecast weather at a point."""

    timestamp: datetime = field(converter=_as_utc)
    temperature: float = 0.0  # Celsius
    wind_speed: float = 0.0  # m/s
    wind_direction_degrees: float = 0.0  # 0 = north, where the wind comes from
    wind_gust: float = 0.0  # m/s
    precipitation: float = 0.0  # mm
    cloud_cover: float = 0.0  # percent
    pressure: float = 1013.25  # hPa
    visibility: float = 10.0  # km
    description: str = ""

    @property
    def wind_speed_kmh(self) -> float:
        return self.wind_speed * MS_TO_KMH

    @property
    def wind_gust_kmh(self) -> float:
        return self.wind_gust * MS_TO_KMH

    @property
    def utc_date(self) -> date:
        """UTC calendar date of this hour."""
        return self.timestamp.date()
