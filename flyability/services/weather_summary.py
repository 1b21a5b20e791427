"""Daily weather overview for the search center."""
from typing import Sequence
import numpy as np

from flyability.models.forecast import (
    DailyWeatherSummary,
    SpeedRange,
    TemperatureRange,
    WindSummary,
)
from flyability.models.weather import WeatherData
from flyability.utils.geo_utils import degrees_to_cardinal

NO_DATA_SUMMARY = DailyWeatherSummary(
    description="No data",
    temperature_range=TemperatureRange(min=0.0, max=0.0),
    wind_summary=WindSummary(
        direction="Unknown",
        direction_degrees=0.0,
        speed_range=SpeedRange(min=0.0, max=0.0),
    ),
    precipitation_probability=0,
    cloud_cover=0,
)


def summarize_day(day_weather: Sequence[WeatherData]) -> DailyWeatherSummary:
    """
    Summarize one day of hourly weather.

    Description and wind direction come from the midday entry. Precipitation
    probability is estimated as 10x the heaviest hourly precipitation (mm),
    capped at 100.
    """
    if not day_weather:
        return NO_DATA_SUMMARY

    temperatures = np.array([w.temperature for w in day_weather])
    winds_kmh = np.array([w.wind_speed_kmh for w in day_weather])
    cloud_cover = np.array([w.cloud_cover for w in day_weather])
    max_precip = max(w.precipitation for w in day_weather)

    midday = day_weather[len(day_weather) // 2]

    return DailyWeatherSummary(
        description=midday.description,
        temperature_range=TemperatureRange(
            min=float(temperatures.min()),
            max=float(temperatures.max()),
        ),
        wind_summary=WindSummary(
            direction=degrees_to_cardinal(midday.wind_direction_degrees),
            direction_degrees=midday.wind_direction_degrees,
            speed_range=SpeedRange(
                min=float(winds_kmh.min()),
                max=float(winds_kmh.max()),
            ),
        ),
        precipitation_probability=int(round(min(max(max_precip * 10.0, 0.0), 100.0))),
        cloud_cover=int(round(min(max(float(cloud_cover.mean()), 0.0), 100.0))),
    )
