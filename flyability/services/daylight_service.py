"""Service for restricting hourly weather to daylight hours."""
import logging
from collections import OrderedDict
from datetime import date, datetime, timezone
from typing import List, Optional, Sequence, Tuple
import numpy as np
from astral import Observer
from astral.sun import sun

from flyability.config import (
    DAYLIGHT_DEPRESSION_ANGLE,
    FALLBACK_DAYLIGHT_END,
    FALLBACK_DAYLIGHT_START,
    SOLAR_CACHE_SIZE,
)
from flyability.errors import SolarCalculationError
from flyability.models.site import Coordinates
from flyability.models.weather import WeatherData
from flyability.services.providers import SolarCalculator

logger = logging.getLogger(__name__)

# Beyond this latitude a missing sunrise is treated as polar day/night
POLAR_LATITUDE = 60.0


class AstralSolarCalculator:
    """
    Sunrise/sunset calculator backed by the astral library.

    Weather timestamps are in UTC, so sunrise/sunset times are also computed in UTC.
    """

    def __init__(
        self,
        depression_angle: float = DAYLIGHT_DEPRESSION_ANGLE,
        cache_size: int = SOLAR_CACHE_SIZE,
    ):
        """
        Initialize the calculator.

        Args:
            depression_angle: Sun depression angle for twilight definition.
                             0 = geometric sunrise/sunset (sun center at horizon)
                             6 = civil twilight (enough light for outdoor activities)
            cache_size: Maximum number of cached (location, date) entries
        """
        self.depression_angle = depression_angle
        self.cache_size = cache_size

        # LRU cache for sunrise/sunset times: (lat, lon, date) -> (sunrise_utc, sunset_utc)
        self._cache: OrderedDict = OrderedDict()

    def sunrise_sunset(
        self,
        coordinates: Coordinates,
        day: date,
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Calculate sunrise and sunset times in UTC for a location and date.

        Args:
            coordinates: Location to calculate for
            day: The UTC date to calculate for

        Returns:
            Tuple of (sunrise_utc, sunset_utc) as timezone-aware datetimes.
            Polar day yields the whole date; polar night yields (None, None).

        Raises:
            SolarCalculationError: if the sun times cannot be determined
        """
        if isinstance(day, datetime):
            day = day.date()

        # Round coordinates to reduce cache size
        cache_key = (round(coordinates.latitude, 2), round(coordinates.longitude, 2), day)
        if cache_key in self._cache:
            self._cache.move_to_end(cache_key)
            return self._cache[cache_key]

        observer = Observer(latitude=coordinates.latitude, longitude=coordinates.longitude)

        try:
            sun_times = sun(
                observer,
                date=day,
                tzinfo=timezone.utc,
                dawn_dusk_depression=self.depression_angle,
            )

            # Use dawn/dusk if depression angle is set, otherwise sunrise/sunset
            if self.depression_angle > 0:
                result = (sun_times["dawn"], sun_times["dusk"])
            else:
                result = (sun_times["sunrise"], sun_times["sunset"])

        except ValueError as e:
            # Polar day or polar night - sun doesn't rise/set
            if abs(coordinates.latitude) <= POLAR_LATITUDE:
                raise SolarCalculationError(
                    f"No sunrise/sunset at ({coordinates.latitude}, {coordinates.longitude}) on {day}: {e}"
                ) from e

            day_of_year = day.timetuple().tm_yday
            is_northern_summer = 80 < day_of_year < 265  # Roughly March-September
            is_polar_day = (coordinates.latitude > 0 and is_northern_summer) or \
                           (coordinates.latitude < 0 and not is_northern_summer)

            if is_polar_day:
                # 24h daylight - return full day span
                result = (
                    datetime.combine(day, datetime.min.time(), tzinfo=timezone.utc),
                    datetime.combine(day, datetime.max.time().replace(microsecond=0), tzinfo=timezone.utc),
                )
            else:
                # 24h darkness
                result = (None, None)

        self._cache[cache_key] = result
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return result

    def clear_cache(self) -> None:
        """Clear the sunrise/sunset cache."""
        self._cache.clear()


def fallback_window(day: date) -> Tuple[datetime, datetime]:
    """Fixed daylight window used when solar computation fails."""
    return (
        datetime.combine(day, FALLBACK_DAYLIGHT_START, tzinfo=timezone.utc),
        datetime.combine(day, FALLBACK_DAYLIGHT_END, tzinfo=timezone.utc),
    )


class DaylightFilter:
    """Keeps only the hours between sunrise and sunset."""

    def __init__(
        self,
        solar_calculator: SolarCalculator = None,
    ):
        """
        Initialize the daylight filter.

        Args:
            solar_calculator: Source of sunrise/sunset times
        """
        self.solar_calculator = solar_calculator or AstralSolarCalculator()

    def daylight_window(
        self,
        coordinates: Coordinates,
        day: date,
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Sunrise/sunset for a location and date, falling back to a fixed window.

        Returns (None, None) during polar night.
        """
        try:
            return self.solar_calculator.sunrise_sunset(coordinates, day)
        except (SolarCalculationError, ValueError) as e:
            logger.warning(
                "Sunrise/sunset unavailable at (%.4f, %.4f) on %s, using fixed window: %s",
                coordinates.latitude, coordinates.longitude, day, e,
            )
            return fallback_window(day)

    def create_daylight_mask(
        self,
        coordinates: Coordinates,
        day: date,
        timestamps: np.ndarray,
    ) -> np.ndarray:
        """
        Create a boolean mask indicating which timestamps fall within daylight hours.

        Args:
            coordinates: Location of the timestamps
            day: Date whose sunrise/sunset bounds the window
            timestamps: Array of numpy datetime64 timestamps (UTC)

        Returns:
            Boolean array where True indicates daylight hours
        """
        sunrise, sunset = self.daylight_window(coordinates, day)
        if sunrise is None or sunset is None:
            # Polar night - no daylight
            return np.zeros(len(timestamps), dtype=bool)

        # Convert to naive numpy datetime64 (UTC) for comparison
        sunrise_np = np.datetime64(sunrise.astimezone(timezone.utc).replace(tzinfo=None))
        sunset_np = np.datetime64(sunset.astimezone(timezone.utc).replace(tzinfo=None))
        timestamps = timestamps.astype("datetime64[s]")

        if sunrise_np <= sunset_np:
            return (timestamps >= sunrise_np) & (timestamps <= sunset_np)
        # Daylight spans UTC midnight (eastern longitudes where sunrise in
        # UTC falls on the previous evening)
        return (timestamps >= sunrise_np) | (timestamps <= sunset_np)

    def filter_daylight(
        self,
        weather: Sequence[WeatherData],
        coordinates: Coordinates,
        day: date,
    ) -> List[WeatherData]:
        """
        Keep the hours of one date that fall between sunrise and sunset.

        Args:
            weather: Hourly weather for the date, ordered by timestamp
            coordinates: Location of the weather
            day: Date of the weather

        Returns:
            The daylight subsequence (empty during polar night)
        """
        if not weather:
            return []

        timestamps = np.array(
            [np.datetime64(w.timestamp.replace(tzinfo=None), "s") for w in weather]
        )
        mask = self.create_daylight_mask(coordinates, day, timestamps)
        return [w for w, keep in zip(weather, mask) if keep]
