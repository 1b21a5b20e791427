"""Interfaces of the collaborators the flyability engine depends on."""
from datetime import date, datetime
from typing import List, Optional, Protocol, Sequence, Tuple

from flyability.models.analysis import HourlyScore
from flyability.models.site import Coordinates, ParaglidingSite
from flyability.models.weather import WeatherData


class SiteProvider(Protocol):
    """Source of the site catalog."""

    def sites_in_catalog(self) -> List[ParaglidingSite]:
        ...


class WeatherProvider(Protocol):
    """Source of hourly weather forecasts."""

    async def hourly_forecast(self, coordinates: Coordinates) -> List[WeatherData]:
        """
        Return hourly weather ordered by timestamp.

        May raise; the engine treats any failure as "no data for this point".
        """
        ...


class SolarCalculator(Protocol):
    """Source of sunrise/sunset instants."""

    def sunrise_sunset(
        self,
        coordinates: Coordinates,
        day: date,
    ) -> Tuple[Optional[datetime], Optional[datetime]]:
        """
        Return (sunrise, sunset) in UTC, or (None, None) when the sun stays down.

        Raises SolarCalculationError when the times cannot be computed.
        """
        ...


class FlyabilityScorer(Protocol):
    """Strategy turning a site's hourly weather into hourly scores."""

    def score_hours(
        self,
        site: ParaglidingSite,
        weather: Sequence[WeatherData],
        reference_time: datetime,
    ) -> List[HourlyScore]:
        ...
