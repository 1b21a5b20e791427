"""Service assembling multi-day paragliding forecasts."""
import asyncio
import logging
import math
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Sequence

from flyability.config import MAX_CONCURRENT_FETCHES, MAX_FORECAST_DAYS, MAX_SEARCH_RADIUS_KM
from flyability.errors import InvalidForecastRequestError
from flyability.models.forecast import (
    DailyFlyabilityForecast,
    DailySiteAnalysis,
    DayRating,
    ParaglidingForecast,
    SiteFlyabilityRating,
)
from flyability.models.site import Coordinates, SiteWithDistance
from flyability.models.weather import WeatherData
from flyability.services.daily_aggregator import DailyAggregator, forecast_confidence_for_day
from flyability.services.daylight_service import DaylightFilter
from flyability.services.geographic_search import GeographicSearch
from flyability.services.hourly_scorer import HourlyFlyabilityScorer
from flyability.services.providers import (
    FlyabilityScorer,
    SiteProvider,
    SolarCalculator,
    WeatherProvider,
)
from flyability.services.weather_summary import summarize_day

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_day_name(day_offset: int, day: date) -> str:
    """"Today", "Tomorrow", or e.g. "Saturday, June 21"."""
    if day_offset == 0:
        return "Today"
    if day_offset == 1:
        return "Tomorrow"
    return day.strftime("%A, %B %d")


def site_reasoning(analysis: DailySiteAnalysis) -> str:
    """Short explanation of a site's day: exposure, best window, peak quality."""
    if not analysis.hourly_scores:
        return "No daylight hours available"

    reasons = [f"{analysis.favorable_hours_percentage:.0f}% favorable conditions"]

    window = analysis.best_flying_window
    if window is not None:
        reasons.append(
            f"best window: {window.start.hour:02d}:00-{window.end.hour:02d}:00 "
            f"(score: {window.avg_score:.1f})"
        )

    if analysis.best_score >= 7.0:
        reasons.append("excellent peak conditions")
    elif analysis.best_score >= 5.0:
        reasons.append("good peak conditions")
    else:
        reasons.append("marginal peak conditions")

    return ", ".join(reasons)


def day_explanation(day_rating: DayRating, ranked: Sequence[SiteFlyabilityRating]) -> str:
    """Summary of the day's rating, average exposure and qualifying site count."""
    if not ranked:
        return "No flyable sites found for this day"
    if day_rating == DayRating.NOT_FLYABLE:
        return "Not suitable for flying"

    site_count = len(ranked)
    avg_favorable = sum(r.daily_analysis.favorable_hours_percentage for r in ranked) / site_count
    return (
        f"{day_rating.label} ({avg_favorable:.0f}% favorable conditions, "
        f"{site_count} flyable site{'' if site_count == 1 else 's'})"
    )


def validate_request(radius_km: float, days: int) -> None:
    """Reject forecast parameters before any work starts."""
    if not isinstance(radius_km, (int, float)) or math.isnan(radius_km) or radius_km <= 0:
        raise InvalidForecastRequestError(f"radius_km must be positive, got {radius_km}")
    if radius_km > MAX_SEARCH_RADIUS_KM:
        raise InvalidForecastRequestError(
            f"radius_km must be at most {MAX_SEARCH_RADIUS_KM:.0f}, got {radius_km}"
        )
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise InvalidForecastRequestError(f"days must be a positive integer, got {days}")
    if days > MAX_FORECAST_DAYS:
        raise InvalidForecastRequestError(f"days must be at most {MAX_FORECAST_DAYS}, got {days}")


class ForecastOrchestrator:
    """
    Builds a ranked, explainable multi-day flyability forecast.

    Collaborators are passed in explicitly; scoring and aggregation are pure,
    so the only concurrency is the weather fan-out, whose results are
    gathered back onto the calling task before any aggregation.
    """

    def __init__(
        self,
        site_provider: SiteProvider,
        weather_provider: WeatherProvider,
        solar_calculator: SolarCalculator = None,
        scorer: FlyabilityScorer = None,
        aggregator: DailyAggregator = None,
        geographic_search: GeographicSearch = None,
        max_concurrent_fetches: int = MAX_CONCURRENT_FETCHES,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.site_provider = site_provider
        self.weather_provider = weather_provider
        self.daylight_filter = DaylightFilter(solar_calculator=solar_calculator)
        self.scorer = scorer or HourlyFlyabilityScorer()
        self.aggregator = aggregator or DailyAggregator()
        self.geographic_search = geographic_search or GeographicSearch()
        self.max_concurrent_fetches = max(1, max_concurrent_fetches)
        self.clock = clock

    async def generate_forecast(
        self,
        center: Coordinates,
        radius_km: float,
        days: int,
        location_name: Optional[str] = None,
    ) -> ParaglidingForecast:
        """
        Generate a multi-day forecast for all sites around a center.

        Args:
            center: Search center
            radius_km: Search radius in kilometers
            days: Number of days, starting today (UTC)
            location_name: Optional display name for the center

        Returns:
            ParaglidingForecast with one DailyFlyabilityForecast per day

        Raises:
            InvalidForecastRequestError: if radius or day count is out of range
        """
        validate_request(radius_km, days)

        reference_time = self.clock()
        if reference_time.tzinfo is None:
            reference_time = reference_time.replace(tzinfo=timezone.utc)
        today = reference_time.astimezone(timezone.utc).date()

        catalog = self.site_provider.sites_in_catalog()
        matches = self.geographic_search.sort_by_distance(
            self.geographic_search.sites_within_radius(catalog, center, radius_km)
        )
        logger.info(
            "Generating %d-day forecast: %d of %d sites within %.1fkm of (%.4f, %.4f)",
            days, len(matches), len(catalog), radius_km, center.latitude, center.longitude,
        )
        if not matches:
            logger.warning("No paragliding sites found in search area")

        center_weather, site_weather, fetch_errors = await self._fetch_all_weather(center, matches)

        daily_forecasts = []
        for day_offset in range(days):
            day = today + timedelta(days=day_offset)
            daily_forecasts.append(
                self._build_daily_forecast(
                    day, day_offset, matches, site_weather, fetch_errors, center_weather, reference_time
                )
            )

        forecast = ParaglidingForecast(
            location=center,
            radius_km=float(radius_km),
            daily_forecasts=daily_forecasts,
            generated_at=reference_time,
            sites_in_area=[m.site for m in matches],
            location_name=location_name,
        )
        logger.info(
            "Forecast ready: %s",
            ", ".join(f"{f.date}={f.day_rating.value}" for f in forecast.daily_forecasts),
        )
        return forecast

    async def _fetch_all_weather(
        self,
        center: Coordinates,
        matches: Sequence[SiteWithDistance],
    ):
        """Fetch center and per-site weather concurrently with bounded fan-out."""
        semaphore = asyncio.Semaphore(self.max_concurrent_fetches)

        async def fetch(coordinates: Coordinates) -> List[WeatherData]:
            async with semaphore:
                return await self.weather_provider.hourly_forecast(coordinates)

        results = await asyncio.gather(
            fetch(center),
            *[fetch(m.site.coordinates) for m in matches],
            return_exceptions=True,
        )

        center_result, site_results = results[0], results[1:]
        if isinstance(center_result, BaseException):
            logger.warning(
                "Failed to fetch weather for search center (%.4f, %.4f): %s",
                center.latitude, center.longitude, center_result,
            )
            center_weather: List[WeatherData] = []
        else:
            center_weather = list(center_result)

        site_weather: Dict[str, Optional[List[WeatherData]]] = {}
        fetch_errors: Dict[str, BaseException] = {}
        for match, result in zip(matches, site_results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Failed to fetch weather for site %s (%s): %s",
                    match.site.id, match.site.name, result,
                )
                site_weather[match.site.id] = None
                fetch_errors[match.site.id] = result
            else:
                site_weather[match.site.id] = sorted(result, key=lambda w: w.timestamp)

        return center_weather, site_weather, fetch_errors

    def _build_daily_forecast(
        self,
        day: date,
        day_offset: int,
        matches: Sequence[SiteWithDistance],
        site_weather: Dict[str, Optional[List[WeatherData]]],
        fetch_errors: Dict[str, BaseException],
        center_weather: Sequence[WeatherData],
        reference_time: datetime,
    ) -> DailyFlyabilityForecast:
        ratings = []
        for match in matches:
            rating = self.rate_site_day(
                match, site_weather.get(match.site.id), day, day_offset, reference_time,
                fetch_error=fetch_errors.get(match.site.id),
            )
            if rating is not None:
                ratings.append(rating)

        ranked = self.aggregator.rank_sites(ratings)
        day_rating = self.aggregator.day_rating(ranked)

        return DailyFlyabilityForecast(
            date=day,
            day_name=format_day_name(day_offset, day),
            weather_summary=summarize_day([w for w in center_weather if w.utc_date == day]),
            site_ratings=ranked,
            day_rating=day_rating,
            confidence=forecast_confidence_for_day(day_offset),
            explanation=day_explanation(day_rating, ranked),
        )

    def rate_site_day(
        self,
        match: SiteWithDistance,
        weather: Optional[Sequence[WeatherData]],
        day: date,
        day_offset: int,
        reference_time: datetime,
        fetch_error: Optional[BaseException] = None,
    ) -> Optional[SiteFlyabilityRating]:
        """
        Rate one site for one day, or None when it stays out of the ranking.

        Sites are excluded when weather is missing, when they have no launch
        directions, when the day has no daylight hours, or when too few hours
        are flyable.
        """
        site = match.site
        if weather is None:
            logger.debug(
                "Site %s excluded on day %d (%s): no weather data: %s",
                site.id, day_offset, day, fetch_error or "not fetched",
            )
            return None
        if not site.has_launch_directions:
            logger.debug("Site %s excluded on day %d: no launch directions", site.id, day_offset)
            return None

        day_weather = [w for w in weather if w.utc_date == day]
        if not day_weather:
            logger.debug("Site %s excluded on day %d: no weather for %s", site.id, day_offset, day)
            return None

        daylight_weather = self.daylight_filter.filter_daylight(day_weather, site.coordinates, day)
        if not daylight_weather:
            logger.debug("Site %s excluded on day %d: no daylight hours", site.id, day_offset)
            return None

        hourly_scores = self.scorer.score_hours(site, daylight_weather, reference_time)
        analysis = self.aggregator.aggregate(site.id, hourly_scores)
        if not analysis.qualifies:
            logger.debug(
                "Site %s excluded on day %d: %.0f%% favorable hours",
                site.id, day_offset, analysis.favorable_hours_percentage,
            )
            return None

        return SiteFlyabilityRating(
            site=site,
            best_score=analysis.best_score,
            distance_km=match.distance_km,
            daily_analysis=analysis,
            best_hour=analysis.best_hour,
            reasoning=site_reasoning(analysis),
        )
