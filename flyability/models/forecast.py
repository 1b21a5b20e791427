"""Daily and multi-day flyability forecast models."""
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple
from attrs import field, frozen

from flyability.models.analysis import HourlyScore, to_primitive_dict
from flyability.models.site import Coordinates, ParaglidingSite


class DayRating(str, Enum):
    """Overall rating for a day, from the best qualifying site score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    MARGINAL = "marginal"
    POOR = "poor"
    NOT_FLYABLE = "not_flyable"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@frozen
class FlyableRange:
    """A maximal run of consecutive flyable hours for one site on one day."""

    start: datetime
    end: datetime
    avg_score: float

    @property
    def hours(self) -> int:
        return int((self.end - self.start).total_seconds() // 3600) + 1


@frozen
class DailySiteAnalysis:
    """Hourly scores for one site on one day, merged into flying windows."""

    site_id: str
    hourly_scores: Tuple[HourlyScore, ...] = field(converter=tuple)
    flyable_ranges: Tuple[FlyableRange, ...] = field(converter=tuple)
    best_score: float
    favorable_hours_percentage: float
    best_flying_window: Optional[FlyableRange]
    qualifies: bool

    @property
    def best_hour(self) -> Optional[HourlyScore]:
        if not self.hourly_scores:
            return None
        return max(self.hourly_scores, key=lambda h: h.score)


@frozen
class SiteFlyabilityRating:
    """A site's entry in a day's ranking."""

    site: ParaglidingSite
    best_score: float
    distance_km: float
    daily_analysis: DailySiteAnalysis
    best_hour: Optional[HourlyScore]
    reasoning: str


@frozen
class TemperatureRange:
    min: float
    max: float


@frozen
class SpeedRange:
    min: float  # km/h
    max: float  # km/h


@frozen
class WindSummary:
    direction: str
    direction_degrees: float
    speed_range: SpeedRange


@frozen
class DailyWeatherSummary:
    """Weather overview for the search center on one day."""

    description: str
    temperature_range: TemperatureRange
    wind_summary: WindSummary
    precipitation_probability: int  # 0-100
    cloud_cover: int  # 0-100


@frozen
class DailyFlyabilityForecast:
    """Ranked flyability for all candidate sites on one day."""

    date: date
    day_name: str
    weather_summary: DailyWeatherSummary
    site_ratings: Tuple[SiteFlyabilityRating, ...] = field(converter=tuple)
    day_rating: DayRating
    confidence: float
    explanation: str


@frozen
class ParaglidingForecast:
    """Multi-day flyability forecast around a search center."""

    location: Coordinates
    radius_km: float
    daily_forecasts: Tuple[DailyFlyabilityForecast, ...] = field(converter=tuple)
    generated_at: datetime
    sites_in_area: Tuple[ParaglidingSite, ...] = field(converter=tuple)
    location_name: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return to_primitive_dict(self)
