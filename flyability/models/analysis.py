"""Per-hour wind analysis results."""
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple
import attr
from attrs import field, frozen

from flyability.models.site import LaunchDirectionRange


def serialize_value(instance, attribute, value):
    """attrs value serializer producing JSON-ready primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def to_primitive_dict(instance) -> dict:
    """Convert an attrs tree to plain dicts, lists and scalars."""
    return attr.asdict(instance, retain_collection_types=False, value_serializer=serialize_value)


class WindDirectionCompatibility(str, Enum):
    """How well the wind direction matches a site's launches."""

    PERFECT = "perfect"
    FAVORABLE = "favorable"
    MARGINAL = "marginal"
    UNFAVORABLE = "unfavorable"
    DANGEROUS = "dangerous"


class WindSpeedCategory(str, Enum):
    """Paragliding wind strength category."""

    LIGHT = "light"
    MODERATE = "moderate"
    STRONG = "strong"
    DANGEROUS = "dangerous"


@frozen
class WindDirectionAnalysis:
    """Wind direction scored against a site's launch ranges."""

    wind_direction_degrees: float
    cardinal: str
    min_angular_distance: Optional[float]  # 0 inside a launch range, None without ranges
    best_launch_range: Optional[LaunchDirectionRange]
    compatibility: WindDirectionCompatibility


@frozen
class PilotSuitability:
    """Whether conditions suit each pilot skill level."""

    beginner: bool
    intermediate: bool
    advanced: bool


@frozen
class WindSpeedAnalysis:
    """Wind speed and gust classification."""

    wind_speed_ms: float
    wind_speed_kmh: float
    wind_gust_kmh: float
    category: WindSpeedCategory
    gust_override: bool  # True when gusts alone forced the Dangerous category
    pilot_suitability: PilotSuitability


@frozen
class SafetyMargins:
    """Forecast-uncertainty adjustments for an hour some time ahead."""

    hours_ahead: float
    direction_uncertainty: float  # degrees
    speed_safety_factor: float
    forecast_confidence: float
    time_degradation: float

    @property
    def safety_factor(self) -> float:
        """Multiplier applied to the combined direction/speed score."""
        return self.forecast_confidence * self.time_degradation


@frozen
class FlyabilityAnalysis:
    """Full analysis behind one hourly score."""

    wind_direction: WindDirectionAnalysis
    wind_speed: WindSpeedAnalysis
    safety_margins: SafetyMargins
    explanation: str
    reasoning: Tuple[str, ...] = field(default=(), converter=tuple)


@frozen
class HourlyScore:
    """Flyability score for one site at one hour."""

    timestamp: datetime
    score: float  # 0.0 - 10.0
    analysis: FlyabilityAnalysis
    is_flyable: bool

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return to_primitive_dict(self)
