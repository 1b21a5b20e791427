"""Service for scoring each forecast hour at a site."""
from datetime import datetime
from typing import List, Sequence, Tuple

from flyability.config import (
    CONFIDENCE_HORIZON_HOURS,
    CONFIDENCE_MAX_LOSS,
    DEGRADATION_HORIZON_HOURS,
    DEGRADATION_MAX_LOSS,
    DIRECTION_SCORES,
    DIRECTION_UNCERTAINTY_DEG_PER_HOUR,
    DIRECTION_UNCERTAINTY_MAX_DEG,
    DIRECTION_WEIGHT,
    FLYABLE_SCORE_THRESHOLD,
    LOW_CONFIDENCE_SAFETY_FACTOR,
    SPEED_SAFETY_FACTOR,
    SPEED_SCORES,
    SPEED_WEIGHT,
)
from flyability.models.analysis import (
    FlyabilityAnalysis,
    HourlyScore,
    SafetyMargins,
    WindDirectionAnalysis,
    WindDirectionCompatibility,
    WindSpeedAnalysis,
    WindSpeedCategory,
)
from flyability.models.site import ParaglidingSite
from flyability.models.weather import WeatherData
from flyability.services.wind_direction import WindDirectionAnalyzer
from flyability.services.wind_speed import WindSpeedAnalyzer

DIRECTION_REASONS = {
    WindDirectionCompatibility.PERFECT: "Perfect wind direction alignment",
    WindDirectionCompatibility.FAVORABLE: "Favorable wind direction",
    WindDirectionCompatibility.MARGINAL: "Marginal wind direction - crosswind conditions",
    WindDirectionCompatibility.UNFAVORABLE: "Unfavorable wind direction",
    WindDirectionCompatibility.DANGEROUS: "Dangerous wind direction - strong tailwind",
}

SPEED_REASONS = {
    WindSpeedCategory.LIGHT: "Light winds - good for all skill levels",
    WindSpeedCategory.MODERATE: "Moderate winds - suitable for most pilots",
    WindSpeedCategory.STRONG: "Strong winds - experienced pilots only",
    WindSpeedCategory.DANGEROUS: "Dangerous wind speeds",
}

# (min rounded score, explanation), checked in order
SCORE_EXPLANATIONS = [
    (9, "Excellent flying conditions"),
    (7, "Good flying conditions"),
    (5, "Marginal conditions - proceed with caution"),
    (3, "Poor conditions - not recommended"),
]
DANGEROUS_EXPLANATION = "Dangerous conditions - do not fly"


def forecast_confidence(hours_ahead: float) -> float:
    """Trust in the forecast, falling linearly to its floor over 72 hours."""
    return 1.0 - min(max(hours_ahead, 0.0) / CONFIDENCE_HORIZON_HOURS, CONFIDENCE_MAX_LOSS)


def time_degradation(hours_ahead: float) -> float:
    """Extra discount for long lead times, reaching its floor after a week."""
    return 1.0 - min(max(hours_ahead, 0.0) / DEGRADATION_HORIZON_HOURS, DEGRADATION_MAX_LOSS)


def safety_margins(hours_ahead: float) -> SafetyMargins:
    """Safety margins for an hour some time ahead of the forecast reference."""
    hours_ahead = max(hours_ahead, 0.0)
    return SafetyMargins(
        hours_ahead=hours_ahead,
        direction_uncertainty=min(hours_ahead * DIRECTION_UNCERTAINTY_DEG_PER_HOUR, DIRECTION_UNCERTAINTY_MAX_DEG),
        speed_safety_factor=SPEED_SAFETY_FACTOR,
        forecast_confidence=forecast_confidence(hours_ahead),
        time_degradation=time_degradation(hours_ahead),
    )


def explain_score(score: float) -> str:
    rounded = round(min(max(score, 0.0), 10.0))
    for min_score, explanation in SCORE_EXPLANATIONS:
        if rounded >= min_score:
            return explanation
    return DANGEROUS_EXPLANATION


def combine_scores(
    direction: WindDirectionAnalysis,
    speed: WindSpeedAnalysis,
    margins: SafetyMargins,
) -> Tuple[float, List[str]]:
    """
    Weighted direction/speed score scaled by the safety factor.

    Either tier being Dangerous yields 0: a perfect direction cannot offset
    dangerous wind speed, and vice versa.
    """
    reasoning = [
        DIRECTION_REASONS[direction.compatibility],
        SPEED_REASONS[speed.category],
    ]
    if margins.safety_factor < LOW_CONFIDENCE_SAFETY_FACTOR:
        reasoning.append("Reduced confidence due to forecast uncertainty")

    if (direction.compatibility == WindDirectionCompatibility.DANGEROUS
            or speed.category == WindSpeedCategory.DANGEROUS):
        return 0.0, reasoning

    direction_score = DIRECTION_SCORES[direction.compatibility.value]
    speed_score = SPEED_SCORES[speed.category.value]
    score = (direction_score * DIRECTION_WEIGHT + speed_score * SPEED_WEIGHT) * margins.safety_factor
    return min(max(score, 0.0), 10.0), reasoning


class HourlyFlyabilityScorer:
    """Heuristic scorer combining wind direction, wind speed and lead time."""

    def __init__(
        self,
        direction_analyzer: WindDirectionAnalyzer = None,
        speed_analyzer: WindSpeedAnalyzer = None,
        flyable_threshold: float = FLYABLE_SCORE_THRESHOLD,
    ):
        self.direction_analyzer = direction_analyzer or WindDirectionAnalyzer()
        self.speed_analyzer = speed_analyzer or WindSpeedAnalyzer()
        self.flyable_threshold = flyable_threshold

    def score_hour(
        self,
        site: ParaglidingSite,
        weather: WeatherData,
        hours_ahead: float,
    ) -> HourlyScore:
        """
        Score one hour of weather at a site.

        Args:
            site: Site being evaluated
            weather: Weather for the hour
            hours_ahead: Lead time of the hour relative to forecast generation

        Returns:
            HourlyScore with the full analysis behind the score
        """
        direction = self.direction_analyzer.analyze(
            weather.wind_direction_degrees, site.launch_direction_ranges
        )
        speed = self.speed_analyzer.analyze(weather.wind_speed, weather.wind_gust)
        margins = safety_margins(hours_ahead)

        score, reasoning = combine_scores(direction, speed, margins)

        return HourlyScore(
            timestamp=weather.timestamp,
            score=score,
            analysis=FlyabilityAnalysis(
                wind_direction=direction,
                wind_speed=speed,
                safety_margins=margins,
                explanation=explain_score(score),
                reasoning=reasoning,
            ),
            is_flyable=score >= self.flyable_threshold,
        )

    def score_hours(
        self,
        site: ParaglidingSite,
        weather: Sequence[WeatherData],
        reference_time: datetime,
    ) -> List[HourlyScore]:
        """Score every hour, measuring lead time from the reference time."""
        return [
            self.score_hour(site, hour, (hour.timestamp - reference_time).total_seconds() / 3600)
            for hour in weather
        ]
