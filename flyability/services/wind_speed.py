"""Service for classifying wind and gust speeds."""
from flyability.config import (
    ADVANCED_LIMITS_KMH,
    BEGINNER_LIMITS_KMH,
    GUST_DANGEROUS_KMH,
    INTERMEDIATE_LIMITS_KMH,
    MS_TO_KMH,
    SPEED_LIGHT_MAX_KMH,
    SPEED_MODERATE_MAX_KMH,
    SPEED_STRONG_MAX_KMH,
)
from flyability.models.analysis import PilotSuitability, WindSpeedAnalysis, WindSpeedCategory

# (max sustained km/h, category), checked in order
SPEED_CATEGORIES = [
    (SPEED_LIGHT_MAX_KMH, WindSpeedCategory.LIGHT),
    (SPEED_MODERATE_MAX_KMH, WindSpeedCategory.MODERATE),
    (SPEED_STRONG_MAX_KMH, WindSpeedCategory.STRONG),
]


def categorize_speed(speed_kmh: float) -> WindSpeedCategory:
    """Category from sustained speed alone."""
    for max_speed, category in SPEED_CATEGORIES:
        if speed_kmh <= max_speed:
            return category
    return WindSpeedCategory.DANGEROUS


def pilot_suitability(speed_kmh: float, gust_kmh: float) -> PilotSuitability:
    """Each skill level is judged independently."""
    def within(limits):
        max_speed, max_gust = limits
        return speed_kmh <= max_speed and gust_kmh <= max_gust

    return PilotSuitability(
        beginner=within(BEGINNER_LIMITS_KMH),
        intermediate=within(INTERMEDIATE_LIMITS_KMH),
        advanced=within(ADVANCED_LIMITS_KMH),
    )


class WindSpeedAnalyzer:
    """Classifies wind speed and gusts for paragliding."""

    def analyze_kmh(self, speed_kmh: float, gust_kmh: float, speed_ms: float = None) -> WindSpeedAnalysis:
        """
        Classify speeds given in km/h.

        Gusts above the danger limit force the Dangerous category whatever
        the sustained speed.
        """
        category = categorize_speed(speed_kmh)
        gust_override = gust_kmh > GUST_DANGEROUS_KMH and category != WindSpeedCategory.DANGEROUS
        if gust_kmh > GUST_DANGEROUS_KMH:
            category = WindSpeedCategory.DANGEROUS

        return WindSpeedAnalysis(
            wind_speed_ms=speed_ms if speed_ms is not None else speed_kmh / MS_TO_KMH,
            wind_speed_kmh=speed_kmh,
            wind_gust_kmh=gust_kmh,
            category=category,
            gust_override=gust_override,
            pilot_suitability=pilot_suitability(speed_kmh, gust_kmh),
        )

    def analyze(self, wind_speed_ms: float, wind_gust_ms: float) -> WindSpeedAnalysis:
        """
        Classify speeds given in m/s, as delivered by weather providers.

        Args:
            wind_speed_ms: Sustained wind speed in m/s
            wind_gust_ms: Gust speed in m/s

        Returns:
            WindSpeedAnalysis with km/h values, category and pilot suitability
        """
        return self.analyze_kmh(
            wind_speed_ms * MS_TO_KMH,
            wind_gust_ms * MS_TO_KMH,
            speed_ms=wind_speed_ms,
        )
