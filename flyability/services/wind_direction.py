"""Service for scoring wind direction against launch orientations."""
from typing import Optional, Sequence

from flyability.config import (
    DIRECTION_FAVORABLE_MAX_DEG,
    DIRECTION_MARGINAL_MAX_DEG,
    DIRECTION_PERFECT_MAX_DEG,
    DIRECTION_UNFAVORABLE_MAX_DEG,
)
from flyability.models.analysis import WindDirectionAnalysis, WindDirectionCompatibility
from flyability.models.site import LaunchDirectionRange
from flyability.utils.geo_utils import degrees_to_cardinal, normalize_degrees

# (max angular distance, tier), checked in order
COMPATIBILITY_TIERS = [
    (DIRECTION_PERFECT_MAX_DEG, WindDirectionCompatibility.PERFECT),
    (DIRECTION_FAVORABLE_MAX_DEG, WindDirectionCompatibility.FAVORABLE),
    (DIRECTION_MARGINAL_MAX_DEG, WindDirectionCompatibility.MARGINAL),
    (DIRECTION_UNFAVORABLE_MAX_DEG, WindDirectionCompatibility.UNFAVORABLE),
]


def compatibility_for_distance(distance_degrees: float) -> WindDirectionCompatibility:
    """Map the angular distance to the nearest launch arc to a tier."""
    for max_distance, tier in COMPATIBILITY_TIERS:
        if distance_degrees <= max_distance:
            return tier
    return WindDirectionCompatibility.DANGEROUS


class WindDirectionAnalyzer:
    """Scores a wind direction against a site's launch direction ranges."""

    def analyze(
        self,
        wind_direction_degrees: float,
        launch_ranges: Sequence[LaunchDirectionRange],
    ) -> WindDirectionAnalysis:
        """
        Find the launch range closest to the wind and rate the match.

        A wind inside any range has distance 0. Otherwise the distance is the
        smallest circular distance to an edge of any range. A site without
        launch ranges cannot be evaluated: it is rated Dangerous with no distance.

        Args:
            wind_direction_degrees: Direction the wind comes from (0 = north)
            launch_ranges: The site's launch direction ranges

        Returns:
            WindDirectionAnalysis with the best range and compatibility tier
        """
        direction = normalize_degrees(wind_direction_degrees)
        cardinal = degrees_to_cardinal(direction)

        best_range: Optional[LaunchDirectionRange] = None
        min_distance = float("inf")

        for launch_range in launch_ranges:
            distance = launch_range.min_distance(direction)
            if distance < min_distance:
                min_distance = distance
                best_range = launch_range
            if distance == 0.0:
                break

        if best_range is None:
            compatibility = WindDirectionCompatibility.DANGEROUS
        else:
            compatibility = compatibility_for_distance(min_distance)

        return WindDirectionAnalysis(
            wind_direction_degrees=direction,
            cardinal=cardinal,
            min_angular_distance=min_distance if best_range is not None else None,
            best_launch_range=best_range,
            compatibility=compatibility,
        )
