"""Service for merging hourly scores into daily flying windows and rankings."""
from datetime import timedelta
from typing import List, Optional, Sequence
import numpy as np

from flyability.config import (
    CONFIDENCE_BEYOND_STEPS,
    CONFIDENCE_STEPS,
    DAY_RATING_EXCELLENT_MIN,
    DAY_RATING_GOOD_MIN,
    DAY_RATING_MARGINAL_MIN,
    DAY_RATING_POOR_MIN,
    MIN_FAVORABLE_HOURS_PERCENTAGE,
)
from flyability.models.analysis import HourlyScore
from flyability.models.forecast import (
    DailySiteAnalysis,
    DayRating,
    FlyableRange,
    SiteFlyabilityRating,
)

ONE_HOUR = timedelta(hours=1)

# (min best score, rating), checked in order
DAY_RATING_THRESHOLDS = [
    (DAY_RATING_EXCELLENT_MIN, DayRating.EXCELLENT),
    (DAY_RATING_GOOD_MIN, DayRating.GOOD),
    (DAY_RATING_MARGINAL_MIN, DayRating.MARGINAL),
    (DAY_RATING_POOR_MIN, DayRating.POOR),
]


def merge_flyable_ranges(hourly_scores: Sequence[HourlyScore]) -> List[FlyableRange]:
    """
    Group consecutive flyable hours into ranges.

    A run continues while each flyable hour is exactly one hour after the
    previous one; a non-flyable hour or a missing timestamp closes it.

    Args:
        hourly_scores: Scores for one site on one day, ordered by timestamp

    Returns:
        Non-overlapping ranges sorted by start
    """
    ranges = []
    run: List[HourlyScore] = []

    def close_run():
        if run:
            ranges.append(FlyableRange(
                start=run[0].timestamp,
                end=run[-1].timestamp,
                avg_score=float(np.mean([h.score for h in run])),
            ))

    for hour in hourly_scores:
        if not hour.is_flyable:
            close_run()
            run = []
            continue

        if run and hour.timestamp - run[-1].timestamp != ONE_HOUR:
            close_run()
            run = []
        run.append(hour)

    close_run()
    return ranges


def best_flying_window(ranges: Sequence[FlyableRange]) -> Optional[FlyableRange]:
    """Range with the highest average score; the earliest wins ties."""
    best = None
    for flyable_range in ranges:
        if best is None or flyable_range.avg_score > best.avg_score:
            best = flyable_range
    return best


def favorable_hours_percentage(hourly_scores: Sequence[HourlyScore]) -> float:
    """Share of analyzed hours that are flyable, 0 when nothing was analyzed."""
    if not hourly_scores:
        return 0.0
    flyable = sum(1 for h in hourly_scores if h.is_flyable)
    return 100.0 * flyable / len(hourly_scores)


def rate_day(best_score: Optional[float]) -> DayRating:
    """Day rating from the best qualifying site score (None = no qualifying site)."""
    if best_score is None:
        return DayRating.NOT_FLYABLE
    for min_score, rating in DAY_RATING_THRESHOLDS:
        if best_score >= min_score:
            return rating
    return DayRating.NOT_FLYABLE


def forecast_confidence_for_day(day_offset: int) -> float:
    """Trust in a day's forecast, stepping down with distance from today."""
    for last_offset, confidence in CONFIDENCE_STEPS:
        if day_offset <= last_offset:
            return confidence
    return CONFIDENCE_BEYOND_STEPS


class DailyAggregator:
    """Turns one site's hourly scores into a daily verdict and ranks sites."""

    def __init__(self, min_favorable_percentage: float = MIN_FAVORABLE_HOURS_PERCENTAGE):
        self.min_favorable_percentage = min_favorable_percentage

    def aggregate(self, site_id: str, hourly_scores: Sequence[HourlyScore]) -> DailySiteAnalysis:
        """
        Aggregate one site's daylight hours for one day.

        Args:
            site_id: Site the scores belong to
            hourly_scores: Daylight-filtered hourly scores for the day

        Returns:
            DailySiteAnalysis; ``qualifies`` is set when enough hours are flyable
        """
        ordered = sorted(hourly_scores, key=lambda h: h.timestamp)
        ranges = merge_flyable_ranges(ordered)
        percentage = favorable_hours_percentage(ordered)
        best_score = max((h.score for h in ordered), default=0.0)

        return DailySiteAnalysis(
            site_id=site_id,
            hourly_scores=ordered,
            flyable_ranges=ranges,
            best_score=best_score,
            favorable_hours_percentage=percentage,
            best_flying_window=best_flying_window(ranges),
            qualifies=bool(ordered) and percentage >= self.min_favorable_percentage,
        )

    @staticmethod
    def rank_sites(ratings: Sequence[SiteFlyabilityRating]) -> List[SiteFlyabilityRating]:
        """Order ratings by best score, highest first (stable for ties)."""
        return sorted(ratings, key=lambda r: r.best_score, reverse=True)

    @staticmethod
    def day_rating(ranked: Sequence[SiteFlyabilityRating]) -> DayRating:
        return rate_day(ranked[0].best_score if ranked else None)
