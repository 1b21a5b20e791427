"""Configuration constants for the flyability engine."""
from datetime import time

# Unit conversion
MS_TO_KMH = 3.6

# Wind direction compatibility: max angular distance (degrees) per tier
DIRECTION_PERFECT_MAX_DEG = 20.0
DIRECTION_FAVORABLE_MAX_DEG = 45.0
DIRECTION_MARGINAL_MAX_DEG = 90.0
DIRECTION_UNFAVORABLE_MAX_DEG = 150.0

# Wind speed categories: max sustained speed (km/h) per category
SPEED_LIGHT_MAX_KMH = 10.0
SPEED_MODERATE_MAX_KMH = 15.0
SPEED_STRONG_MAX_KMH = 20.0
# Gusts above this force the Dangerous category
GUST_DANGEROUS_KMH = 40.0

# Pilot suitability limits: (max speed km/h, max gust km/h)
BEGINNER_LIMITS_KMH = (10.0, 15.0)
INTERMEDIATE_LIMITS_KMH = (15.0, 25.0)
ADVANCED_LIMITS_KMH = (30.0, 40.0)

# Tier scores (0-10)
DIRECTION_SCORES = {
    "perfect": 10.0,
    "favorable": 8.0,
    "marginal": 6.0,
    "unfavorable": 3.0,
    "dangerous": 0.0,
}
SPEED_SCORES = {
    "light": 9.0,
    "moderate": 8.0,
    "strong": 5.0,
    "dangerous": 0.0,
}
DIRECTION_WEIGHT = 0.6
SPEED_WEIGHT = 0.4

# An hour is flyable when its score reaches this value
FLYABLE_SCORE_THRESHOLD = 5.0

# A site only makes the daily ranking with at least this share of flyable hours
MIN_FAVORABLE_HOURS_PERCENTAGE = 25.0

# Day rating thresholds on the best qualifying site score
DAY_RATING_EXCELLENT_MIN = 8.0
DAY_RATING_GOOD_MIN = 6.0
DAY_RATING_MARGINAL_MIN = 4.0
DAY_RATING_POOR_MIN = 2.0

# Forecast confidence per day offset: (last day offset inclusive, confidence)
CONFIDENCE_STEPS = [
    (0, 0.95),
    (1, 0.90),
    (2, 0.85),
    (4, 0.75),
    (7, 0.65),
]
CONFIDENCE_BEYOND_STEPS = 0.50

# Safety margins applied to each hourly score
CONFIDENCE_HORIZON_HOURS = 72.0
CONFIDENCE_MAX_LOSS = 0.3  # floors at 0.7
DEGRADATION_HORIZON_HOURS = 168.0
DEGRADATION_MAX_LOSS = 0.2  # floors at 0.8
DIRECTION_UNCERTAINTY_DEG_PER_HOUR = 2.0
DIRECTION_UNCERTAINTY_MAX_DEG = 15.0
SPEED_SAFETY_FACTOR = 0.8
LOW_CONFIDENCE_SAFETY_FACTOR = 0.8

# Daylight
# Sun depression angle: 0 = geometric sunrise/sunset, 6 = civil twilight
DAYLIGHT_DEPRESSION_ANGLE = 0.0
# Window used when sunrise/sunset cannot be computed (UTC)
FALLBACK_DAYLIGHT_START = time(6, 0)
FALLBACK_DAYLIGHT_END = time(20, 0)
# Sunrise/sunset entries kept per calculator (one per site and date)
SOLAR_CACHE_SIZE = 4096

# Request limits
MAX_FORECAST_DAYS = 16
MAX_SEARCH_RADIUS_KM = 500.0

# Max weather fetches in flight at once
MAX_CONCURRENT_FETCHES = 8

EARTH_RADIUS_KM = 6371.0
