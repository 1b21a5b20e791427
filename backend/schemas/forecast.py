"""Pydantic schemas for paragliding forecasts."""
from datetime import date, datetime
from pydantic import BaseModel
from typing import List, Optional

from backend.schemas.site import CoordinatesSchema, LaunchDirectionRangeSchema, SiteSchema


class WindDirectionAnalysisSchema(BaseModel):
    wind_direction_degrees: float
    cardinal: str
    min_angular_distance: Optional[float] = None
    best_launch_range: Optional[LaunchDirectionRangeSchema] = None
    compatibility: str


class PilotSuitabilitySchema(BaseModel):
    beginner: bool
    intermediate: bool
    advanced: bool


class WindSpeedAnalysisSchema(BaseModel):
    wind_speed_ms: float
    wind_speed_kmh: float
    wind_gust_kmh: float
    category: str
    gust_override: bool
    pilot_suitability: PilotSuitabilitySchema


class SafetyMarginsSchema(BaseModel):
    hours_ahead: float
    direction_uncertainty: float
    speed_safety_factor: float
    forecast_confidence: float
    time_degradation: float


class FlyabilityAnalysisSchema(BaseModel):
    """Full analysis behind one hourly score."""

    wind_direction: WindDirectionAnalysisSchema
    wind_speed: WindSpeedAnalysisSchema
    safety_margins: SafetyMarginsSchema
    explanation: str
    reasoning: List[str]


class HourlyScoreSchema(BaseModel):
    timestamp: datetime
    score: float
    analysis: FlyabilityAnalysisSchema
    is_flyable: bool


class FlyableRangeSchema(BaseModel):
    start: datetime
    end: datetime
    avg_score: float


class DailySiteAnalysisSchema(BaseModel):
    """Hourly scores of one site merged into flying windows."""

    site_id: str
    hourly_scores: List[HourlyScoreSchema]
    flyable_ranges: List[FlyableRangeSchema]
    best_score: float
    favorable_hours_percentage: float
    best_flying_window: Optional[FlyableRangeSchema] = None
    qualifies: bool


class SiteFlyabilityRatingSchema(BaseModel):
    site: SiteSchema
    best_score: float
    distance_km: float
    daily_analysis: DailySiteAnalysisSchema
    best_hour: Optional[HourlyScoreSchema] = None
    reasoning: str


class TemperatureRangeSchema(BaseModel):
    min: float
    max: float


class SpeedRangeSchema(BaseModel):
    min: float  # km/h
    max: float  # km/h


class WindSummarySchema(BaseModel):
    direction: str
    direction_degrees: float
    speed_range: SpeedRangeSchema


class DailyWeatherSummarySchema(BaseModel):
    description: str
    temperature_range: TemperatureRangeSchema
    wind_summary: WindSummarySchema
    precipitation_probability: int
    cloud_cover: int


class DailyFlyabilityForecastSchema(BaseModel):
    """Ranked sites for one day."""

    date: date
    day_name: str
    weather_summary: DailyWeatherSummarySchema
    site_ratings: List[SiteFlyabilityRatingSchema]
    day_rating: str
    confidence: float
    explanation: str


class ParaglidingForecastResponse(BaseModel):
    """Response schema for a multi-day forecast."""

    location: CoordinatesSchema
    radius_km: float
    daily_forecasts: List[DailyFlyabilityForecastSchema]
    generated_at: datetime
    sites_in_area: List[SiteSchema]
    location_name: Optional[str] = None
