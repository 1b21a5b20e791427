"""Pydantic schemas for paragliding sites."""
from pydantic import BaseModel
from typing import List, Optional


class CoordinatesSchema(BaseModel):
    """Point in decimal degrees."""

    latitude: float
    longitude: float


class LaunchDirectionRangeSchema(BaseModel):
    """Clockwise arc of usable wind directions."""

    start_degrees: float
    stop_degrees: float


class SiteCharacteristicsSchema(BaseModel):
    height_difference_max: Optional[float] = None
    site_url: Optional[str] = None
    access_by_car: Optional[bool] = None
    access_by_foot: Optional[bool] = None
    access_by_public_transport: Optional[bool] = None
    hanggliding: Optional[bool] = None
    paragliding: Optional[bool] = None


class SiteSchema(BaseModel):
    """Base site schema."""

    id: str
    name: str
    coordinates: CoordinatesSchema
    elevation: Optional[float] = None
    launch_direction_ranges: List[LaunchDirectionRangeSchema] = []
    site_type: str
    country: Optional[str] = None
    data_source: str
    characteristics: SiteCharacteristicsSchema


class SiteWithDistanceSchema(BaseModel):
    """Site with its distance from the search center."""

    site: SiteSchema
    distance_km: float
