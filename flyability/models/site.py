"""Paragliding site models."""
from enum import Enum
from typing import List, Optional, Tuple
from attrs import field, frozen

from flyability.utils.geo_utils import (
    angular_difference,
    haversine_km,
    normalize_degrees,
    parse_direction_text,
)


def _check_latitude(instance, attribute, value):
    if not -90.0 <= value <= 90.0:
        raise ValueError(f"latitude must be within [-90, 90], got {value}")


def _check_longitude(instance, attribute, value):
    if not -180.0 <= value <= 180.0:
        raise ValueError(f"longitude must be within [-180, 180], got {value}")


@frozen
class Coordinates:
    """A point on the earth's surface in decimal degrees."""

    latitude: float = field(converter=float, validator=_check_latitude)
    longitude: float = field(converter=float, validator=_check_longitude)

    def distance_to(self, other: "Coordinates") -> float:
        """Great-circle distance to another point in kilometers."""
        return haversine_km(self.latitude, self.longitude, other.latitude, other.longitude)


@frozen
class LaunchDirectionRange:
    """
    Arc of wind directions a launch can be used in.

    The arc runs clockwise from ``start_degrees`` to ``stop_degrees``; when
    start is greater than stop the arc wraps through north (e.g. 337.5 -> 22.5).
    """

    start_degrees: float = field(converter=lambda v: normalize_degrees(float(v)))
    stop_degrees: float = field(converter=lambda v: normalize_degrees(float(v)))

    @property
    def wraps(self) -> bool:
        """Whether the arc crosses 0/360 degrees."""
        return self.start_degrees > self.stop_degrees

    def contains(self, angle: float) -> bool:
        """Check if a heading lies inside the arc (edges included)."""
        angle = normalize_degrees(angle)
        if self.wraps:
            return angle >= self.start_degrees or angle <= self.stop_degrees
        return self.start_degrees <= angle <= self.stop_degrees

    def min_distance(self, angle: float) -> float:
        """Angular distance from a heading to the arc; 0 when inside."""
        if self.contains(angle):
            return 0.0
        return min(
            angular_difference(angle, self.start_degrees),
            angular_difference(angle, self.stop_degrees),
        )

    @classmethod
    def from_text(cls, text: str) -> List["LaunchDirectionRange"]:
        """Build ranges from compass text such as "SSW-WSW" or "O, W"."""
        return [cls(start, stop) for start, stop in parse_direction_text(text)]


class SiteType(str, Enum):
    """How pilots get airborne at a site."""

    HANG = "hang"
    WINCH = "winch"
    UNKNOWN = "unknown"


class DataSource(str, Enum):
    """Where a site record came from."""

    DHV = "dhv"
    PARAGLIDING_EARTH = "paragliding_earth"
    CUSTOM = "custom"


@frozen
class SiteCharacteristics:
    """Optional descriptive attributes of a site."""

    height_difference_max: Optional[float] = None
    site_url: Optional[str] = None
    access_by_car: Optional[bool] = None
    access_by_foot: Optional[bool] = None
    access_by_public_transport: Optional[bool] = None
    hanggliding: Optional[bool] = None
    paragliding: Optional[bool] = None


@frozen
class ParaglidingSite:
    """A paragliding launch site as supplied by a site catalog."""

    id: str
    name: str
    coordinates: Coordinates
    elevation: Optional[float] = None
    launch_direction_ranges: Tuple[LaunchDirectionRange, ...] = field(
        default=(), converter=tuple
    )
    site_type: SiteType = SiteType.HANG
    country: Optional[str] = None
    data_source: DataSource = DataSource.CUSTOM
    characteristics: SiteCharacteristics = field(factory=SiteCharacteristics)

    @property
    def has_launch_directions(self) -> bool:
        return len(self.launch_direction_ranges) > 0


@frozen
class SiteWithDistance:
    """A site paired with its distance from a search center."""

    site: ParaglidingSite
    distance_km: float
