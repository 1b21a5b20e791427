"""Geographic and angular utility functions."""
import re
from typing import List, Tuple
import numpy as np

from flyability.config import EARTH_RADIUS_KM

CARDINAL_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

# Compass text used by site catalogs, including German labels ("O" = Ost = east)
COMPASS_DEGREES = {point: i * 22.5 for i, point in enumerate(CARDINAL_POINTS)}
COMPASS_DEGREES.update({
    point.replace("E", "O"): degrees
    for point, degrees in list(COMPASS_DEGREES.items())
    if "E" in point
})

# Half-width of the arc assigned to a single compass point
SINGLE_DIRECTION_HALF_WIDTH = 22.5


def normalize_degrees(angle: float) -> float:
    """Normalize an angle to [0, 360)."""
    return angle % 360.0


def angular_difference(a: float, b: float) -> float:
    """Smallest circular distance between two headings, in [0, 180]."""
    diff = abs(normalize_degrees(a) - normalize_degrees(b))
    return min(diff, 360.0 - diff)


def degrees_to_cardinal(degrees: float) -> str:
    """Convert a heading to a 16-point compass label."""
    index = int((normalize_degrees(degrees) + 11.25) // 22.5) % 16
    return CARDINAL_POINTS[index]


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometers."""
    return float(haversine_km_array(lat1, lon1, np.array([lat2]), np.array([lon2]))[0])


def haversine_km_array(
    latitude: float,
    longitude: float,
    latitudes: np.ndarray,
    longitudes: np.ndarray,
) -> np.ndarray:
    """
    Great-circle distances from one point to many points.

    Uses the haversine formula on a spherical earth, which is accurate to
    well under 1% for search radii of a few hundred kilometers.

    Args:
        latitude: Latitude of the reference point in degrees
        longitude: Longitude of the reference point in degrees
        latitudes: Array of target latitudes in degrees
        longitudes: Array of target longitudes in degrees

    Returns:
        Array of distances in kilometers
    """
    lat1 = np.radians(latitude)
    lon1 = np.radians(longitude)
    lat2 = np.radians(np.asarray(latitudes, dtype=np.float64))
    lon2 = np.radians(np.asarray(longitudes, dtype=np.float64))

    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    # Clip guards against rounding just above 1 for antipodal points
    c = 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
    return EARTH_RADIUS_KM * c


def parse_direction_text(text: str) -> List[Tuple[float, float]]:
    """
    Convert compass text from a site catalog into launch arcs.

    "SSW-WSW" is a single arc from SSW to WSW (clockwise). Directions
    separated by commas or spaces ("O, W") each become an arc of
    +/- 22.5 degrees around the point. Unknown tokens are ignored.

    Args:
        text: Compass text, e.g. "SW-W", "N, NE", "O W"

    Returns:
        List of (start_degrees, stop_degrees) tuples
    """
    arcs = []
    text = re.sub(r"\s*-\s*", "-", text.strip().upper())
    for part in re.split(r"[,\s]+", text):
        if not part:
            continue

        if "-" in part:
            start_text, _, stop_text = part.partition("-")
            if start_text in COMPASS_DEGREES and stop_text in COMPASS_DEGREES:
                arcs.append((COMPASS_DEGREES[start_text], COMPASS_DEGREES[stop_text]))
            continue

        if part in COMPASS_DEGREES:
            center = COMPASS_DEGREES[part]
            arcs.append((
                normalize_degrees(center - SINGLE_DIRECTION_HALF_WIDTH),
                normalize_degrees(center + SINGLE_DIRECTION_HALF_WIDTH),
            ))

    return arcs
