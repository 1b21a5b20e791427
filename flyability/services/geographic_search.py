"""Service for finding sites around a search center."""
from typing import List, Sequence
import numpy as np

from flyability.models.site import Coordinates, ParaglidingSite, SiteWithDistance
from flyability.utils.geo_utils import haversine_km_array


class GeographicSearch:
    """Radius search over a site catalog."""

    def distances_km(
        self,
        sites: Sequence[ParaglidingSite],
        center: Coordinates,
    ) -> np.ndarray:
        """Great-circle distance from the center to every site, in catalog order."""
        if not sites:
            return np.zeros(0, dtype=np.float64)

        latitudes = np.fromiter((s.coordinates.latitude for s in sites), dtype=np.float64, count=len(sites))
        longitudes = np.fromiter((s.coordinates.longitude for s in sites), dtype=np.float64, count=len(sites))
        return haversine_km_array(center.latitude, center.longitude, latitudes, longitudes)

    def sites_within_radius(
        self,
        sites: Sequence[ParaglidingSite],
        center: Coordinates,
        radius_km: float,
    ) -> List[SiteWithDistance]:
        """
        Find sites within a radius of a center point.

        Args:
            sites: Site catalog (not modified)
            center: Search center
            radius_km: Search radius in kilometers (boundary inclusive)

        Returns:
            Matching sites with their distances, in catalog order
        """
        distances = self.distances_km(sites, center)
        passing_idx = np.where(distances <= radius_km)[0]

        return [
            SiteWithDistance(site=sites[i], distance_km=float(distances[i]))
            for i in passing_idx
        ]

    @staticmethod
    def sort_by_distance(matches: Sequence[SiteWithDistance]) -> List[SiteWithDistance]:
        """Order matches nearest first (stable for equal distances)."""
        return sorted(matches, key=lambda m: m.distance_km)
