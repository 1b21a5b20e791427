"""API routes for sites."""
from typing import List
from fastapi import APIRouter, Depends, Query, HTTPException

from backend.config import settings
from backend.schemas.site import SiteSchema, SiteWithDistanceSchema
from backend.data.site_repository import SiteRepository
from backend.api.dependencies import get_geographic_search, get_site_repository
from flyability.config import MAX_SEARCH_RADIUS_KM
from flyability.errors import SiteCatalogError
from flyability.models.analysis import to_primitive_dict
from flyability.models.site import Coordinates
from flyability.services.geographic_search import GeographicSearch

router = APIRouter(prefix="/sites", tags=["sites"])


@router.get("", response_model=List[SiteWithDistanceSchema])
async def get_sites_nearby(
    lat: float = Query(..., ge=-90, le=90, description="Search center latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Search center longitude"),
    radius_km: float = Query(settings.default_radius_km, gt=0, le=MAX_SEARCH_RADIUS_KM, description="Search radius in km"),
    site_repo: SiteRepository = Depends(get_site_repository),
    search: GeographicSearch = Depends(get_geographic_search),
) -> List[SiteWithDistanceSchema]:
    """Get sites within a radius of a point, nearest first."""
    try:
        catalog = site_repo.sites_in_catalog()
    except SiteCatalogError as e:
        raise HTTPException(status_code=503, detail=str(e))

    matches = search.sort_by_distance(
        search.sites_within_radius(catalog, Coordinates(lat, lon), radius_km)
    )
    return [SiteWithDistanceSchema.model_validate(to_primitive_dict(m)) for m in matches]


@router.get("/{site_id}", response_model=SiteSchema)
async def get_site(
    site_id: str,
    site_repo: SiteRepository = Depends(get_site_repository),
) -> SiteSchema:
    """Get a single site by ID."""
    try:
        site = site_repo.get_site(site_id)
    except SiteCatalogError as e:
        raise HTTPException(status_code=503, detail=str(e))
    if site is None:
        raise HTTPException(status_code=404, detail="Site not found")
    return SiteSchema.model_validate(to_primitive_dict(site))
