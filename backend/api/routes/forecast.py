"""API routes for paragliding forecasts."""
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException

from backend.config import settings
from backend.schemas.forecast import ParaglidingForecastResponse
from backend.api.dependencies import get_forecast_orchestrator
from flyability.config import MAX_FORECAST_DAYS, MAX_SEARCH_RADIUS_KM
from flyability.errors import InvalidForecastRequestError, SiteCatalogError
from flyability.models.site import Coordinates
from flyability.services.forecast_orchestrator import ForecastOrchestrator

router = APIRouter(prefix="/forecast", tags=["forecast"])


@router.get("", response_model=ParaglidingForecastResponse)
async def get_forecast(
    lat: float = Query(..., ge=-90, le=90, description="Search center latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Search center longitude"),
    radius_km: float = Query(
        settings.default_radius_km, gt=0, le=MAX_SEARCH_RADIUS_KM, description="Search radius in km"
    ),
    days: int = Query(settings.default_days, ge=1, le=MAX_FORECAST_DAYS, description="Days starting today (UTC)"),
    location_name: Optional[str] = Query(None, description="Display name for the search center"),
    orchestrator: ForecastOrchestrator = Depends(get_forecast_orchestrator),
) -> ParaglidingForecastResponse:
    """
    Get a multi-day flyability forecast for sites around a point.

    Each day ranks the sites with enough flyable daylight hours, best first,
    and carries a day rating, a confidence and a weather summary for the center.
    """
    try:
        forecast = await orchestrator.generate_forecast(
            center=Coordinates(lat, lon),
            radius_km=radius_km,
            days=days,
            location_name=location_name,
        )
    except InvalidForecastRequestError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except SiteCatalogError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return ParaglidingForecastResponse.model_validate(forecast.to_dict())
