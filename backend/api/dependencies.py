"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from backend.config import settings
from backend.data.open_meteo_provider import OpenMeteoWeatherProvider
from backend.data.site_repository import SiteRepository
from flyability.services.forecast_orchestrator import ForecastOrchestrator
from flyability.services.geographic_search import GeographicSearch


@lru_cache()
def get_site_repository() -> SiteRepository:
    """Get cached site repository instance."""
    return SiteRepository()


@lru_cache()
def get_weather_provider() -> OpenMeteoWeatherProvider:
    """Get cached Open-Meteo provider instance."""
    return OpenMeteoWeatherProvider()


def get_geographic_search() -> GeographicSearch:
    return GeographicSearch()


@lru_cache()
def get_forecast_orchestrator() -> ForecastOrchestrator:
    """Get cached forecast orchestrator instance."""
    return ForecastOrchestrator(
        site_provider=get_site_repository(),
        weather_provider=get_weather_provider(),
        max_concurrent_fetches=settings.max_concurrent_fetches,
    )
