"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from backend.config import settings
from backend.api.routes import forecast, sites
from backend.api.dependencies import get_site_repository, get_weather_provider
from flyability.errors import SiteCatalogError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Preload the site catalog on startup, close the weather client on shutdown."""
    try:
        get_site_repository().preload()
    except SiteCatalogError as e:
        # Site endpoints answer 503 until the catalog is readable
        logger.warning("Site catalog not loaded at startup: %s", e)
    yield
    await get_weather_provider().aclose()

# Create FastAPI app with orjson for faster JSON serialization
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    redirect_slashes=False,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(forecast.router)
app.include_router(sites.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8001)
