"""Backend configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings

from flyability.config import MAX_CONCURRENT_FETCHES, MAX_FORECAST_DAYS


class Settings(BaseSettings):
    """Application settings."""

    # Data paths
    project_root: Path = Path(__file__).parent.parent
    data_dir: Path = project_root / "data"
    sites_file: Path = data_dir / "sites.json"
    include_winch_sites: bool = False

    # Weather API
    open_meteo_base_url: str = "https://api.open-meteo.com"
    weather_timeout_seconds: float = 30.0
    weather_forecast_days: int = MAX_FORECAST_DAYS  # days requested from the weather API
    max_concurrent_fetches: int = MAX_CONCURRENT_FETCHES

    # API settings
    api_title: str = "Paragliding Forecast API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    # Default query values
    default_radius_km: float = 50.0
    default_days: int = 3

    class Config:
        env_prefix = "PGFORECAST_"


settings = Settings()
