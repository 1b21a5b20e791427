"""Flyability engine exceptions."""


class FlyabilityError(Exception):
    """Base exception for all flyability engine errors."""


class InvalidForecastRequestError(FlyabilityError, ValueError):
    """Raised when forecast parameters are rejected before any work starts."""


class WeatherUnavailableError(FlyabilityError):
    """Raised when hourly weather for a coordinate cannot be retrieved."""

    def __init__(self, latitude: float, longitude: float, reason: str):
        self.latitude = latitude
        self.longitude = longitude
        self.reason = reason
        super().__init__(f"No weather for ({latitude:.4f}, {longitude:.4f}): {reason}")


class SolarCalculationError(FlyabilityError):
    """Raised when sunrise/sunset cannot be computed for a location."""


class SiteCatalogError(FlyabilityError):
    """Raised when the site catalog cannot be loaded."""
