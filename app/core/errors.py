"""
Error types raised by the aggregation and itinerary services.

Routers translate these into HTTP responses; services never raise HTTPException.
"""


class TripPlannerError(Exception):
    """Base class for service-level errors."""


class ConfigurationError(TripPlannerError):
    """A required setting (e.g. the Yelp API key) is missing."""


class ProviderError(TripPlannerError):
    """The business-search provider failed on a query the caller depends on."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidLocationError(TripPlannerError, ValueError):
    """Location is missing or empty."""


class NoPlacesAvailableError(TripPlannerError, ValueError):
    """Itinerary generation was asked to work with an empty pool of places."""
