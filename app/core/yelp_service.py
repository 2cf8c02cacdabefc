"""
Yelp Fusion API client for business search and business details.
"""

import logging
from typing import Any

import requests

from app.core.errors import ConfigurationError, ProviderError
from app.core.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class YelpService:
    """Service for interacting with the Yelp Fusion API."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        if not settings.yelp_api_key:
            raise ConfigurationError("Yelp API key not configured")

        self.api_base = settings.yelp_api_base.rstrip("/")
        self.timeout = settings.yelp_request_timeout
        self.headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {settings.yelp_api_key}",
        }

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.api_base}{path}"
        try:
            response = requests.get(url, headers=self.headers, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise ProviderError(f"Yelp request to {path} failed: {e}", status_code) from e
        except requests.exceptions.RequestException as e:
            # also covers unparseable JSON bodies (requests.JSONDecodeError)
            raise ProviderError(f"Yelp request to {path} failed: {e}") from e

    def search_businesses(
        self,
        location: str,
        term: str = "",
        categories: str = "",
        limit: int = 50,
        sort_by: str = "best_match",
    ) -> dict[str, Any]:
        """
        Search for businesses in a location.

        Args:
            location: Free-text location (e.g., "Paris, France")
            term: Search term (optional)
            categories: Comma-separated Yelp category aliases (optional)
            limit: Maximum number of results (Yelp caps this at 50)
            sort_by: "best_match", "rating", "review_count" or "distance"

        Returns:
            Raw response payload: {"businesses": [...], "total": int, "region": {...}}

        Raises:
            ProviderError: on network failure, non-2xx status or unparseable body
        """
        params = {
            "location": location,
            "term": term,
            "categories": categories,
            "limit": min(limit, 50),
            "sort_by": sort_by,
        }
        logger.debug(f"Yelp search: {params}")
        return self._get("/businesses/search", params=params)

    def get_business(self, business_id: str) -> dict[str, Any]:
        """Fetch full details for a single business."""
        return self._get(f"/businesses/{business_id}")

