"""Geocoding and place-search client (Google Maps web services over httpx)."""

import functools
from typing import Any

import httpx
import structlog

from mwanafrika.config import get_settings
from mwanafrika.errors import MissingCredentialsError, UpstreamError
from mwanafrika.models.places import LatLng

logger = structlog.get_logger()

MAPS_API_URL = "https://maps.googleapis.com/maps/api"
DETAIL_FIELDS = (
    "name",
    "formatted_address",
    "formatted_phone_number",
    "opening_hours",
    "website",
    "rating",
    "reviews",
)

_OK_STATUSES = {"OK", "ZERO_RESULTS"}


def check_maps_key(api_key: str | None) -> str:
    """Reject a missing or still-placeholder maps key."""
    if not api_key:
        raise MissingCredentialsError("Missing GOOGLE_MAPS_API_KEY in environment variables")
    if "your_" in api_key:
        raise MissingCredentialsError(
            "Invalid Google Maps API key - still using placeholder value"
        )
    return api_key


class PlacesClient:
    """Async client for the Geocoding and Places web services.

    Args:
        api_key: Google Maps API key.
        region: ccTLD region bias for geocoding.
        radius_m: Nearby-search radius in metres.
        http_client: Optional pre-built httpx client (tests inject a mock transport).
    """

    def __init__(
        self,
        api_key: str,
        region: str = "za",
        radius_m: int = 5000,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.region = region
        self.radius_m = radius_m
        self._http = http_client or httpx.AsyncClient(
            base_url=MAPS_API_URL,
            timeout=httpx.Timeout(15.0),
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._http.get(path, params={**params, "key": self.api_key})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(str(exc), status=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"network error: {exc}") from exc

        data = response.json()
        status = data.get("status", "OK")
        if status not in _OK_STATUSES:
            message = data.get("error_message") or status
            logger.warning("maps_request_failed", path=path, status=status)
            raise UpstreamError(message, status=429 if status == "OVER_QUERY_LIMIT" else None)
        return data

    async def geocode(self, address: str) -> LatLng | None:
        """Resolve a free-text address; None when nothing matches."""
        data = await self._get(
            "/geocode/json", {"address": address, "region": self.region}
        )
        results = data.get("results") or []
        if not results:
            return None
        return LatLng(**results[0]["geometry"]["location"])

    async def nearby(self, location: LatLng, keyword: str) -> list[dict[str, Any]]:
        data = await self._get(
            "/place/nearbysearch/json",
            {
                "location": f"{location.lat},{location.lng}",
                "radius": self.radius_m,
                "keyword": keyword,
            },
        )
        return data.get("results") or []

    async def details(self, place_id: str) -> dict[str, Any]:
        data = await self._get(
            "/place/details/json",
            {"place_id": place_id, "fields": ",".join(DETAIL_FIELDS)},
        )
        return data.get("result") or {}


@functools.lru_cache
def get_places_client() -> PlacesClient:
    """Process-wide places client; raises MissingCredentialsError without a usable key."""
    settings = get_settings()
    return PlacesClient(
        api_key=check_maps_key(settings.google_maps_api_key),
        region=settings.maps_region,
        radius_m=settings.maps_search_radius_m,
    )
