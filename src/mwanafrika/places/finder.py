"""Partner store finder: geocode, search nearby, sort by distance."""

from typing import Any

import structlog

from mwanafrika.models.places import LatLng, NearbyStore
from mwanafrika.places.client import PlacesClient
from mwanafrika.places.geo import haversine_km

logger = structlog.get_logger()

SEARCH_QUERIES = {
    "food": "grocery store OR supermarket OR food store",
    "hygiene": "pharmacy OR health store OR convenience store",
    "connectivity": "mobile store OR telecommunication OR airtime vendor",
}
DEFAULT_QUERY = "store OR shop OR market"


def search_query_for(reward_type: str | None) -> str:
    return SEARCH_QUERIES.get(reward_type or "", DEFAULT_QUERY)


def to_store(origin: LatLng, place: dict[str, Any]) -> NearbyStore:
    loc = (place.get("geometry") or {}).get("location") or {}
    location = LatLng(lat=loc.get("lat") or 0, lng=loc.get("lng") or 0)
    photos = place.get("photos") or []
    return NearbyStore(
        place_id=place.get("place_id"),
        name=place.get("name", ""),
        address=place.get("vicinity"),
        rating=place.get("rating") or 0,
        is_open=(place.get("opening_hours") or {}).get("open_now"),
        distance=haversine_km(origin.lat, origin.lng, location.lat, location.lng),
        location=location,
        types=place.get("types") or [],
        price_level=place.get("price_level"),
        photo_reference=photos[0].get("photo_reference") if photos else None,
    )


async def find_nearby_stores(
    client: PlacesClient,
    address: str,
    reward_type: str | None = None,
    max_results: int = 10,
) -> dict[str, Any]:
    """Find partner stores near ``address`` for a reward category.

    Returns:
        ``{"userLocation": {...}, "nearbyStores": [...]}`` with stores sorted
        by ascending distance.

    Raises:
        LookupError: The address could not be geocoded.
    """
    origin = await client.geocode(address)
    if origin is None:
        raise LookupError("Could not find location for the provided address")

    places = await client.nearby(origin, search_query_for(reward_type))
    stores = [to_store(origin, place) for place in places[:max_results]]
    stores.sort(key=lambda s: s.distance)
    logger.info("stores_found", reward_type=reward_type, count=len(stores))
    return {
        "userLocation": origin.model_dump(),
        "nearbyStores": [s.model_dump(by_alias=True) for s in stores],
    }
