"""Partner store finder and rewards catalog routes."""

from datetime import datetime

import structlog
from fastapi import APIRouter, Query

from mwanafrika.api.routes import error_response
from mwanafrika.config import get_settings
from mwanafrika.errors import MissingCredentialsError, UpstreamError
from mwanafrika.models.places import LocationRequest
from mwanafrika.places.client import get_places_client
from mwanafrika.places.finder import find_nearby_stores
from mwanafrika.rewards.catalog import CATALOG

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

SETUP_HINT = "Get your API key from https://console.cloud.google.com/"


def maps_error_details(message: str) -> str:
    """Map a provider error message to an operator hint."""
    if "API key" in message:
        return "Check your Google Maps API key configuration"
    if "quota" in message:
        return "API quota exceeded. Check your Google Cloud Console billing."
    if "permission" in message:
        return (
            "API not enabled. Enable Places API and Geocoding API in Google Cloud Console."
        )
    if "network" in message:
        return "Network connectivity issue. Check your internet connection."
    return ""


@router.post("/locations")
async def nearby_stores(request: LocationRequest):
    """Find partner stores near an address for a reward category."""
    try:
        client = get_places_client()
    except MissingCredentialsError as exc:
        return error_response(
            str(exc),
            details="Set GOOGLE_MAPS_API_KEY in the environment or .env file",
            setup=SETUP_HINT,
        )
    if not request.address:
        return error_response("Address is required", status_code=400)

    try:
        return await find_nearby_stores(
            client,
            request.address,
            request.reward_type,
            max_results=get_settings().maps_max_results,
        )
    except LookupError as exc:
        return error_response(str(exc), status_code=404)
    except UpstreamError as exc:
        logger.exception("maps_lookup_failed")
        return error_response(
            str(exc),
            details=maps_error_details(str(exc)),
            timestamp=datetime.now().isoformat(),
        )
    except Exception:
        logger.exception("maps_lookup_failed")
        return error_response(
            "Failed to search nearby stores", timestamp=datetime.now().isoformat()
        )


@router.get("/locations")
async def place_details(place_id: str | None = Query(default=None, alias="placeId")):
    """Detailed information about one place."""
    if not place_id:
        return error_response("Place ID is required", status_code=400)
    try:
        client = get_places_client()
        return await client.details(place_id)
    except MissingCredentialsError as exc:
        return error_response(str(exc))
    except Exception:
        logger.exception("place_details_failed", place_id=place_id)
        return error_response("Failed to fetch place details")


@router.get("/rewards")
async def rewards_catalog() -> list[dict]:
    """List redeemable rewards grouped by category."""
    return [category.model_dump() for category in CATALOG]
