"""Place-search models for the partner store finder."""

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    lat: float = 0.0
    lng: float = 0.0


class NearbyStore(BaseModel):
    """A partner store candidate, serialised with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    place_id: str | None = Field(default=None, alias="placeId")
    name: str = ""
    address: str | None = None
    rating: float = 0
    is_open: bool | None = Field(default=None, alias="isOpen")
    distance: float
    location: LatLng
    types: list[str] = Field(default_factory=list)
    price_level: int | None = Field(default=None, alias="priceLevel")
    photo_reference: str | None = Field(default=None, alias="photoReference")


class LocationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str | None = None
    reward_type: str | None = Field(default=None, alias="rewardType")
