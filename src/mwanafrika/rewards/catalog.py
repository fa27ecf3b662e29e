"""Static rewards catalog redeemable at partner stores."""

from datetime import datetime

from pydantic import BaseModel

from ..errors import RewardNotFoundError


class RewardItem(BaseModel):
    id: str
    name: str
    description: str
    cost: int
    availability: str = "Available"
    partner: str


class RewardCategory(BaseModel):
    id: str  # doubles as the store-finder reward type
    name: str
    items: list[RewardItem]


CATALOG: list[RewardCategory] = [
    RewardCategory(
        id="food",
        name="Food & Nutrition",
        items=[
            RewardItem(id="1", name="Bread Loaf", cost=150, partner="Ubuntu Bakery",
                       description="Fresh whole wheat bread from local bakery"),
            RewardItem(id="2", name="Maize Meal (2kg)", cost=300, partner="Community Store",
                       description="High-quality maize meal for family meals"),
            RewardItem(id="3", name="Rice (1kg)", cost=250, partner="Local Market",
                       availability="Limited",
                       description="Premium white rice for nutritious meals"),
        ],
    ),
    RewardCategory(
        id="hygiene",
        name="Hygiene & Health",
        items=[
            RewardItem(id="4", name="Soap Bar", cost=80, partner="Health Plus",
                       description="Antibacterial soap for daily hygiene"),
            RewardItem(id="5", name="Toothpaste", cost=120, partner="Care Pharmacy",
                       description="Fluoride toothpaste for dental health"),
            RewardItem(id="6", name="Shampoo", cost=180, partner="Beauty Store",
                       description="Gentle shampoo for healthy hair"),
        ],
    ),
    RewardCategory(
        id="connectivity",
        name="Airtime & Data",
        items=[
            RewardItem(id="7", name="Airtime R20", cost=200, partner="MTN",
                       description="Mobile airtime for calls and SMS"),
            RewardItem(id="8", name="Data 1GB", cost=350, partner="Vodacom",
                       description="High-speed mobile data bundle"),
            RewardItem(id="9", name="Data 500MB", cost=200, partner="Cell C",
                       description="Mobile data for essential browsing"),
        ],
    ),
]


def find_reward(reward_id: str) -> tuple[RewardCategory, RewardItem]:
    for category in CATALOG:
        for item in category.items:
            if item.id == reward_id:
                return category, item
    raise RewardNotFoundError(reward_id)


def voucher_code(name: str, now: datetime) -> str:
    """Two-letter item prefix plus the last six digits of the millisecond clock."""
    millis = str(int(now.timestamp() * 1000))
    return f"{name[:2].upper()}{millis[-6:]}"
