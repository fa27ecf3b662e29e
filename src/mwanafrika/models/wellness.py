"""Wellness companion request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from mwanafrika.wellness.companion import Volunteer


class WellnessChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1, max_length=128)
    message: str


class WellnessChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reply: str
    level: int
    category: str
    show_banner: bool = Field(alias="showBanner")
    show_crisis_alert: bool = Field(alias="showCrisisAlert")
    volunteers: list[Volunteer] | None = None


class MoodCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mood: str
    recent_moods: list[str] = Field(default_factory=list, alias="recentMoods")
