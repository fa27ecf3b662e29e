"""User profile model: identity, gamification counters and learning progress."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

XP_PER_LEVEL = 1000


def level_for_xp(xp: int) -> int:
    """Level is derived from accumulated XP, never set independently."""
    return xp // XP_PER_LEVEL + 1


class RewardStatus(StrEnum):
    """Redemption lifecycle states."""

    PENDING = "pending"
    COLLECTED = "collected"
    EXPIRED = "expired"


class SubjectProgress(BaseModel):
    lessons_completed: int = 0
    total_lessons: int = 20
    progress: int = 0  # percent
    last_accessed: datetime | None = None


class DailyQuest(BaseModel):
    id: str
    title: str
    description: str = ""
    progress: int = 0
    total: int
    reward: int
    completed: bool = False
    category: str = ""


class RedeemedReward(BaseModel):
    id: str
    name: str
    coins: int
    redeemed_at: datetime = Field(default_factory=datetime.now)
    status: RewardStatus = RewardStatus.PENDING
    code: str | None = None


def default_subject_progress() -> dict[str, SubjectProgress]:
    return {
        key: SubjectProgress()
        for key in ("mathematics", "science", "english", "lifeskills")
    }


class UserProfile(BaseModel):
    uid: str
    email: str | None = None
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    country: str | None = None
    language: str = "en"
    school: str | None = None
    grade: str | None = None

    level: int = 1
    skill_coins: int = 0
    xp: int = 0
    streak: int = 0
    join_date: datetime = Field(default_factory=datetime.now)
    last_login_date: datetime | None = None
    updated_at: datetime = Field(default_factory=datetime.now)

    total_lessons_completed: int = 0
    completed_lessons: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)
    subject_progress: dict[str, SubjectProgress] = Field(
        default_factory=default_subject_progress
    )
    daily_quests: list[DailyQuest] = Field(default_factory=list)
    rewards_redeemed: list[RedeemedReward] = Field(default_factory=list)

    def find_quest(self, quest_id: str) -> DailyQuest | None:
        return next((q for q in self.daily_quests if q.id == quest_id), None)


class PreferencesUpdate(BaseModel):
    country: str | None = None
    language: str | None = None
    school: str | None = None
    grade: str | None = None


class LessonCompletion(BaseModel):
    lesson_id: str
    subject: str
    coins: int = Field(default=0, ge=0)
    xp: int = Field(default=0, ge=0)


class QuestProgressUpdate(BaseModel):
    progress: int = Field(ge=0)


class RedemptionRequest(BaseModel):
    reward_id: str


class RewardStatusUpdate(BaseModel):
    status: RewardStatus


class SignInRequest(BaseModel):
    email: str | None = None
    display_name: str | None = None
