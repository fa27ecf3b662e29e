"""User profile, progress, quest, redemption and leaderboard routes."""

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mwanafrika.api.routes import error_response
from mwanafrika.errors import (
    InsufficientCoinsError,
    ProfileNotFoundError,
    QuestNotFoundError,
    RewardNotFoundError,
)
from mwanafrika.gamification import progress
from mwanafrika.models.user_profile import (
    LessonCompletion,
    PreferencesUpdate,
    QuestProgressUpdate,
    RedemptionRequest,
    RewardStatusUpdate,
    SignInRequest,
    UserProfile,
)
from mwanafrika.rewards.catalog import find_reward
from mwanafrika.storage.user_profile import (
    get_or_create_profile,
    list_profiles,
    load_profile,
    save_profile,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

_ERROR_STATUS = (
    (ProfileNotFoundError, "Profile not found", 404),
    (QuestNotFoundError, "Quest not found", 404),
    (RewardNotFoundError, "Reward not found", 404),
    (InsufficientCoinsError, "Insufficient coins", 409),
)
PROFILE_ERRORS = (LookupError, ValueError)


def profile_error(exc: Exception) -> JSONResponse:
    """Translate storage/gamification errors into ``{error}`` responses."""
    for exc_type, message, status_code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            return error_response(message, status_code=status_code)
    return error_response(str(exc), status_code=400)


def _dump(profile: UserProfile) -> dict:
    return profile.model_dump(mode="json")


@router.post("/profiles/{uid}")
async def sign_in(uid: str, request: SignInRequest | None = None):
    """Load or create the profile on sign-in and advance the login streak."""
    request = request or SignInRequest()
    try:
        profile = get_or_create_profile(uid, request.email, request.display_name)
        progress.update_streak(profile)
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return _dump(profile)


@router.get("/profiles/{uid}")
async def get_profile(uid: str):
    try:
        return _dump(load_profile(uid))
    except PROFILE_ERRORS as exc:
        return profile_error(exc)


@router.patch("/profiles/{uid}/preferences")
async def update_preferences(uid: str, request: PreferencesUpdate):
    try:
        profile = load_profile(uid)
        progress.update_preferences(profile, **request.model_dump())
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return _dump(profile)


@router.post("/profiles/{uid}/lessons")
async def complete_lesson(uid: str, request: LessonCompletion):
    try:
        profile = load_profile(uid)
        badges = progress.complete_lesson(
            profile, request.lesson_id, request.subject, request.coins, request.xp
        )
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return {"profile": _dump(profile), "newBadges": badges}


@router.post("/profiles/{uid}/quests/reset")
async def reset_quests(uid: str):
    try:
        profile = load_profile(uid)
        progress.reset_daily_quests(profile)
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return _dump(profile)


@router.post("/profiles/{uid}/quests/{quest_id}")
async def update_quest(uid: str, quest_id: str, request: QuestProgressUpdate):
    try:
        profile = load_profile(uid)
        progress.update_quest_progress(profile, quest_id, request.progress)
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return _dump(profile)


@router.post("/profiles/{uid}/redemptions")
async def redeem(uid: str, request: RedemptionRequest):
    """Spend coins on a catalog reward and issue a voucher code."""
    try:
        _, item = find_reward(request.reward_id)
        profile = load_profile(uid)
        redemption = progress.redeem_reward(profile, item.id, item.name, item.cost)
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return {
        "redemption": redemption.model_dump(mode="json"),
        "skillCoins": profile.skill_coins,
    }


@router.patch("/profiles/{uid}/redemptions/{reward_id}")
async def update_redemption(uid: str, reward_id: str, request: RewardStatusUpdate):
    try:
        profile = load_profile(uid)
        progress.update_reward_status(profile, reward_id, request.status)
        save_profile(profile)
    except PROFILE_ERRORS as exc:
        return profile_error(exc)
    return _dump(profile)


@router.get("/leaderboard")
async def leaderboard(limit: int = 10) -> list[dict]:
    """Profiles ranked by XP, then coin balance."""
    ranked = sorted(list_profiles(), key=lambda p: (-p.xp, -p.skill_coins, p.uid))
    return [
        {
            "rank": index,
            "uid": p.uid,
            "displayName": p.display_name,
            "school": p.school,
            "level": p.level,
            "xp": p.xp,
            "skillCoins": p.skill_coins,
            "streak": p.streak,
        }
        for index, p in enumerate(ranked[: max(limit, 0)], start=1)
    ]
