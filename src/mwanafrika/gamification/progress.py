"""Gamification rules applied to a user profile.

Every function here mutates the given ``UserProfile`` in place and leaves
persistence to the caller (see ``storage.user_profile``). Invariants kept:

* ``skill_coins`` never goes negative; debits are pre-checked.
* ``level`` is recomputed from ``xp`` whenever XP changes.
* ``badges`` holds each identifier at most once.
"""

import time
from datetime import datetime

import structlog

from ..errors import InsufficientCoinsError, QuestNotFoundError, RewardNotFoundError
from ..models.user_profile import (
    DailyQuest,
    RedeemedReward,
    RewardStatus,
    UserProfile,
    level_for_xp,
)
from ..rewards.catalog import voucher_code

logger = structlog.get_logger()

LESSON_BADGES = ((10, "10_lessons"), (50, "50_lessons"), (100, "100_lessons"))
LEVEL_BADGES = ((5, "level_5"), (10, "level_10"))
STREAK_BADGES = ((7, "7_day_streak"), (30, "30_day_streak"))


def subject_key(subject: str) -> str:
    """'Life Skills' -> 'lifeskills'."""
    return "".join(subject.lower().split())


def fresh_daily_quests(now: float | None = None) -> list[DailyQuest]:
    stamp = int((now if now is not None else time.time()) * 1000)
    return [
        DailyQuest(
            id=f"quest_math_{stamp}",
            title="Complete 2 Math lessons",
            description="Practice your math skills",
            total=2,
            reward=50,
            category="mathematics",
        ),
        DailyQuest(
            id=f"quest_reading_{stamp}",
            title="Practice reading for 15 minutes",
            description="Improve your reading comprehension",
            total=15,
            reward=30,
            category="reading",
        ),
        DailyQuest(
            id=f"quest_science_{stamp}",
            title="Answer 10 science questions",
            description="Test your science knowledge",
            total=10,
            reward=40,
            category="science",
        ),
    ]


def add_coins(profile: UserProfile, amount: int) -> int:
    if profile.skill_coins + amount < 0:
        raise InsufficientCoinsError(
            f"Balance {profile.skill_coins} cannot cover {-amount} coins"
        )
    profile.skill_coins += amount
    return profile.skill_coins


def add_xp(profile: UserProfile, amount: int) -> int:
    profile.xp += amount
    profile.level = level_for_xp(profile.xp)
    return profile.level


def award_badge(profile: UserProfile, badge: str) -> bool:
    """Add a badge unless already earned. Returns True when newly awarded."""
    if badge in profile.badges:
        return False
    profile.badges.append(badge)
    logger.info("badge_awarded", uid=profile.uid, badge=badge)
    return True


def check_and_award_badges(profile: UserProfile) -> list[str]:
    """Award every achievement badge the profile now qualifies for."""
    candidates = []
    for threshold, badge in LESSON_BADGES:
        if profile.total_lessons_completed >= threshold:
            candidates.append(badge)
    for threshold, badge in LEVEL_BADGES:
        if profile.level >= threshold:
            candidates.append(badge)
    for key, subject in profile.subject_progress.items():
        if subject.progress >= 100:
            candidates.append(f"{key}_master")
    for threshold, badge in STREAK_BADGES:
        if profile.streak >= threshold:
            candidates.append(badge)
    return [badge for badge in candidates if award_badge(profile, badge)]


def complete_lesson(
    profile: UserProfile,
    lesson_id: str,
    subject: str,
    coins: int,
    xp: int,
    now: datetime | None = None,
) -> list[str]:
    """Credit a finished lesson and return any badges it unlocked.

    Lessons in a subject without a progress record are ignored entirely.
    """
    progress = profile.subject_progress.get(subject_key(subject))
    if progress is None:
        logger.warning("unknown_subject", uid=profile.uid, subject=subject)
        return []

    now = now or datetime.now()
    profile.total_lessons_completed += 1
    add_coins(profile, coins)
    add_xp(profile, xp)
    if lesson_id not in profile.completed_lessons:
        profile.completed_lessons.append(lesson_id)

    progress.lessons_completed += 1
    if progress.total_lessons > 0:
        progress.progress = min(
            100, round(progress.lessons_completed / progress.total_lessons * 100)
        )
    progress.last_accessed = now

    return check_and_award_badges(profile)


def update_quest_progress(profile: UserProfile, quest_id: str, progress: int) -> DailyQuest:
    """Set quest progress (clamped to its total); credit the reward on first completion."""
    quest = profile.find_quest(quest_id)
    if quest is None:
        raise QuestNotFoundError(quest_id)
    quest.progress = min(progress, quest.total)
    just_completed = quest.progress >= quest.total and not quest.completed
    quest.completed = quest.progress >= quest.total
    if just_completed:
        add_coins(profile, quest.reward)
        logger.info("quest_completed", uid=profile.uid, quest_id=quest_id, reward=quest.reward)
    return quest


def reset_daily_quests(profile: UserProfile, now: float | None = None) -> list[DailyQuest]:
    profile.daily_quests = fresh_daily_quests(now)
    return profile.daily_quests


def update_streak(profile: UserProfile, now: datetime | None = None) -> int:
    """Advance the login streak by calendar day.

    Consecutive day -> +1, a gap of more than one day -> restart at 1,
    same day -> unchanged.
    """
    now = now or datetime.now()
    if profile.last_login_date is None:
        profile.streak = max(profile.streak, 1)
    else:
        days = (now.date() - profile.last_login_date.date()).days
        if days == 1:
            profile.streak += 1
        elif days > 1:
            profile.streak = 1
    profile.last_login_date = now
    check_and_award_badges(profile)
    return profile.streak


def redeem_reward(
    profile: UserProfile,
    reward_id: str,
    name: str,
    cost: int,
    now: datetime | None = None,
) -> RedeemedReward:
    """Debit ``cost`` coins and record a pending redemption with a voucher code."""
    if profile.skill_coins < cost:
        raise InsufficientCoinsError(
            f"Balance {profile.skill_coins} cannot cover {cost} coins"
        )
    now = now or datetime.now()
    profile.skill_coins -= cost
    redemption = RedeemedReward(
        id=reward_id,
        name=name,
        coins=cost,
        redeemed_at=now,
        code=voucher_code(name, now),
    )
    profile.rewards_redeemed.append(redemption)
    logger.info("reward_redeemed", uid=profile.uid, reward_id=reward_id, cost=cost)
    return redemption


def update_reward_status(
    profile: UserProfile, reward_id: str, status: RewardStatus
) -> list[RedeemedReward]:
    matched = [r for r in profile.rewards_redeemed if r.id == reward_id]
    if not matched:
        raise RewardNotFoundError(reward_id)
    for reward in matched:
        reward.status = status
    return matched


def update_preferences(profile: UserProfile, **preferences: str | None) -> UserProfile:
    """Apply the non-empty preference fields (country, language, school, grade)."""
    for key in ("country", "language", "school", "grade"):
        value = preferences.get(key)
        if value is not None:
            setattr(profile, key, value)
    return profile
