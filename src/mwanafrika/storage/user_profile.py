"""User profile persistence (JSON document per user + fcntl.flock + atomic write)."""

import fcntl
import json
import os
import re
import tempfile
from datetime import datetime
from pathlib import Path

import structlog

from ..config import get_settings
from ..errors import ProfileNotFoundError
from ..gamification.progress import fresh_daily_quests
from ..models.user_profile import UserProfile

logger = structlog.get_logger()

_UID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def get_profiles_dir() -> Path:
    return get_settings().profiles_dir


def get_profile_path(uid: str) -> Path:
    if not _UID_PATTERN.match(uid):
        raise ValueError(f"Invalid user id: {uid!r}")
    return get_profiles_dir() / f"{uid}.json"


def load_profile(uid: str) -> UserProfile:
    path = get_profile_path(uid)
    if not path.exists():
        raise ProfileNotFoundError(uid)
    with open(path) as f:
        fcntl.flock(f, fcntl.LOCK_SH)
        data = json.load(f)
        fcntl.flock(f, fcntl.LOCK_UN)
    return UserProfile(**data)


def save_profile(profile: UserProfile) -> None:
    """Write the whole document; concurrent writers resolve as last-writer-wins."""
    path = get_profile_path(profile.uid)
    profile.updated_at = datetime.now()
    # .tmp suffix keeps in-flight writes out of list_profiles' *.json glob
    with tempfile.NamedTemporaryFile(
        "w", dir=path.parent, delete=False, suffix=".json.tmp"
    ) as tmp:
        tmp_path = tmp.name
        try:
            json.dump(profile.model_dump(mode="json"), tmp)
        except Exception:
            tmp.close()
            os.unlink(tmp_path)
            raise
    try:
        os.replace(tmp_path, path)
    except OSError:
        os.unlink(tmp_path)
        raise


def get_or_create_profile(
    uid: str,
    email: str | None = None,
    display_name: str | None = None,
) -> UserProfile:
    """Load a profile, creating the default shape on first sign-in."""
    try:
        return load_profile(uid)
    except ProfileNotFoundError:
        pass
    profile = UserProfile(
        uid=uid,
        email=email,
        display_name=display_name,
        daily_quests=fresh_daily_quests(),
    )
    save_profile(profile)
    logger.info("profile_created", uid=uid)
    return profile


def update_profile(uid: str, **kwargs) -> UserProfile:
    profile = load_profile(uid)
    for key, value in kwargs.items():
        setattr(profile, key, value)
    save_profile(profile)
    return profile


def list_profiles() -> list[UserProfile]:
    profiles = []
    for path in sorted(get_profiles_dir().glob("*.json")):
        try:
            profiles.append(UserProfile(**json.loads(path.read_text())))
        except (ValueError, TypeError):
            logger.warning("profile_parse_error", path=str(path))
    return profiles
