"""Tests for user profile storage and model."""

import pytest

from mwanafrika.errors import ProfileNotFoundError
from mwanafrika.models.user_profile import UserProfile
from mwanafrika.storage import user_profile as up_storage


@pytest.fixture(autouse=True)
def patch_profiles_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(up_storage, "get_profiles_dir", lambda: tmp_path)


def test_load_missing_profile():
    with pytest.raises(ProfileNotFoundError):
        up_storage.load_profile("nobody")


def test_new_profile_defaults():
    profile = up_storage.get_or_create_profile("user_new", email="thabo@example.org")
    assert isinstance(profile, UserProfile)
    assert profile.uid == "user_new"
    assert profile.email == "thabo@example.org"
    assert profile.level == 1
    assert profile.skill_coins == 0
    assert profile.language == "en"
    assert set(profile.subject_progress) == {"mathematics", "science", "english", "lifeskills"}
    assert [q.total for q in profile.daily_quests] == [2, 15, 10]


def test_get_or_create_returns_existing():
    created = up_storage.get_or_create_profile("user_again")
    created.skill_coins = 120
    up_storage.save_profile(created)

    again = up_storage.get_or_create_profile("user_again", email="ignored@example.org")
    assert again.skill_coins == 120
    assert again.email is None


def test_save_and_load():
    profile = up_storage.get_or_create_profile("user_save")
    profile.school = "Soweto High"
    profile.badges = ["10_lessons"]
    up_storage.save_profile(profile)

    loaded = up_storage.load_profile("user_save")
    assert loaded.school == "Soweto High"
    assert loaded.badges == ["10_lessons"]
    assert loaded.daily_quests == profile.daily_quests


def test_update_profile():
    up_storage.get_or_create_profile("user_update")
    updated = up_storage.update_profile("user_update", grade="Grade 9")
    assert updated.grade == "Grade 9"
    assert up_storage.load_profile("user_update").grade == "Grade 9"


def test_list_profiles_skips_corrupt_files(tmp_path):
    up_storage.get_or_create_profile("alpha")
    up_storage.get_or_create_profile("beta")
    (tmp_path / "broken.json").write_text("{not json")

    uids = [p.uid for p in up_storage.list_profiles()]
    assert uids == ["alpha", "beta"]


@pytest.mark.parametrize("uid", ["../etc/passwd", "a b", ""])
def test_invalid_uid_rejected(uid):
    with pytest.raises(ValueError):
        up_storage.get_profile_path(uid)


def test_failed_replace_leaves_no_temp_file(tmp_path, monkeypatch):
    up_storage.get_or_create_profile("thabo")

    def fail_replace(src, dst):
        raise OSError("disk full")

    with monkeypatch.context() as m:
        m.setattr(up_storage.os, "replace", fail_replace)
        with pytest.raises(OSError):
            up_storage.save_profile(up_storage.load_profile("thabo"))

    assert sorted(p.name for p in tmp_path.iterdir()) == ["thabo.json"]
    assert [p.uid for p in up_storage.list_profiles()] == ["thabo"]


def test_failed_dump_leaves_no_temp_file(tmp_path, monkeypatch):
    def fail_dump(obj, fp):
        raise TypeError("not serializable")

    monkeypatch.setattr(up_storage.json, "dump", fail_dump)
    with pytest.raises(TypeError):
        up_storage.save_profile(up_storage.UserProfile(uid="lerato"))

    assert list(tmp_path.iterdir()) == []
