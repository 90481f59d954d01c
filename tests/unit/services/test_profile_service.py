import json

import pytest

from planterbox.domain.exceptions import NotFoundError, RepositoryError, ValidationError
from planterbox.services.application.profile_service import ProfileService


@pytest.fixture()
def conditions(lettuce_profile):
    return lettuce_profile.ideal_conditions()


def test_bundled_presets_are_seeded(profile_service):
    presets = profile_service.list_presets()
    assert len(presets) == 9
    assert {p["plant_name"] for p in presets} == {"lettuce", "basil", "tomato"}
    assert all(p["owner_id"] is None for p in presets)


def test_seeding_twice_adds_nothing(profile_service, tmp_path):
    from planterbox.config import DEFAULT_PRESETS_PATH

    assert profile_service.seed_presets(DEFAULT_PRESETS_PATH) == 0
    assert profile_service.seed_presets(tmp_path / "missing.json") == 0


def test_seed_skips_invalid_entries(profile_repo, tmp_path, conditions):
    path = tmp_path / "presets.json"
    path.write_text(
        json.dumps(
            {
                "mint": {
                    "seedling": conditions,
                    "flowering": conditions,
                    "mature": dict(conditions, ph_min=9.0),
                }
            }
        ),
        encoding="utf-8",
    )
    assert ProfileService(profile_repo).seed_presets(path) == 1


def test_list_presets_filtered_by_stage(profile_service):
    stages = {p["stage"] for p in profile_service.list_presets(stage="Mature")}
    assert stages == {"mature"}


def test_find_profile_normalises_lookup(profile_service):
    profile = profile_service.find_profile(" Lettuce ", "VEGETATIVE")
    assert profile is not None
    assert profile.ph_min == 5.8
    assert profile.is_global


def test_find_profile_unknown_or_blank(profile_service):
    assert profile_service.find_profile("cactus", "seedling") is None
    assert profile_service.find_profile("", "seedling") is None
    assert profile_service.find_profile("lettuce", None) is None


def test_owned_profile_shadows_preset_for_owner_only(profile_service, conditions):
    created = profile_service.create_profile(
        owner_id="alice", plant_name="lettuce", stage="vegetative", ideal_conditions=dict(conditions, ph_min=6.0)
    )
    assert created.profile_id is not None
    assert created.owner_id == "alice"

    assert profile_service.find_profile("lettuce", "vegetative", "alice").ph_min == 6.0
    assert profile_service.find_profile("lettuce", "vegetative", "bob").ph_min == 5.8
    assert profile_service.find_profile("lettuce", "vegetative").ph_min == 5.8


def test_owner_falls_back_to_preset(profile_service):
    assert profile_service.find_profile("basil", "seedling", "alice").is_global


def test_create_profile_validates(profile_service, conditions):
    with pytest.raises(ValidationError):
        profile_service.create_profile(
            owner_id="alice", plant_name="lettuce", stage="vegetative", ideal_conditions=dict(conditions, ppm_min=900)
        )
    with pytest.raises(ValidationError):
        profile_service.create_profile(
            owner_id=" ", plant_name="lettuce", stage="vegetative", ideal_conditions=conditions
        )
    assert profile_service.list_owned("alice") == []


def test_create_profile_reports_storage_failure(conditions):
    from unittest.mock import MagicMock

    repo = MagicMock()
    repo.save_profile.return_value = None
    with pytest.raises(RepositoryError):
        ProfileService(repo).create_profile(
            owner_id="alice", plant_name="lettuce", stage="vegetative", ideal_conditions=conditions
        )


def test_delete_profile(profile_service, conditions):
    created = profile_service.create_profile(
        owner_id="alice", plant_name="basil", stage="mature", ideal_conditions=conditions
    )

    with pytest.raises(NotFoundError):
        profile_service.delete_profile(created.profile_id, "bob")

    profile_service.delete_profile(created.profile_id, "alice")
    assert profile_service.list_owned("alice") == []

    with pytest.raises(NotFoundError):
        profile_service.delete_profile(created.profile_id, "alice")


def test_list_owned_requires_owner(profile_service):
    with pytest.raises(ValidationError):
        profile_service.list_owned("")


def test_resolution_is_stable_for_owned_profile(profile_service, conditions):
    profile_service.create_profile(
        owner_id="alice", plant_name="lettuce", stage="vegetative", ideal_conditions=dict(conditions, ph_min=6.0)
    )

    first = profile_service.find_profile("lettuce", "vegetative", "alice")
    second = profile_service.find_profile("lettuce", "vegetative", "alice")

    assert first == second
    assert first.owner_id == "alice"


def test_resolution_is_stable_for_preset_fallback(profile_service):
    first = profile_service.find_profile("lettuce", "vegetative", "alice")
    second = profile_service.find_profile("lettuce", "vegetative", "alice")

    assert first == second
    assert first.is_global
