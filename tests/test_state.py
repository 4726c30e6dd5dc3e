"""Shared app state: business profile merges and the owner-only views."""
import json

import pytest

from quickquote.core.models import TeamMember, UserProfile
from quickquote.state import BUSINESS_KEY, TEAM_MEMBERS_KEY, AppState
from quickquote.storage import MemoryKeyValueStore


def test_update_business_info_merges_non_empty_values(memory_storage):
    state = AppState(memory_storage).load()
    state.update_business_info(name="Mokoena Plumbing", address="12 Long St")

    business = state.update_business_info(name="", phone="021 555 0100")

    assert business.name == "Mokoena Plumbing"
    assert business.phone == "021 555 0100"
    assert json.loads(memory_storage.get(BUSINESS_KEY))["address"] == "12 Long St"


def test_update_business_info_rejects_unknown_fields(memory_storage):
    with pytest.raises(TypeError, match="vat_number"):
        AppState(memory_storage).update_business_info(vat_number="123")


def test_state_survives_reload(memory_storage):
    state = AppState(memory_storage)
    state.update_business_info(name="Mokoena Plumbing")
    state.set_user_profile(UserProfile(id="u1", email="owner@biz.co", role="owner", business_id="biz-1"))
    state.cache_team_members([TeamMember(id="i1", email="sam@biz.co", name="Sam", status="Invited")])

    reloaded = AppState(memory_storage).load()

    assert reloaded.business.name == "Mokoena Plumbing"
    assert reloaded.user.business_id == "biz-1"
    assert [member.email for member in reloaded.team_members] == ["sam@biz.co"]


def test_unreadable_values_fall_back_to_defaults():
    storage = MemoryKeyValueStore({BUSINESS_KEY: "{oops", TEAM_MEMBERS_KEY: '"not a list"'})

    state = AppState(storage).load()

    assert state.business.name == ""
    assert state.team_members == []


@pytest.mark.parametrize(
    "role, view, allowed",
    [
        ("owner", "report", True),
        ("owner", "team", True),
        ("team_member", "report", False),
        ("team_member", "team", False),
        ("team_member", "quotes", True),
    ],
)
def test_can_open(memory_storage, role, view, allowed):
    state = AppState(memory_storage)
    state.set_user_profile(UserProfile(role=role))

    assert state.can_open(view) is allowed
