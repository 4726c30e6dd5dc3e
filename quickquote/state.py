"""Application state shared by the screens: business, user, and team cache.

One ``AppState`` is created at startup and handed to whatever needs it. Only
the onboarding and profile-update flows write to it; everything else reads.
"""
from __future__ import annotations

import json
import logging
from dataclasses import fields, replace
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from quickquote.core.errors import StorageError
from quickquote.core.models import BusinessProfile, TeamMember, UserProfile
from quickquote.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

BUSINESS_KEY = "quickquote_business"
USER_PROFILE_KEY = "quickquote_user_profile"
TEAM_MEMBERS_KEY = "quickquote_team_members"

OWNER_ONLY_VIEWS = frozenset({"report", "team"})

T = TypeVar("T")


def _from_mapping(cls: Type[T], raw: Dict[str, Any]) -> T:
    known = {item.name for item in fields(cls)}
    return cls(**{key: value for key, value in raw.items() if key in known})


class AppState:
    def __init__(self, storage: KeyValueStore) -> None:
        self.storage = storage
        self.business = BusinessProfile()
        self.user = UserProfile()
        self.team_members: List[TeamMember] = []

    def _read(self, key: str) -> Optional[Any]:
        try:
            raw = self.storage.get(key)
        except StorageError:
            logger.exception("Error reading %s", key)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable value stored under %s", key)
            return None

    def _write(self, key: str, payload: Any) -> bool:
        try:
            self.storage.set(key, json.dumps(payload))
        except StorageError:
            logger.exception("Error saving %s", key)
            return False
        return True

    def load(self) -> "AppState":
        business = self._read(BUSINESS_KEY)
        if isinstance(business, dict):
            self.business = _from_mapping(BusinessProfile, business)
        user = self._read(USER_PROFILE_KEY)
        if isinstance(user, dict):
            self.user = _from_mapping(UserProfile, user)
        members = self._read(TEAM_MEMBERS_KEY)
        if isinstance(members, list):
            self.team_members = [
                _from_mapping(TeamMember, member) for member in members if isinstance(member, dict)
            ]
        return self

    def update_business_info(self, **info: Any) -> BusinessProfile:
        """Merge non-empty values into the business profile and persist it."""

        known = {item.name for item in fields(BusinessProfile)}
        unknown = set(info) - known
        if unknown:
            raise TypeError(f"Unknown business fields: {', '.join(sorted(unknown))}")
        changes = {key: value for key, value in info.items() if value}
        self.business = replace(self.business, **changes)
        self._write(BUSINESS_KEY, self.business.to_dict())
        return self.business

    def set_user_profile(self, profile: UserProfile) -> None:
        self.user = profile
        self._write(USER_PROFILE_KEY, profile.to_dict())

    def cache_team_members(self, members: Iterable[TeamMember]) -> None:
        self.team_members = list(members)
        self._write(TEAM_MEMBERS_KEY, [member.to_dict() for member in self.team_members])

    def can_open(self, view: str) -> bool:
        """Team members are kept out of the report and team views."""

        if view in OWNER_ONLY_VIEWS:
            return self.user.is_owner
        return True
