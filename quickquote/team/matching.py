"""Resolve a typed-in email to the invitation it most likely refers to.

Invitations are sometimes created with typos or odd casing, so lookup walks an
ordered list of strategies from strictest to loosest and stops at the first one
that finds anything. Order matters: a looser tier run first could pick some
other invitation over an exact match that exists.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, NamedTuple, Optional

from quickquote.core.errors import ValidationError
from quickquote.core.models import TeamInvitation

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def local_part(email: str) -> str:
    return normalize_email(email).split("@", 1)[0]


def exact_match(query: str, candidate: str) -> bool:
    return bool(query) and query == candidate


def substring_match(query: str, candidate: str) -> bool:
    if not query or not candidate:
        return False
    return query in candidate or candidate in query


def local_part_match(query: str, candidate: str) -> bool:
    prefix = local_part(query)
    return bool(prefix) and bool(candidate) and prefix in candidate


class MatchStrategy(NamedTuple):
    name: str
    predicate: Callable[[str, str], bool]


MATCH_STRATEGIES: List[MatchStrategy] = [
    MatchStrategy("exact", exact_match),
    MatchStrategy("substring", substring_match),
    MatchStrategy("local_part", local_part_match),
]


@dataclass
class InvitationMatch:
    invitation: TeamInvitation
    strategy: str

    @property
    def business_id(self) -> str:
        return self.invitation.business_id


def match_invitation(
    email: str,
    invitations: Iterable[TeamInvitation],
    strategies: Iterable[MatchStrategy] = MATCH_STRATEGIES,
) -> Optional[InvitationMatch]:
    """Return the first invitation matched by the strictest strategy that matches at all."""

    query = normalize_email(email)
    if not query:
        raise ValidationError("Please enter an email")

    candidates = [(normalize_email(invite.email), invite) for invite in invitations]
    for strategy in strategies:
        for candidate_email, invitation in candidates:
            if strategy.predicate(query, candidate_email):
                logger.info(
                    "Found invitation for %s via %s match (business %s)",
                    query,
                    strategy.name,
                    invitation.business_id,
                )
                return InvitationMatch(invitation=invitation, strategy=strategy.name)

    logger.info("No invitation found for email: %s", query)
    return None
