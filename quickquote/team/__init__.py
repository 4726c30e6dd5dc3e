"""Team invitations: lookup, storage, and roster management."""
from quickquote.team.invitations import InMemoryInvitationStore, InvitationStore, RestInvitationStore
from quickquote.team.matching import (
    MATCH_STRATEGIES,
    InvitationMatch,
    MatchStrategy,
    match_invitation,
    normalize_email,
)
from quickquote.team.roster import (
    accept_invitation,
    build_roster,
    check_team_signup,
    invite_member,
    remove_member,
    resolve_invitation,
)

__all__ = [
    "MATCH_STRATEGIES",
    "InMemoryInvitationStore",
    "InvitationMatch",
    "InvitationStore",
    "MatchStrategy",
    "RestInvitationStore",
    "accept_invitation",
    "build_roster",
    "check_team_signup",
    "invite_member",
    "match_invitation",
    "normalize_email",
    "remove_member",
    "resolve_invitation",
]
