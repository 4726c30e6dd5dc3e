"""Team management built on an invitation store."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from quickquote.core.errors import InvitationNotFoundError, ValidationError
from quickquote.core.models import TeamInvitation, TeamMember
from quickquote.core.validation import validate_email, validate_password
from quickquote.team.invitations import InvitationStore
from quickquote.team.matching import InvitationMatch, match_invitation, normalize_email

logger = logging.getLogger(__name__)

PENDING = "pending"
ACTIVE = "active"


def invite_member(
    store: InvitationStore,
    business_id: Optional[str],
    email: str,
    invited_by: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TeamInvitation:
    """Validate ``email`` and record a pending invitation for the business."""

    if not business_id:
        raise ValidationError("No business found. Please create a business first.")
    cleaned = validate_email(email)

    existing = [
        invite
        for invite in store.list_invitations(business_id)
        if normalize_email(invite.email) == cleaned
    ]
    if existing:
        logger.info("Invitation for %s already exists", cleaned)
        return existing[0]

    invitation = TeamInvitation(
        business_id=business_id,
        email=cleaned,
        invited_by=invited_by,
        status=PENDING,
        created_at=(now or datetime.now(timezone.utc)).isoformat(),
    )
    stored = store.insert_invitation(invitation)
    logger.info("Invited %s to business %s", cleaned, business_id)
    return stored


def resolve_invitation(email: str, store: InvitationStore) -> InvitationMatch:
    """Find the invitation for a joining member or raise ``InvitationNotFoundError``."""

    match = match_invitation(email, store.list_invitations())
    if match is None:
        raise InvitationNotFoundError(
            "No invitation was found for this email address. "
            "Please check with your team administrator."
        )
    return match


def check_team_signup(
    store: InvitationStore, email: str, password: str, confirmation: str
) -> InvitationMatch:
    """Run the joining member's checks before any account is created.

    The password is checked first, then the email must resolve to an invitation.
    Once the account exists, pass the match's invitation to ``accept_invitation``.
    """

    validate_password(password)
    if password != confirmation:
        raise ValidationError("Passwords do not match")
    match = resolve_invitation(email, store)
    logger.info("Team signup for %s will join business %s", normalize_email(email), match.business_id)
    return match


def accept_invitation(store: InvitationStore, invitation: TeamInvitation) -> TeamInvitation:
    """Mark an invitation active once its member has an account."""

    if not invitation.id:
        raise InvitationNotFoundError(f"Invitation for {invitation.email} has no id")
    return store.update_invitation(invitation.id, status=ACTIVE)


def remove_member(store: InvitationStore, invitation_id: str) -> None:
    store.delete_invitation(invitation_id)
    logger.info("Removed team invitation %s", invitation_id)


def build_roster(
    active_profiles: Iterable[Dict[str, Any]], invitations: Iterable[TeamInvitation]
) -> List[TeamMember]:
    """Merge active member profiles with invitations, one entry per email.

    Profiles win: an invitation whose email already belongs to an active member
    is left out.
    """

    members: List[TeamMember] = []
    for profile in active_profiles:
        members.append(
            TeamMember(
                id=str(profile.get("id") or ""),
                email=profile.get("email") or "",
                name=profile.get("full_name") or profile.get("name") or "Unnamed Member",
                status="Active",
                role=profile.get("role") or "team_member",
                business_id=profile.get("business_id"),
                source="profile",
                date_added=profile.get("created_at"),
            )
        )

    active_emails = {normalize_email(member.email) for member in members}
    for invite in invitations:
        if normalize_email(invite.email) in active_emails:
            continue
        members.append(
            TeamMember(
                id=invite.id or "",
                email=invite.email,
                name="Invited Member",
                status="Invited",
                role=invite.role,
                business_id=invite.business_id,
                source="invitation",
                date_added=invite.created_at,
            )
        )
    return members
