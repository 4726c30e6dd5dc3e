"""Invitation stores: an in-memory one and a client for the hosted backend."""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional, Protocol

import requests

from quickquote.core.errors import BackendError, InvitationNotFoundError
from quickquote.core.models import TeamInvitation

logger = logging.getLogger(__name__)

INVITATIONS_TABLE = "invited_team_members"
DEFAULT_TIMEOUT = 15


class InvitationStore(Protocol):
    def list_invitations(self, business_id: Optional[str] = None) -> List[TeamInvitation]:
        ...

    def insert_invitation(self, invitation: TeamInvitation) -> TeamInvitation:
        ...

    def update_invitation(self, invitation_id: str, **changes: Any) -> TeamInvitation:
        ...

    def delete_invitation(self, invitation_id: str) -> None:
        ...


class InMemoryInvitationStore:
    """Invitation table kept in a list; used offline and in tests."""

    def __init__(self, invitations: Optional[List[TeamInvitation]] = None) -> None:
        self._rows: List[TeamInvitation] = list(invitations or [])

    def list_invitations(self, business_id: Optional[str] = None) -> List[TeamInvitation]:
        if business_id is None:
            return list(self._rows)
        return [row for row in self._rows if row.business_id == business_id]

    def insert_invitation(self, invitation: TeamInvitation) -> TeamInvitation:
        stored = invitation if invitation.id else replace(invitation, id=str(uuid.uuid4()))
        self._rows.append(stored)
        return stored

    def update_invitation(self, invitation_id: str, **changes: Any) -> TeamInvitation:
        for index, row in enumerate(self._rows):
            if row.id == invitation_id:
                self._rows[index] = replace(row, **changes)
                return self._rows[index]
        raise InvitationNotFoundError(f"Invitation {invitation_id} not found")

    def delete_invitation(self, invitation_id: str) -> None:
        remaining = [row for row in self._rows if row.id != invitation_id]
        if len(remaining) == len(self._rows):
            raise InvitationNotFoundError(f"Invitation {invitation_id} not found")
        self._rows = remaining


class RestInvitationStore:
    """Talks to the backend's REST endpoint for the invitations table.

    Requests go to ``{base_url}/rest/v1/invited_team_members`` with the project
    key sent both as ``apikey`` and as a bearer token, the way the hosted
    service expects from a signed-in client.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Content-Type": "application/json",
            }
        )

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{INVITATIONS_TABLE}"

    def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = self.session.request(
                method,
                self.table_url,
                params=params,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, INVITATIONS_TABLE, exc)
            raise BackendError(f"Invitation request failed: {exc}") from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError("Invitation service returned invalid JSON") from exc

    def list_invitations(self, business_id: Optional[str] = None) -> List[TeamInvitation]:
        params = {"select": "*"}
        if business_id is not None:
            params["business_id"] = f"eq.{business_id}"
        rows = self._request("GET", params=params) or []
        logger.debug("Fetched %d invitations", len(rows))
        return [TeamInvitation.from_dict(row) for row in rows]

    def insert_invitation(self, invitation: TeamInvitation) -> TeamInvitation:
        rows = self._request("POST", payload=invitation.to_dict(), prefer="return=representation")
        if not rows:
            return invitation
        return TeamInvitation.from_dict(rows[0])

    def update_invitation(self, invitation_id: str, **changes: Any) -> TeamInvitation:
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{invitation_id}"},
            payload=changes,
            prefer="return=representation",
        )
        if not rows:
            raise InvitationNotFoundError(f"Invitation {invitation_id} not found")
        return TeamInvitation.from_dict(rows[0])

    def delete_invitation(self, invitation_id: str) -> None:
        self._request("DELETE", params={"id": f"eq.{invitation_id}"})
