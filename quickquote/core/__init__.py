"""Core building blocks for the quickquote package."""
from quickquote.core.config import Settings, load_settings
from quickquote.core.errors import (
    BackendError,
    InvitationNotFoundError,
    IOFailure,
    NotFoundError,
    QuickQuoteError,
    QuoteNotFoundError,
    RenderError,
    StorageError,
    ValidationError,
)
from quickquote.core.logging import configure_logging
from quickquote.core.models import (
    ACCEPTED,
    COMPLETE,
    DRAFT,
    SCHEDULED_WORK,
    SENT,
    STAGES,
    BusinessProfile,
    LineItem,
    Quote,
    QuoteCollection,
    TeamInvitation,
    TeamMember,
    UserProfile,
)
from quickquote.core.utils import in_period

__all__ = [
    "ACCEPTED",
    "COMPLETE",
    "DRAFT",
    "SCHEDULED_WORK",
    "SENT",
    "STAGES",
    "BackendError",
    "BusinessProfile",
    "IOFailure",
    "InvitationNotFoundError",
    "LineItem",
    "NotFoundError",
    "QuickQuoteError",
    "Quote",
    "QuoteCollection",
    "QuoteNotFoundError",
    "RenderError",
    "Settings",
    "StorageError",
    "TeamInvitation",
    "TeamMember",
    "UserProfile",
    "ValidationError",
    "configure_logging",
    "in_period",
    "load_settings",
]
