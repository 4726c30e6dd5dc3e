"""Data models for quotes, their stage buckets, and team records."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from quickquote.core.utils import coerce_number

DRAFT = "Draft"
SENT = "Sent"
ACCEPTED = "Accepted"
SCHEDULED_WORK = "Scheduled Work"
COMPLETE = "Complete"

STAGES: Tuple[str, ...] = (DRAFT, SENT, ACCEPTED, SCHEDULED_WORK, COMPLETE)

SERVICE_CHARGE_PERCENTAGE = 0.5
DEFAULT_VAT_PERCENTAGE = 15.0
DEFAULT_DEPOSIT_PERCENTAGE = 50.0

# Persisted field names; the stored collection stays readable by the mobile app.
_QUOTE_KEYS = {
    "id": "id",
    "customer_name": "customerName",
    "contact_type": "contactType",
    "phone_number": "phoneNumber",
    "email": "email",
    "client_address": "clientAddress",
    "description": "description",
    "service": "service",
    "vat_percentage": "vatPercentage",
    "deposit_percentage": "depositPercentage",
    "service_charge_percentage": "serviceChargePercentage",
    "amount": "amount",
    "deposit_amount": "depositAmount",
    "date": "date",
    "sent_dates": "sentDates",
    "accepted_date": "acceptedDate",
    "deposit_date": "depositDate",
    "completed_date": "completedDate",
    "final_payment_date": "finalPaymentDate",
    "is_paid": "isPaid",
    "business_name": "businessName",
    "business_address": "businessAddress",
}


@dataclass
class LineItem:
    """A single priced row on a quote."""

    id: int = 1
    description: str = ""
    quantity: float = 1
    price: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LineItem":
        return cls(
            id=int(coerce_number(raw.get("id"), 1)),
            description=str(raw.get("description") or ""),
            quantity=coerce_number(raw.get("quantity")),
            price=coerce_number(raw.get("price")),
        )


@dataclass
class Quote:
    """One job estimate as it moves through the lifecycle."""

    id: str
    customer_name: str = ""
    contact_type: str = "phone"
    phone_number: Optional[str] = None
    email: Optional[str] = None
    client_address: str = ""
    description: str = ""
    service: str = ""
    line_items: List[LineItem] = field(default_factory=list)
    vat_percentage: float = DEFAULT_VAT_PERCENTAGE
    deposit_percentage: float = DEFAULT_DEPOSIT_PERCENTAGE
    service_charge_percentage: float = SERVICE_CHARGE_PERCENTAGE
    amount: float = 0.0
    deposit_amount: Optional[float] = None
    date: Optional[str] = None
    sent_dates: List[str] = field(default_factory=list)
    accepted_date: Optional[str] = None
    deposit_date: Optional[str] = None
    completed_date: Optional[str] = None
    final_payment_date: Optional[str] = None
    is_paid: bool = False
    business_name: str = ""
    business_address: str = ""

    @property
    def contact_value(self) -> str:
        value = self.email if self.contact_type == "email" else self.phone_number
        return value or ""

    def with_contact(self, contact_type: str, value: str) -> "Quote":
        """Return a copy holding ``value`` under the field for ``contact_type``."""

        if contact_type == "email":
            return replace(self, contact_type="email", email=value, phone_number=None)
        return replace(self, contact_type="phone", phone_number=value, email=None)

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase mapping used for persistence."""

        payload: Dict[str, Any] = {}
        for attr, key in _QUOTE_KEYS.items():
            value = getattr(self, attr)
            if value is None:
                continue
            if attr == "sent_dates":
                value = list(value)
            payload[key] = value
        payload["lineItems"] = [item.to_dict() for item in self.line_items]
        return payload

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Quote":
        kwargs: Dict[str, Any] = {}
        for attr, key in _QUOTE_KEYS.items():
            if key in raw and raw[key] is not None:
                kwargs[attr] = raw[key]
        kwargs["id"] = str(raw.get("id", ""))
        for attr in ("vat_percentage", "deposit_percentage", "service_charge_percentage", "amount"):
            if attr in kwargs:
                kwargs[attr] = coerce_number(kwargs[attr])
        if "deposit_amount" in kwargs:
            kwargs["deposit_amount"] = coerce_number(kwargs["deposit_amount"])
        kwargs["sent_dates"] = [str(value) for value in raw.get("sentDates") or []]
        kwargs["is_paid"] = bool(raw.get("isPaid", False))
        kwargs["line_items"] = [
            LineItem.from_dict(item) for item in raw.get("lineItems") or [] if isinstance(item, dict)
        ]
        return cls(**kwargs)


def _empty_buckets() -> Dict[str, List[Quote]]:
    return {stage: [] for stage in STAGES}


@dataclass
class QuoteCollection:
    """Quotes grouped by stage; each list is ordered most-recent-first."""

    buckets: Dict[str, List[Quote]] = field(default_factory=_empty_buckets)

    def __post_init__(self) -> None:
        for stage in STAGES:
            self.buckets.setdefault(stage, [])

    def __getitem__(self, stage: str) -> List[Quote]:
        return self.buckets[stage]

    def __iter__(self) -> Iterator[Tuple[str, Quote]]:
        for stage in STAGES:
            for quote in self.buckets[stage]:
                yield stage, quote

    def get(self, stage: str, quote_id: str) -> Optional[Quote]:
        return next((quote for quote in self.buckets[stage] if quote.id == quote_id), None)

    def locate(self, quote_id: str) -> List[str]:
        """Return every stage currently holding ``quote_id``."""

        return [stage for stage, quote in self if quote.id == quote_id]

    def counts(self) -> Dict[str, int]:
        return {stage: len(self.buckets[stage]) for stage in STAGES}

    def with_buckets(self, **changes: List[Quote]) -> "QuoteCollection":
        """Return a new collection with the named buckets swapped out together."""

        buckets = {stage: list(quotes) for stage, quotes in self.buckets.items()}
        buckets.update(changes)
        return QuoteCollection(buckets=buckets)

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {stage: [quote.to_dict() for quote in self.buckets[stage]] for stage in STAGES}

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "QuoteCollection":
        buckets = _empty_buckets()
        for stage in STAGES:
            entries = (raw or {}).get(stage) or []
            buckets[stage] = [Quote.from_dict(entry) for entry in entries if isinstance(entry, dict)]
        return cls(buckets=buckets)


@dataclass
class TeamInvitation:
    """A pending (or accepted) grant for an email to join a business team."""

    business_id: str
    email: str
    id: Optional[str] = None
    role: str = "team_member"
    status: str = "pending"
    invited_by: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TeamInvitation":
        known = {item.name for item in fields(cls)}
        kwargs = {key: value for key, value in raw.items() if key in known}
        kwargs["business_id"] = str(raw.get("business_id") or "")
        kwargs["email"] = str(raw.get("email") or "")
        if kwargs.get("id") is not None:
            kwargs["id"] = str(kwargs["id"])
        return cls(**kwargs)


@dataclass
class TeamMember:
    """A roster entry built from either an active profile or an invitation."""

    id: str
    email: str
    name: str
    status: str
    role: str = "team_member"
    business_id: Optional[str] = None
    source: str = "invitation"
    date_added: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BusinessProfile:
    id: Optional[str] = None
    name: str = ""
    logo: Optional[str] = None
    address: str = ""
    phone: str = ""
    email: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserProfile:
    id: Optional[str] = None
    email: str = ""
    full_name: str = ""
    role: str = "team_member"
    business_id: Optional[str] = None

    @property
    def is_owner(self) -> bool:
        return self.role == "owner"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
