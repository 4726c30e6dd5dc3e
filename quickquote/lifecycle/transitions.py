"""Stage transitions for quotes.

Every function here is pure: it takes a ``QuoteCollection`` and returns a new
one alongside the quote it touched. A move builds the source and destination
buckets together and swaps them into a fresh collection in one step, so no
caller can observe a quote in neither bucket or in both.
"""
from __future__ import annotations

import logging
import time
from dataclasses import replace
from datetime import date
from typing import Any, List, NamedTuple, Optional

from quickquote.core.config import Settings, load_settings
from quickquote.core.errors import QuoteNotFoundError, ValidationError
from quickquote.core.models import (
    ACCEPTED,
    COMPLETE,
    DRAFT,
    SCHEDULED_WORK,
    SENT,
    BusinessProfile,
    Quote,
    QuoteCollection,
)
from quickquote.core.utils import today_iso
from quickquote.core.validation import validate_quote_for_send
from quickquote.pricing import quote_totals

logger = logging.getLogger(__name__)

DRAFT_PREFIX = "d"
SENT_PREFIX = "s"


class TransitionResult(NamedTuple):
    collection: QuoteCollection
    quote: Quote


def new_quote_id(
    prefix: str = DRAFT_PREFIX,
    now: Optional[float] = None,
    collection: Optional[QuoteCollection] = None,
) -> str:
    """Return an id such as ``d1718102400000`` (prefix + epoch milliseconds).

    When ``collection`` is given the stamp is bumped past any id it already holds.
    """

    stamp = int((time.time() if now is None else now) * 1000)
    while collection is not None and collection.locate(f"{prefix}{stamp}"):
        stamp += 1
    return f"{prefix}{stamp}"


def new_quote(settings: Optional[Settings] = None, **fields: Any) -> Quote:
    """Blank quote (no id yet) carrying the configured VAT and deposit rates."""

    settings = settings or load_settings()
    fields.setdefault("vat_percentage", settings.default_vat_percentage)
    fields.setdefault("deposit_percentage", settings.default_deposit_percentage)
    quote_id = fields.pop("id", "")
    return Quote(id=quote_id, **fields)


def price_quote(quote: Quote) -> Quote:
    """Return a copy with ``amount`` and ``service`` derived from its contents."""

    totals = quote_totals(quote)
    first_item = quote.line_items[0].description if quote.line_items else ""
    service = quote.description or first_item or "Quote"
    return replace(quote, amount=totals.total, service=service)


def _without(quotes: List[Quote], quote_id: str) -> List[Quote]:
    return [quote for quote in quotes if quote.id != quote_id]


def _require(collection: QuoteCollection, stage: str, quote_id: str) -> Quote:
    quote = collection.get(stage, quote_id)
    if quote is None:
        raise QuoteNotFoundError(quote_id, stage)
    return quote


def _move(
    collection: QuoteCollection, quote_id: str, source: str, target: str, **stamps
) -> TransitionResult:
    current = _require(collection, source, quote_id)
    moved = replace(current, **stamps)
    updated = collection.with_buckets(
        **{
            source: _without(collection[source], quote_id),
            target: [moved] + collection[target],
        }
    )
    logger.info("Moved quote %s from %s to %s", quote_id, source, target)
    return TransitionResult(updated, moved)


def _replace_in(
    collection: QuoteCollection, stage: str, quote: Quote
) -> QuoteCollection:
    bucket = [quote if existing.id == quote.id else existing for existing in collection[stage]]
    return collection.with_buckets(**{stage: bucket})


def save_draft(collection: QuoteCollection, quote: Quote) -> TransitionResult:
    """Create a draft at the head of Draft, or update an existing draft in place."""

    if not quote.id:
        quote = replace(quote, id=new_quote_id(DRAFT_PREFIX, collection=collection))
    draft = price_quote(quote)

    if collection.get(DRAFT, draft.id) is not None:
        logger.info("Updated draft quote %s", draft.id)
        return TransitionResult(_replace_in(collection, DRAFT, draft), draft)

    held_by = collection.locate(draft.id)
    if held_by:
        raise ValidationError(f"Quote {draft.id} is already in {held_by[0]} and cannot be saved as a draft")

    logger.info("Added draft quote %s", draft.id)
    return TransitionResult(collection.with_buckets(**{DRAFT: [draft] + collection[DRAFT]}), draft)


def send_quote(
    collection: QuoteCollection,
    quote: Quote,
    today: Optional[date] = None,
    from_draft_id: Optional[str] = None,
    business: Optional[BusinessProfile] = None,
) -> TransitionResult:
    """Put ``quote`` at the head of Sent, removing the draft it was edited from.

    A quote without an id gets a fresh ``s``-prefixed one. A draft holding the
    quote's own id is consumed along with ``from_draft_id``.
    """

    validate_quote_for_send(quote)

    quote_id = quote.id or new_quote_id(SENT_PREFIX, collection=collection)
    held_by = [stage for stage in collection.locate(quote_id) if stage != DRAFT]
    if held_by:
        raise ValidationError(f"Quote {quote_id} has already been sent ({held_by[0]})")

    stamp = today_iso(today)
    sent = replace(
        price_quote(quote),
        id=quote_id,
        date=stamp,
        sent_dates=[stamp],
        business_name=business.name if business else quote.business_name,
        business_address=business.address if business else quote.business_address,
    )

    consumed = {quote_id, from_draft_id}
    drafts = [draft for draft in collection[DRAFT] if draft.id not in consumed]
    updated = collection.with_buckets(**{SENT: [sent] + collection[SENT], DRAFT: drafts})
    logger.info("Quote %s sent", quote_id)
    return TransitionResult(updated, sent)


def send_draft(
    collection: QuoteCollection,
    draft_id: str,
    today: Optional[date] = None,
    business: Optional[BusinessProfile] = None,
) -> TransitionResult:
    draft = _require(collection, DRAFT, draft_id)
    return send_quote(collection, draft, today=today, from_draft_id=draft_id, business=business)


def resend(
    collection: QuoteCollection, quote_id: str, today: Optional[date] = None
) -> TransitionResult:
    """Record another send date; the quote stays where it is in Sent."""

    current = _require(collection, SENT, quote_id)
    history = list(current.sent_dates) or ([current.date] if current.date else [])
    resent = replace(current, sent_dates=history + [today_iso(today)])
    logger.info("Resent quote %s (%d sends)", quote_id, len(resent.sent_dates))
    return TransitionResult(_replace_in(collection, SENT, resent), resent)


def accept(
    collection: QuoteCollection, quote_id: str, today: Optional[date] = None
) -> TransitionResult:
    return _move(collection, quote_id, SENT, ACCEPTED, accepted_date=today_iso(today))


def mark_deposit_paid(
    collection: QuoteCollection, quote_id: str, today: Optional[date] = None
) -> TransitionResult:
    return _move(collection, quote_id, ACCEPTED, SCHEDULED_WORK, deposit_date=today_iso(today))


def mark_work_complete(
    collection: QuoteCollection, quote_id: str, today: Optional[date] = None
) -> TransitionResult:
    return _move(
        collection,
        quote_id,
        SCHEDULED_WORK,
        COMPLETE,
        completed_date=today_iso(today),
        is_paid=False,
    )


def mark_final_payment(
    collection: QuoteCollection, quote_id: str, today: Optional[date] = None
) -> TransitionResult:
    """Mark a completed job as fully paid; it stays in Complete."""

    current = _require(collection, COMPLETE, quote_id)
    if current.is_paid:
        raise QuoteNotFoundError(quote_id, COMPLETE, reason="has no outstanding payment")
    paid = replace(current, final_payment_date=today_iso(today), is_paid=True)
    logger.info("Quote %s marked as fully paid", quote_id)
    return TransitionResult(_replace_in(collection, COMPLETE, paid), paid)


def delete_draft(collection: QuoteCollection, quote_id: str) -> TransitionResult:
    current = _require(collection, DRAFT, quote_id)
    logger.info("Deleted draft quote %s", quote_id)
    return TransitionResult(
        collection.with_buckets(**{DRAFT: _without(collection[DRAFT], quote_id)}), current
    )


def reset() -> QuoteCollection:
    """Return an empty collection (full data reset)."""

    return QuoteCollection()
