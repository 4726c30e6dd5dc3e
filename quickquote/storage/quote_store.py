"""In-memory quote collection backed by a key-value store."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional

from quickquote import lifecycle
from quickquote.core.errors import NotFoundError, StorageError
from quickquote.core.models import STAGES, BusinessProfile, Quote, QuoteCollection
from quickquote.lifecycle import TransitionResult
from quickquote.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

QUOTES_STORAGE_KEY = "quickquote_data"


@dataclass
class TransitionOutcome:
    """What a store action did: ``ok`` is False for a "nothing to do" no-op."""

    ok: bool
    quote: Optional[Quote] = None
    message: str = ""


class QuoteStore:
    """Owns the stage-grouped quotes and writes them back after every change.

    The in-memory collection is authoritative for the session: a failed write is
    logged and the next successful write carries the latest state.
    """

    def __init__(self, storage: KeyValueStore, key: str = QUOTES_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self.collection = QuoteCollection()
        self.loaded = False

    def load(self) -> QuoteCollection:
        """Restore the collection, writing an empty default when none is stored."""

        try:
            raw = self.storage.get(self.key)
        except StorageError:
            logger.exception("Error loading quotes; starting with empty data")
            raw = None
        else:
            if raw is None:
                logger.info("No stored quotes found, using empty data")
                self.collection = QuoteCollection()
                self.loaded = True
                self._persist()
                return self.collection

        self.collection = self._decode(raw)
        self.loaded = True
        logger.info("Loaded quotes from storage: %s", self.collection.counts())
        return self.collection

    def _decode(self, raw: Optional[str]) -> QuoteCollection:
        if not raw:
            return QuoteCollection()
        try:
            return QuoteCollection.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError):
            logger.exception("Stored quotes under %s are unreadable; starting empty", self.key)
            return QuoteCollection()

    def _persist(self) -> bool:
        try:
            self.storage.set(self.key, json.dumps(self.collection.to_dict()))
        except StorageError:
            logger.exception("Error saving quotes")
            return False
        logger.debug("Quotes saved to storage")
        return True

    def _commit(self, result: TransitionResult) -> TransitionOutcome:
        # Single assignment: readers see either the old or the new collection.
        self.collection = result.collection
        self._persist()
        return TransitionOutcome(ok=True, quote=result.quote)

    def _apply(self, action: Callable[[], TransitionResult]) -> TransitionOutcome:
        try:
            result = action()
        except NotFoundError as exc:
            logger.warning("Nothing to do: %s", exc)
            return TransitionOutcome(ok=False, message=str(exc))
        return self._commit(result)

    def quotes(self, stage: str) -> List[Quote]:
        if stage not in STAGES:
            raise KeyError(stage)
        return list(self.collection[stage])

    def find(self, quote_id: str) -> Optional[Quote]:
        return next((quote for _, quote in self.collection if quote.id == quote_id), None)

    def save_draft(self, quote: Quote) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.save_draft(self.collection, quote))

    def send_quote(
        self,
        quote: Quote,
        today: Optional[date] = None,
        from_draft_id: Optional[str] = None,
        business: Optional[BusinessProfile] = None,
    ) -> TransitionOutcome:
        return self._apply(
            lambda: lifecycle.send_quote(
                self.collection, quote, today=today, from_draft_id=from_draft_id, business=business
            )
        )

    def send_draft(
        self, quote_id: str, today: Optional[date] = None, business: Optional[BusinessProfile] = None
    ) -> TransitionOutcome:
        return self._apply(
            lambda: lifecycle.send_draft(self.collection, quote_id, today=today, business=business)
        )

    def resend(self, quote_id: str, today: Optional[date] = None) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.resend(self.collection, quote_id, today=today))

    def accept(self, quote_id: str, today: Optional[date] = None) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.accept(self.collection, quote_id, today=today))

    def mark_deposit_paid(self, quote_id: str, today: Optional[date] = None) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.mark_deposit_paid(self.collection, quote_id, today=today))

    def mark_work_complete(self, quote_id: str, today: Optional[date] = None) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.mark_work_complete(self.collection, quote_id, today=today))

    def mark_final_payment(self, quote_id: str, today: Optional[date] = None) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.mark_final_payment(self.collection, quote_id, today=today))

    def delete_draft(self, quote_id: str) -> TransitionOutcome:
        return self._apply(lambda: lifecycle.delete_draft(self.collection, quote_id))

    def reset(self) -> None:
        """Drop every quote in every stage."""

        self.collection = lifecycle.reset()
        self._persist()
        logger.info("All quote data reset")
