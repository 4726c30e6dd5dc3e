"""QuoteStore persistence and its handling of no-op and failing writes."""
import json
import logging
from datetime import date

import pytest

from quickquote.core.errors import StorageError
from quickquote.core.models import COMPLETE, DRAFT, SENT, STAGES
from quickquote.storage import (
    QUOTES_STORAGE_KEY,
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    QuoteStore,
)

MARCH_5 = date(2024, 3, 5)


class FailingWrites(MemoryKeyValueStore):
    def set(self, key, value):
        raise StorageError("disk full")


class FailingReads(MemoryKeyValueStore):
    def get(self, key):
        raise StorageError("permission denied")


def test_load_writes_empty_default(memory_storage):
    store = QuoteStore(memory_storage)

    collection = store.load()

    assert collection.counts() == {stage: 0 for stage in STAGES}
    assert json.loads(memory_storage.get(QUOTES_STORAGE_KEY)) == {stage: [] for stage in STAGES}


def test_transitions_are_persisted_in_camel_case(quote_store, memory_storage, make_quote):
    quote_store.save_draft(make_quote("d1"))
    quote_store.send_draft("d1", today=MARCH_5)

    stored = json.loads(memory_storage.get(QUOTES_STORAGE_KEY))
    assert stored[DRAFT] == []
    entry = stored[SENT][0]
    assert entry["customerName"] == "Thandi Mokoena"
    assert entry["sentDates"] == ["2024-03-05"]
    assert entry["lineItems"][0]["price"] == 50


def test_reload_restores_collection(memory_storage, quote_store, make_quote):
    quote_store.send_quote(make_quote("s1"), today=MARCH_5)
    quote_store.accept("s1", today=MARCH_5)

    reloaded = QuoteStore(memory_storage)
    reloaded.load()

    assert reloaded.find("s1").accepted_date == "2024-03-05"
    assert reloaded.collection.to_dict() == quote_store.collection.to_dict()


def test_happy_path_through_every_stage(quote_store, make_quote):
    quote_store.save_draft(make_quote("d1"))
    for step in (
        quote_store.send_draft,
        quote_store.accept,
        quote_store.mark_deposit_paid,
        quote_store.mark_work_complete,
        quote_store.mark_final_payment,
    ):
        outcome = step("d1", today=MARCH_5)
        assert outcome.ok

    quote = quote_store.quotes(COMPLETE)[0]
    assert quote.is_paid is True
    assert quote.final_payment_date == "2024-03-05"
    assert quote_store.collection.locate("d1") == [COMPLETE]


def test_missing_quote_is_reported_without_change(quote_store, memory_storage, caplog):
    before = memory_storage.get(QUOTES_STORAGE_KEY)

    with caplog.at_level(logging.WARNING):
        outcome = quote_store.accept("ghost", today=MARCH_5)

    assert outcome.ok is False
    assert "ghost" in outcome.message
    assert memory_storage.get(QUOTES_STORAGE_KEY) == before
    assert "Nothing to do" in caplog.text


def test_validation_errors_propagate(quote_store, make_quote):
    with pytest.raises(ValueError):
        quote_store.send_quote(make_quote("s1", phone_number=None), today=MARCH_5)

    assert quote_store.quotes(SENT) == []


def test_failed_write_keeps_memory_state(make_quote, caplog):
    store = QuoteStore(FailingWrites())
    with caplog.at_level(logging.ERROR):
        store.load()
        outcome = store.save_draft(make_quote("d1"))

    assert outcome.ok
    assert store.find("d1") is not None
    assert "Error saving quotes" in caplog.text


def test_failed_read_starts_empty(caplog):
    store = QuoteStore(FailingReads())

    with caplog.at_level(logging.ERROR):
        collection = store.load()

    assert collection.counts()[DRAFT] == 0
    assert store.loaded
    assert "Error loading quotes" in caplog.text


def test_unreadable_payload_starts_empty():
    store = QuoteStore(MemoryKeyValueStore({QUOTES_STORAGE_KEY: "{not json"}))

    assert store.load().counts() == {stage: 0 for stage in STAGES}


def test_quotes_rejects_unknown_stage(quote_store):
    with pytest.raises(KeyError):
        quote_store.quotes("Archived")


def test_reset_clears_every_stage(quote_store, memory_storage, make_quote):
    quote_store.save_draft(make_quote("d1"))
    quote_store.send_quote(make_quote("s1"), today=MARCH_5)

    quote_store.reset()

    assert quote_store.collection.counts() == {stage: 0 for stage in STAGES}
    assert json.loads(memory_storage.get(QUOTES_STORAGE_KEY)) == {stage: [] for stage in STAGES}


def test_json_file_store_round_trip(tmp_path):
    storage = JsonFileKeyValueStore(tmp_path / "data")

    assert storage.get("quickquote_data") is None
    storage.set("quickquote_data", '{"Draft": []}')

    assert (tmp_path / "data" / "quickquote_data.json").exists()
    assert storage.get("quickquote_data") == '{"Draft": []}'
    storage.remove("quickquote_data")
    assert storage.get("quickquote_data") is None
