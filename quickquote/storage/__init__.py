"""Persistence for quotes and cached profile data."""
from quickquote.storage.kv import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from quickquote.storage.quote_store import QUOTES_STORAGE_KEY, QuoteStore, TransitionOutcome

__all__ = [
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "QUOTES_STORAGE_KEY",
    "QuoteStore",
    "TransitionOutcome",
]
