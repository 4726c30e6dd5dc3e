"""Quote lifecycle, pricing, and income reporting for trade businesses."""
from quickquote.core import (
    STAGES,
    LineItem,
    Quote,
    QuoteCollection,
    configure_logging,
    load_settings,
)
from quickquote.pricing import calculate_totals
from quickquote.reporting import compare_with_previous, monthly_report
from quickquote.state import AppState
from quickquote.storage import JsonFileKeyValueStore, MemoryKeyValueStore, QuoteStore
from quickquote.team import match_invitation, resolve_invitation

__all__ = [
    "STAGES",
    "AppState",
    "JsonFileKeyValueStore",
    "LineItem",
    "MemoryKeyValueStore",
    "Quote",
    "QuoteCollection",
    "QuoteStore",
    "calculate_totals",
    "compare_with_previous",
    "configure_logging",
    "load_settings",
    "match_invitation",
    "monthly_report",
    "resolve_invitation",
]
