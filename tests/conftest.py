"""Pytest configuration to make the local package importable without installation."""
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from quickquote.cli import main as cli_main
from quickquote.core.models import LineItem, Quote
from quickquote.storage import MemoryKeyValueStore, QuoteStore


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep local secrets files and data directories out of the tests."""

    monkeypatch.setenv("QUICKQUOTE_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("QUICKQUOTE_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def memory_storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def quote_store(memory_storage: MemoryKeyValueStore) -> QuoteStore:
    store = QuoteStore(memory_storage)
    store.load()
    return store


@pytest.fixture
def make_quote():
    """Build a quote with sensible defaults for a two-hour labour job."""

    def _make(quote_id: str = "d1", **overrides) -> Quote:
        fields = {
            "customer_name": "Thandi Mokoena",
            "contact_type": "phone",
            "phone_number": "0821234567",
            "description": "Geyser replacement",
            "line_items": [LineItem(id=1, description="Labour", quantity=2, price=50)],
            "vat_percentage": 15,
            "deposit_percentage": 50,
        }
        fields.update(overrides)
        return Quote(id=quote_id, **fields)

    return _make


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch):
    """Helper to invoke the CLI with custom arguments inside tests."""

    def _run(args: list[str]) -> None:
        monkeypatch.setattr(sys, "argv", ["quickquote.cli", *args])
        cli_main()

    return _run
