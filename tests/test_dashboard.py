"""Dashboard wiring checked without a running Streamlit server."""
import importlib.util
from datetime import date
from pathlib import Path
from unittest import mock

import pytest

from quickquote.core.models import STAGES

st = pytest.importorskip("streamlit")

DASHBOARD_PATH = Path(__file__).resolve().parents[1] / "quickquote" / "ui" / "dashboard.py"


@pytest.fixture
def dashboard(monkeypatch):
    """Load the dashboard module; any page rendering during import fails the test."""

    def _render_on_import(*args, **kwargs):
        raise AssertionError("dashboard rendered a page on import")

    monkeypatch.setattr(st, "set_page_config", _render_on_import)
    spec = importlib.util.spec_from_file_location("quickquote_dashboard", DASHBOARD_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_import_does_not_render(dashboard):
    assert set(dashboard.STAGE_ACTIONS) == set(STAGES)


def test_resend_refreshes_the_page(dashboard, monkeypatch, quote_store, make_quote):
    quote_store.send_quote(make_quote("s1"), today=date(2024, 3, 5))
    fake_st = mock.MagicMock()
    monkeypatch.setattr(dashboard, "st", fake_st)

    dashboard._resend(quote_store, quote_store.find("s1"))

    assert len(quote_store.find("s1").sent_dates) == 2
    fake_st.success.assert_called_once_with("Quote resent successfully!")
    fake_st.rerun.assert_called_once_with()
