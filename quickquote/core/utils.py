"""Shared utility functions for the quickquote package."""
from __future__ import annotations

import logging
import math
import os
from datetime import date, datetime
from pathlib import Path
from typing import Any, List, Optional, Tuple

logger = logging.getLogger(__name__)


def _secret_value(key: str) -> Optional[str]:
    # Hosted dashboards keep credentials in .streamlit/secrets.toml.
    try:
        import streamlit as st

        if key in st.secrets:
            return str(st.secrets[key])
    except (ImportError, FileNotFoundError, KeyError):
        return None
    return None


def get_config_value(key: str, default: str = "") -> str:
    """Look ``key`` up in Streamlit secrets, then the environment."""

    secret = _secret_value(key)
    if secret is not None:
        return secret
    return os.getenv(key, default)


def _parse_env_line(raw_line: str) -> Optional[Tuple[str, str]]:
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_file(path: Path) -> List[str]:
    """Copy ``KEY=value`` lines from ``path`` into ``os.environ``.

    Variables already set in the environment are left alone. Returns the keys
    that were added; a missing or unreadable file adds nothing.
    """

    if not path.exists():
        return []

    added: List[str] = []
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)
        return added
    for raw_line in lines:
        parsed = _parse_env_line(raw_line)
        if parsed is None or parsed[0] in os.environ:
            continue
        os.environ[parsed[0]] = parsed[1]
        added.append(parsed[0])
    if added:
        logger.debug("Loaded %s from %s", ", ".join(added), path)
    return added


def today_iso(today: Optional[date] = None) -> str:
    """Return the calendar date (no time component) as ``YYYY-MM-DD``."""

    return (today or date.today()).isoformat()


def parse_iso_date(raw: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or a full ISO timestamp into a date; ``None`` if unusable."""

    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        return None
    text = raw.strip()
    if not text:
        return None
    # Timestamps keep only the calendar part, matching how dates are stamped.
    text = text.split("T", 1)[0].split(" ", 1)[0]
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def in_period(raw_date: Any, month: int, year: int) -> bool:
    """Return True when an ISO date string falls inside ``month`` (1-12) of ``year``."""

    parsed = parse_iso_date(raw_date)
    if parsed is None:
        return False
    return parsed.month == month and parsed.year == year


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Convert user-entered numbers to float, falling back to ``default``."""

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip().replace(",", ""))
        except ValueError:
            return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
