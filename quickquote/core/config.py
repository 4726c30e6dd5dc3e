"""Runtime settings resolved from the environment or Streamlit secrets."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from quickquote.core.utils import coerce_number, get_config_value, load_env_file

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path("secrets/quickquote.env")
_ENV_LOADED = False


@dataclass
class Settings:
    data_dir: Path
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    default_vat_percentage: float = 15.0
    default_deposit_percentage: float = 50.0
    log_level: str = "INFO"

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


def _ensure_env() -> None:
    """Populate settings from secrets/quickquote.env once per process."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return
    _ENV_LOADED = True

    env_path = Path(os.getenv("QUICKQUOTE_ENV_FILE", DEFAULT_ENV_FILE))
    load_env_file(env_path)


def load_settings() -> Settings:
    """Build a ``Settings`` object from the current environment."""

    _ensure_env()
    settings = Settings(
        data_dir=Path(get_config_value("QUICKQUOTE_DATA_DIR", "data")),
        supabase_url=get_config_value("SUPABASE_URL") or None,
        supabase_key=get_config_value("SUPABASE_ANON_KEY") or None,
        default_vat_percentage=coerce_number(get_config_value("QUICKQUOTE_DEFAULT_VAT", "15"), 15.0),
        default_deposit_percentage=coerce_number(
            get_config_value("QUICKQUOTE_DEFAULT_DEPOSIT", "50"), 50.0
        ),
        log_level=get_config_value("LOG_LEVEL", "INFO").upper(),
    )
    if not settings.backend_configured:
        logger.debug("Backend credentials missing; team features will use local stores only.")
    return settings
