"""Process configuration resolved from secrets, environment, and a local .env file."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hotelstream.core.utils import get_config_value, load_env_file

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_PROPERTY_ID = "84626d8e-969c-4f06-b77a-a7a6dfc30cbf"
TRUTHY = ("1", "true", "yes", "on")
_ENV_LOADED = False


def _ensure_env() -> None:
    """Load ``.env`` (or ``HOTELSTREAM_ENV_FILE``) once per process."""

    global _ENV_LOADED
    if _ENV_LOADED:
        return

    _ENV_LOADED = True
    location = os.getenv("HOTELSTREAM_ENV_FILE")
    path = Path(location).expanduser() if location else DEFAULT_ENV_FILE
    load_env_file(path)


def _int_value(key: str, default: int) -> int:
    raw = get_config_value(key, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %d", key, raw, default)
        return default


def _float_value(key: str, default: float) -> float:
    raw = get_config_value(key, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


@dataclass
class Settings:
    """Connection details for both PMS streams plus runtime knobs."""

    host_url: str = ""
    app_id: str = ""
    api_password: str = ""
    stats_app_id: str = ""
    stats_api_password: str = ""
    property_id: str = DEFAULT_PROPERTY_ID
    port: int = 3000
    stream_poll_interval: float = 10.0
    stats_poll_interval: float = 30.0
    stats_num_messages: int = 5
    polling_enabled: bool = True
    data_dir: Optional[Path] = None
    webhook_username: str = ""
    webhook_password: str = ""

    @property
    def stream_configured(self) -> bool:
        return bool(self.host_url and self.app_id)

    @property
    def stats_configured(self) -> bool:
        return bool(self.host_url and self.stats_app_id)


def load_settings() -> Settings:
    """Build :class:`Settings` from Streamlit secrets or environment variables."""

    _ensure_env()
    data_dir = get_config_value("DATA_DIR", "")
    return Settings(
        host_url=get_config_value("HOST_URL", "").rstrip("/"),
        app_id=get_config_value("APP_ID", ""),
        api_password=get_config_value("API_PASSWORD", ""),
        stats_app_id=get_config_value("STATS_APP_ID", ""),
        stats_api_password=get_config_value("STATS_API_PASSWORD", ""),
        property_id=get_config_value("PROPERTY_ID", DEFAULT_PROPERTY_ID),
        port=_int_value("PORT", 3000),
        stream_poll_interval=_float_value("STREAM_POLL_INTERVAL", 10.0),
        stats_poll_interval=_float_value("STATS_POLL_INTERVAL", 30.0),
        stats_num_messages=_int_value("STATS_NUM_MESSAGES", 5),
        polling_enabled=get_config_value("POLLING_ENABLED", "1").strip().lower() in TRUTHY,
        data_dir=Path(data_dir) if data_dir else None,
        webhook_username=get_config_value("WEBHOOK_USERNAME", ""),
        webhook_password=get_config_value("WEBHOOK_PASSWORD", ""),
    )
