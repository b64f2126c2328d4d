# config.py
# -*- coding: utf-8 -*-
"""
Configuration, constants, and initialization.

Display options come from an optional YAML file merged over DEFAULT_CFG.
Connection settings (backend URL, API key, server options) come from the
environment or a .env file.
"""

import os
import sys
import logging
from typing import Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

# -------------------------
# Global Constants
# -------------------------

APP_TITLE = "💧 Water Leak Dashboard"
CONFIG_FILE = os.environ.get("LEAK_DASHBOARD_CONFIG", "config_water_leak.yml")
LOG_DIR = "logs"

# -------------------------
# Logging Setup
# -------------------------

os.makedirs(LOG_DIR, exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(message)s",
    handlers=[
        logging.FileHandler(os.path.join(LOG_DIR, "dashboard.log"), encoding="utf-8"),
        logging.StreamHandler(sys.stderr),
    ],
)

log = logging.getLogger("dashboard")

# -------------------------
# Default Configuration
# -------------------------

DEFAULT_CFG = {
    "timezone": "UTC",
    "avg_response_time": "3.2 hours",
    "clock_interval_seconds": 60,
    "change_poll_seconds": 5,
    "default_date_start": "2024-01-01",
    "default_date_end": None,
    "demo_data_path": None,
    "reports_table": "reports",
    "export_filename": "leak_reports.csv",
}


def load_config(path=CONFIG_FILE):
    """Merge the YAML config file (if any) over the defaults."""
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            return {**DEFAULT_CFG, **(yaml.safe_load(f) or {})}
    log.warning(f"{path} not found. Using safe defaults.")
    return DEFAULT_CFG.copy()


cfg = load_config()


# -------------------------
# Environment Settings
# -------------------------


class Settings(BaseSettings):
    """Server and backend connection settings with environment variable support."""

    # Application
    APP_NAME: str = "Water Leak Dashboard"
    DEBUG: bool = False

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8050

    # Hosted report store
    REPORTS_API_URL: Optional[str] = None
    REPORTS_API_KEY: Optional[str] = None
    REQUEST_TIMEOUT: Optional[float] = None
    DEMO_MODE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )


settings = Settings()
