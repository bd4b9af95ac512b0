"""Configuration management for the budget dashboard.

This module centralizes all configuration values including paths,
the storage key and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in budget_dashboard/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory
DATA_DIR = Path(os.getenv("BUDGET_DASHBOARD_DATA_DIR", _PROJECT_ROOT / "data"))

# Single JSON file holding every persisted key
STATE_FILE = Path(
    os.getenv("BUDGET_DASHBOARD_STATE_FILE", DATA_DIR / "budget_state.json")
).resolve()

# Key under which the whole BudgetData blob is stored
STORAGE_KEY = os.getenv("BUDGET_DASHBOARD_STORAGE_KEY", "budget-app-data")

LOG_LEVEL = os.getenv("BUDGET_DASHBOARD_LOG_LEVEL")


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, STATE_FILE.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def get_state_file() -> str:
    """Get the state file path as a string."""
    return str(STATE_FILE)
