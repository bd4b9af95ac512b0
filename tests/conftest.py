"""Pytest configuration for test isolation.

``JsonFileStore`` defaults to ``config.STATE_FILE`` under the project's
``data/`` directory. Point it at a per-test temporary file so tests never
touch (or read) a real budget.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from budget_dashboard import config


@pytest.fixture(autouse=True)
def _isolate_state_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)
    monkeypatch.setattr(config, "STATE_FILE", data_dir / "budget_state.json")
