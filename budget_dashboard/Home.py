"""Main entry point for the Streamlit budget tracker.

Run with::

    streamlit run budget_dashboard/Home.py
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from budget_dashboard import config
from budget_dashboard.logging_setup import configure_logging
from budget_dashboard.persistence import JsonFileStore
from budget_dashboard.store import BudgetStore
from budget_dashboard.ui import BudgetDashboardUI


def main():
    """Build the session's store on first run and render the current view."""
    configure_logging()
    ui_store = st.session_state.get('budget_store')
    if ui_store is None:
        config.ensure_data_directories()
        ui_store = BudgetStore(JsonFileStore(config.STATE_FILE))
        st.session_state.budget_store = ui_store
    BudgetDashboardUI(ui_store, configure_page=True).render()


if __name__ == "__main__":
    main()
