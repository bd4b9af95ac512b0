"""Top-level package for the Budget Dashboard.

The primary modules are:

* ``models`` – budget categories, expenses and the ``BudgetData`` aggregate
* ``store`` – the session-scoped ``BudgetStore`` that owns and persists state
* ``metrics`` – pure functions deriving totals, percentages and breakdowns
* ``persistence`` – key-value backends for the serialized state blob
* ``forms`` – parsing and validation of budget and expense form input
* ``ui`` – the Streamlit views

To run the dashboard from the command line you can execute:

```bash
streamlit run budget_dashboard/Home.py
```
"""

from . import metrics  # noqa: F401  # re-exported for convenience
from .models import BudgetCategory, BudgetData, Expense, ExpenseDraft, default_budget_data
from .persistence import JsonFileStore, MemoryStore
from .store import BudgetStore

__all__ = [
    "BudgetCategory",
    "BudgetData",
    "BudgetStore",
    "Expense",
    "ExpenseDraft",
    "JsonFileStore",
    "MemoryStore",
    "default_budget_data",
    "metrics",
]
