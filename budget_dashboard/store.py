"""Session-scoped owner of the budget state.

A :class:`BudgetStore` is built once per session with the backend it should
persist to. It keeps the current :class:`BudgetData` snapshot, replaces it on
every mutation and writes the full blob back before returning, so a read
straight after a write always sees the write.
"""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Iterable, Optional

from . import config
from . import metrics
from .logging_setup import get_logger
from .models import BudgetCategory, BudgetData, Expense, ExpenseDraft, default_budget_data
from .persistence import KeyValueStore, decode_budget_data, encode_budget_data

logger = get_logger(__name__)


class BudgetStore:
    """Holds and persists the budget state for one session."""

    def __init__(self, backend: KeyValueStore, key: Optional[str] = None):
        """Initialize the store and load whatever the backend holds.

        Args:
            backend: Key-value store used for load/save.
            key: Storage key. Defaults to ``STORAGE_KEY`` from config.
        """
        self.backend = backend
        self.key = key or config.STORAGE_KEY
        self._last_expense_id = 0
        self._data = default_budget_data()
        self.load()

    @property
    def data(self) -> BudgetData:
        return self._data

    def load(self) -> BudgetData:
        """Read the stored blob, falling back to the seeded defaults.

        Missing or malformed data is never an error for the caller.
        """
        blob = self.backend.load(self.key)
        if blob is None:
            logger.debug("No stored budget under %r; using defaults", self.key)
            self._data = default_budget_data()
            return self._data
        try:
            self._data = decode_budget_data(blob)
        except ValueError as exc:
            logger.warning("Discarding malformed budget data under %r: %s", self.key, exc)
            self._data = default_budget_data()
        return self._data

    def _commit(self, data: BudgetData) -> None:
        self._data = data
        self.backend.save(self.key, encode_budget_data(data))

    def _next_expense_id(self) -> str:
        # Millisecond timestamp, bumped so ids issued here never repeat
        candidate = max(int(time.time() * 1000), self._last_expense_id + 1)
        self._last_expense_id = candidate
        return str(candidate)

    def update_categories(self, categories: Iterable[BudgetCategory]) -> None:
        """Replace the category list wholesale, without validation."""
        categories = tuple(categories)
        logger.debug("Replacing categories (%d entries)", len(categories))
        self._commit(replace(self._data, categories=categories))

    def add_expense(self, draft: ExpenseDraft) -> Expense:
        """Record an expense and add its amount to the matching category.

        An expense whose ``category_id`` matches no category is still stored;
        no category total changes.
        """
        expense = Expense.from_draft(self._next_expense_id(), draft)
        matched = False
        categories = []
        for category in self._data.categories:
            if category.id == expense.category_id:
                matched = True
                category = replace(category, spent=category.spent + expense.amount)
            categories.append(category)
        if not matched:
            logger.debug("Expense %s references unknown category %r", expense.id, expense.category_id)
        self._commit(replace(
            self._data,
            categories=tuple(categories),
            expenses=self._data.expenses + (expense,),
        ))
        return expense

    def update_budget_info(self, monthly_income: float, savings_goal: float) -> None:
        self._commit(replace(self._data, monthly_income=monthly_income, savings_goal=savings_goal))

    def save_budget(
        self,
        categories: Iterable[BudgetCategory],
        monthly_income: float,
        savings_goal: float,
    ) -> None:
        """Apply a submitted budget form: categories, income and savings in one write."""
        self._commit(replace(
            self._data,
            categories=tuple(categories),
            monthly_income=monthly_income,
            savings_goal=savings_goal,
        ))

    def recompute_spent(self) -> BudgetData:
        """Re-derive every category's ``spent`` from the stored expenses."""
        self._commit(metrics.recompute_from_expenses(self._data))
        return self._data

    def reset(self) -> None:
        self._commit(default_budget_data())

    def has_any_data(self) -> bool:
        data = self._data
        return (
            any(c.budgeted > 0 for c in data.categories)
            or data.monthly_income > 0
            or len(data.expenses) > 0
        )
