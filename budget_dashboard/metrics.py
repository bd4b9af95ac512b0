"""Derived budget metrics.

Every function here is pure: it reads a :class:`BudgetData` snapshot (or a
single category) and returns a fresh value. Results are full-precision
floats; rounding for display happens in :mod:`budget_dashboard.formatting`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, NamedTuple

import numpy as np
import pandas as pd

from .models import BudgetCategory, BudgetData, Expense

SUMMARY_COLUMNS = [
    'id', 'category', 'budgeted', 'spent', 'remaining', 'percentage', 'over_budget', 'color',
]


class BreakdownSlice(NamedTuple):
    label: str
    value: float
    color: str


def total_budgeted(data: BudgetData) -> float:
    return float(sum(c.budgeted for c in data.categories))


def total_spent(data: BudgetData) -> float:
    return float(sum(c.spent for c in data.categories))


def remaining(data: BudgetData) -> float:
    """Budget left across all categories; negative when overspent."""
    return total_budgeted(data) - total_spent(data)


def spent_percentage(data: BudgetData) -> float:
    budgeted = total_budgeted(data)
    if budgeted > 0:
        return total_spent(data) / budgeted * 100
    return 0.0


def category_percentage(category: BudgetCategory) -> float:
    if category.budgeted > 0:
        return category.spent / category.budgeted * 100
    return 0.0


def is_over_budget(category: BudgetCategory) -> bool:
    return category_percentage(category) > 100


def category_remaining(category: BudgetCategory) -> float:
    return category.budgeted - category.spent


def category_overage(category: BudgetCategory) -> float:
    return category.spent - category.budgeted


def over_budget_categories(data: BudgetData) -> List[BudgetCategory]:
    """Categories whose spend exceeds their budget, in display order.

    Note this compares ``spent > budgeted`` directly, so a zero-budget
    category with any spend is listed here even though its
    :func:`category_percentage` is defined as 0.
    """
    return [c for c in data.categories if c.spent > c.budgeted]


def breakdown_series(data: BudgetData) -> List[BreakdownSlice]:
    """Spend per category for proportional charts; zero-spend categories are left out."""
    return [
        BreakdownSlice(label=c.category, value=c.spent, color=c.color)
        for c in data.categories
        if c.spent > 0
    ]


def orphaned_expenses(data: BudgetData) -> List[Expense]:
    """Expenses whose category no longer exists, in entry order."""
    known = {c.id for c in data.categories}
    return [e for e in data.expenses if e.category_id not in known]


def orphaned_total(data: BudgetData) -> float:
    return float(sum(e.amount for e in orphaned_expenses(data)))


def recompute_from_expenses(data: BudgetData) -> BudgetData:
    """Rebuild every category's ``spent`` from the expense list.

    Categories sharing an id each receive the full total for that id, which is
    what repeated ``add_expense`` calls produce as well. Orphaned expenses are
    kept but contribute to no category.
    """
    totals: Dict[str, float] = {}
    for expense in data.expenses:
        totals[expense.category_id] = totals.get(expense.category_id, 0.0) + expense.amount
    categories = tuple(replace(c, spent=totals.get(c.id, 0.0)) for c in data.categories)
    return replace(data, categories=categories)


def spending_trend(data: BudgetData) -> List[Dict[str, object]]:
    """Single-period trend row; only the current snapshot is tracked."""
    return [{'month': 'This Month', 'spending': total_spent(data), 'budget': total_budgeted(data)}]


def category_summary(data: BudgetData) -> pd.DataFrame:
    """Tabulate per-category figures in display order.

    Returns:
        DataFrame with the columns in ``SUMMARY_COLUMNS``; empty (with those
        columns) when there are no categories.
    """
    if not data.categories:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df = pd.DataFrame([c.to_dict() for c in data.categories])
    df['budgeted'] = df['budgeted'].astype(float)
    df['spent'] = df['spent'].astype(float)
    df['remaining'] = df['budgeted'] - df['spent']
    budgeted = df['budgeted'].to_numpy()
    spent = df['spent'].to_numpy()
    safe = np.where(budgeted > 0, budgeted, 1.0)
    df['percentage'] = np.where(budgeted > 0, spent / safe * 100, 0.0)
    df['over_budget'] = df['spent'] > df['budgeted']
    return df[SUMMARY_COLUMNS]
