"""Budget data types and their dictionary (JSON) representation.

The serialized field names follow the stored blob format: ``categoryId``,
``monthlyIncome`` and ``savingsGoal`` are camelCase, everything else is a
single lower-case word.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as _date
from typing import Any, Dict, Mapping, Tuple

# Seed categories for a fresh session: (id, name, colour token)
DEFAULT_CATEGORIES: Tuple[Tuple[str, str, str], ...] = (
    ('1', 'Housing', 'hsl(213, 94%, 68%)'),
    ('2', 'Food', 'hsl(158, 64%, 52%)'),
    ('3', 'Transportation', 'hsl(38, 92%, 58%)'),
    ('4', 'Entertainment', 'hsl(0, 84%, 60%)'),
    ('5', 'Utilities', 'hsl(213, 94%, 58%)'),
)


def _today() -> str:
    return _date.today().isoformat()


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise ValueError(f"missing field '{key}'")
    return payload[key]


def _number(payload: Mapping[str, Any], key: str) -> float:
    value = _require(payload, key)
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field '{key}' must be a number, got {type(value).__name__}")
    return float(value)


def _text(payload: Mapping[str, Any], key: str) -> str:
    value = _require(payload, key)
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class BudgetCategory:
    id: str
    category: str
    budgeted: float = 0.0
    spent: float = 0.0
    color: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'category': self.category,
            'budgeted': self.budgeted,
            'spent': self.spent,
            'color': self.color,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> 'BudgetCategory':
        payload = _mapping(payload, 'category')
        return cls(
            id=_text(payload, 'id'),
            category=_text(payload, 'category'),
            budgeted=_number(payload, 'budgeted'),
            spent=_number(payload, 'spent'),
            color=_text(payload, 'color'),
        )


@dataclass(frozen=True)
class ExpenseDraft:
    """An expense as entered, before the store assigns it an id."""

    category_id: str
    amount: float
    description: str = ''
    date: str = field(default_factory=_today)


@dataclass(frozen=True)
class Expense:
    id: str
    category_id: str
    amount: float
    description: str = ''
    date: str = field(default_factory=_today)

    @classmethod
    def from_draft(cls, expense_id: str, draft: ExpenseDraft) -> 'Expense':
        return cls(
            id=expense_id,
            category_id=draft.category_id,
            amount=draft.amount,
            description=draft.description,
            date=draft.date,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'categoryId': self.category_id,
            'amount': self.amount,
            'description': self.description,
            'date': self.date,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> 'Expense':
        payload = _mapping(payload, 'expense')
        return cls(
            id=_text(payload, 'id'),
            category_id=_text(payload, 'categoryId'),
            amount=_number(payload, 'amount'),
            description=_text(payload, 'description'),
            date=_text(payload, 'date'),
        )


@dataclass(frozen=True)
class BudgetData:
    """Aggregate root: categories in display order, expenses in entry order."""

    categories: Tuple[BudgetCategory, ...] = ()
    expenses: Tuple[Expense, ...] = ()
    monthly_income: float = 0.0
    savings_goal: float = 0.0

    def __post_init__(self) -> None:
        # Accept any iterable from callers but always hold tuples
        object.__setattr__(self, 'categories', tuple(self.categories))
        object.__setattr__(self, 'expenses', tuple(self.expenses))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'categories': [c.to_dict() for c in self.categories],
            'expenses': [e.to_dict() for e in self.expenses],
            'monthlyIncome': self.monthly_income,
            'savingsGoal': self.savings_goal,
        }

    @classmethod
    def from_dict(cls, payload: Any) -> 'BudgetData':
        """Build an aggregate from its dictionary form.

        Raises:
            ValueError: If any field is missing or has the wrong type.
        """
        payload = _mapping(payload, 'budget data')
        categories = _require(payload, 'categories')
        expenses = _require(payload, 'expenses')
        if not isinstance(categories, list):
            raise ValueError("field 'categories' must be a list")
        if not isinstance(expenses, list):
            raise ValueError("field 'expenses' must be a list")
        return cls(
            categories=tuple(BudgetCategory.from_dict(item) for item in categories),
            expenses=tuple(Expense.from_dict(item) for item in expenses),
            monthly_income=_number(payload, 'monthlyIncome'),
            savings_goal=_number(payload, 'savingsGoal'),
        )


def default_budget_data() -> BudgetData:
    """Return the seeded state used when nothing (valid) has been stored."""
    return BudgetData(
        categories=tuple(
            BudgetCategory(id=cid, category=name, budgeted=0.0, spent=0.0, color=color)
            for cid, name, color in DEFAULT_CATEGORIES
        ),
        expenses=(),
        monthly_income=0.0,
        savings_goal=0.0,
    )
