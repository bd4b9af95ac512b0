"""Input handling for the budget and expense forms.

The Streamlit widgets only collect raw text; turning that text into
:class:`BudgetCategory` and :class:`ExpenseDraft` values happens here.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import BudgetCategory, ExpenseDraft

CATEGORY_COLORS = [
    'hsl(213, 94%, 68%)',
    'hsl(158, 64%, 52%)',
    'hsl(38, 92%, 58%)',
    'hsl(0, 84%, 60%)',
    'hsl(213, 94%, 58%)',
    'hsl(46, 91%, 58%)',
    'hsl(336, 84%, 60%)',
    'hsl(271, 91%, 65%)',
]

DEFAULT_CATEGORY_NAMES = ['Housing', 'Food', 'Transportation', 'Utilities', 'Entertainment']


class FormError(ValueError):
    """Raised when submitted form values cannot be used."""


@dataclass
class CategoryRow:
    """One editable line of the budget form.

    ``id`` is set for rows that were pre-filled from an existing category and
    ``None`` for rows the user added. ``key`` names the row's widgets and
    never changes while the row lives, whatever its position.
    """

    name: str
    amount: str
    id: Optional[str] = None
    key: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)


def parse_amount(text: Optional[str]) -> Optional[float]:
    """Parse a numeric form field.

    Returns:
        The value as float, or ``None`` for blank, non-numeric or non-finite text.

    Example:
        >>> parse_amount(" 12.50 ")
        12.5
        >>> parse_amount("abc") is None
        True
    """
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def format_amount(value: float) -> str:
    """Render a stored amount for a text field: ``400`` rather than ``400.0``."""
    return str(int(value)) if float(value).is_integer() else str(value)


def blank_rows() -> List[CategoryRow]:
    return [CategoryRow(name=name, amount='') for name in DEFAULT_CATEGORY_NAMES]


def rows_from_categories(categories: Sequence[BudgetCategory]) -> List[CategoryRow]:
    """Pre-fill the form from the current categories, or the blank defaults."""
    if not categories:
        return blank_rows()
    return [
        CategoryRow(name=c.category, amount=format_amount(c.budgeted), id=c.id)
        for c in categories
    ]


def _fresh_ids(taken: Iterable[str]):
    taken = set(taken)
    candidate = 1
    while True:
        if str(candidate) not in taken:
            taken.add(str(candidate))
            yield str(candidate)
        candidate += 1


def build_categories(
    rows: Sequence[CategoryRow],
    previous: Sequence[BudgetCategory] = (),
    reserved_ids: Iterable[str] = (),
) -> Tuple[BudgetCategory, ...]:
    """Turn submitted form rows into the new category list.

    Rows without a name or without a positive amount are dropped. Each
    surviving row keeps the accumulated ``spent`` of the category it came
    from: rows carrying a known id match on that id, so renaming a category
    keeps its history. Rows without a known id fall back to matching a
    previous category by display name, but only among previous categories no
    id-matched row already claimed. New rows get ids unused by any previous
    category and outside ``reserved_ids`` (pass the category ids expenses
    still reference, so a new category never adopts orphaned expenses).
    Colours cycle through ``CATEGORY_COLORS`` by position.
    """
    by_id: Dict[str, BudgetCategory] = {c.id: c for c in previous}
    kept = [r for r in rows if r.name and r.name.strip() and (parse_amount(r.amount) or 0) > 0]

    claimed = {r.id for r in kept if r.id is not None and r.id in by_id}
    by_name: Dict[str, BudgetCategory] = {}
    for c in previous:
        if c.id not in claimed:
            by_name.setdefault(c.category, c)

    matches: List[Optional[BudgetCategory]] = []
    for row in kept:
        source = by_id.get(row.id) if row.id is not None else None
        if source is None:
            source = by_name.pop(row.name.strip(), None)
            if source is not None:
                claimed.add(source.id)
        matches.append(source)

    # New ids avoid every previous and reserved id
    new_ids = _fresh_ids(claimed | set(by_id) | set(reserved_ids))
    categories = []
    for index, (row, source) in enumerate(zip(kept, matches)):
        categories.append(BudgetCategory(
            id=source.id if source is not None else next(new_ids),
            category=row.name.strip(),
            budgeted=parse_amount(row.amount),
            spent=source.spent if source is not None else 0.0,
            color=CATEGORY_COLORS[index % len(CATEGORY_COLORS)],
        ))
    return tuple(categories)


def plan_summary(monthly_income: float, total_budget: float, savings_goal: float) -> Dict[str, float]:
    """Summary shown beside the budget form while it is being edited."""
    left = monthly_income - total_budget - savings_goal
    return {
        'income': monthly_income,
        'total_budget': total_budget,
        'savings_goal': savings_goal,
        'remaining': left,
        'over_income': max(0.0, -left),
    }


def build_expense(
    amount_text: Optional[str],
    category_id: Optional[str],
    description: str = '',
    expense_date: Optional[str] = None,
) -> ExpenseDraft:
    """Validate the expense form.

    Raises:
        FormError: If the amount or category is missing, the amount is not a
            number, or the date is not an ISO calendar date.
    """
    if not amount_text or not str(amount_text).strip():
        raise FormError("Amount is required")
    if not category_id:
        raise FormError("Category is required")
    amount = parse_amount(amount_text)
    if amount is None:
        raise FormError(f"Amount must be a number, got {amount_text!r}")
    if expense_date:
        try:
            expense_date = date.fromisoformat(expense_date).isoformat()
        except ValueError as exc:
            raise FormError(f"Date must be YYYY-MM-DD, got {expense_date!r}") from exc
    else:
        expense_date = date.today().isoformat()
    return ExpenseDraft(
        category_id=category_id,
        amount=amount,
        description=(description or '').strip(),
        date=expense_date,
    )
