"""Streamlit views for the budget dashboard.

Three views share one :class:`BudgetStore` kept in ``st.session_state``:
the dashboard, the budget form and the expense form. Navigation is the
``view`` key in session state.
"""

from __future__ import annotations

from datetime import date
from typing import List

import streamlit as st
from streamlit.errors import StreamlitAPIException

from . import forms
from . import metrics
from . import visualization as viz
from .formatting import escape_dollar_for_markdown, format_currency, format_percent
from .store import BudgetStore

DASHBOARD = 'dashboard'
CREATE_BUDGET = 'create-budget'
ADD_EXPENSE = 'add-expense'


def _money(amount: float) -> str:
    return escape_dollar_for_markdown(format_currency(amount))


def _go(view: str) -> None:
    st.session_state.view = view
    st.rerun()


class BudgetDashboardUI:
    """Renders the views against a session's store."""
    _PAGE_CONFIGURED = False

    def __init__(self, store: BudgetStore, *, configure_page: bool = False):
        self.store = store
        if configure_page:
            self.setup_page_config()

    def setup_page_config(self) -> None:
        if BudgetDashboardUI._PAGE_CONFIGURED:
            return
        try:
            st.set_page_config(page_title="Budget Tracker", page_icon="💰", layout="wide")
        except StreamlitAPIException:
            # Already configured upstream
            pass
        finally:
            BudgetDashboardUI._PAGE_CONFIGURED = True

    def render(self) -> None:
        view = st.session_state.get('view', DASHBOARD)
        if view == CREATE_BUDGET:
            self.render_budget_form()
        elif view == ADD_EXPENSE:
            self.render_expense_form()
        else:
            self.render_dashboard()

    # Dashboard

    def render_dashboard(self) -> None:
        if not self.store.has_any_data():
            self._render_welcome_screen()
            return

        data = self.store.data
        col1, col2, col3 = st.columns([3, 1, 1])
        with col1:
            st.title("Budget Dashboard")
            st.markdown("Track your spending and stay on budget")
        with col2:
            if st.button("➕ Add Expense"):
                _go(ADD_EXPENSE)
        with col3:
            if st.button("🎯 Create Budget"):
                _go(CREATE_BUDGET)

        cols = st.columns(4)
        cols[0].metric("Total Budget", format_currency(metrics.total_budgeted(data)), help="Monthly budget")
        cols[1].metric(
            "Total Spent",
            format_currency(metrics.total_spent(data)),
            delta=f"{format_percent(metrics.spent_percentage(data))} of budget",
            delta_color="off",
        )
        cols[2].metric("Remaining", format_currency(metrics.remaining(data)), help="Available to spend")
        cols[3].metric("Savings Goal", format_currency(data.savings_goal), help="Monthly target")

        over = metrics.over_budget_categories(data)
        if over:
            lines = [
                f"- **{c.category}**: {_money(metrics.category_overage(c))} over"
                for c in over
            ]
            st.error("⚠️ Budget alert\n\n" + "\n".join(lines))

        orphans = metrics.orphaned_expenses(data)
        if orphans:
            st.info(
                f"{len(orphans)} expense(s) totalling {_money(metrics.orphaned_total(data))} "
                "belong to categories that no longer exist."
            )

        summary = metrics.category_summary(data)
        chart_left, chart_right = st.columns(2)
        with chart_left:
            st.plotly_chart(viz.create_budget_vs_spent_chart(summary), use_container_width=True)
        with chart_right:
            st.plotly_chart(viz.create_breakdown_pie_chart(metrics.breakdown_series(data)), use_container_width=True)
        st.plotly_chart(viz.create_spending_trend_chart(metrics.spending_trend(data)), use_container_width=True)

        self._render_category_progress(data)

    def _render_category_progress(self, data) -> None:
        st.subheader("Category Breakdown")
        for category in data.categories:
            pct = metrics.category_percentage(category)
            left, right = st.columns([3, 2])
            label = f"**{category.category}**"
            if metrics.is_over_budget(category):
                label += " 🔴 Over budget"
            left.markdown(label)
            right.markdown(f"{_money(category.spent)} / {_money(category.budgeted)}")
            st.progress(min(pct, 100.0) / 100)
            st.caption(
                f"{format_percent(pct)} used · "
                f"{_money(metrics.category_remaining(category))} remaining"
            )

    def _render_welcome_screen(self) -> None:
        st.markdown("""
        # Welcome to Your Budget Tracker

        Get started by creating your first budget. Set up your income, categories,
        and savings goals to begin tracking your finances.
        """)
        if st.button("🎯 Create Your First Budget"):
            _go(CREATE_BUDGET)

    # Budget form

    def _form_rows(self) -> List[forms.CategoryRow]:
        if 'budget_rows' not in st.session_state:
            data = self.store.data
            rows = forms.rows_from_categories(data.categories) if self.store.has_any_data() else forms.blank_rows()
            st.session_state.budget_rows = rows
        return st.session_state.budget_rows

    def render_budget_form(self) -> None:
        data = self.store.data
        if st.button("← Back to Dashboard"):
            st.session_state.pop('budget_rows', None)
            _go(DASHBOARD)
        st.title("Create Budget")
        st.markdown("Set up your income and spending categories")

        rows = self._form_rows()
        main, side = st.columns([2, 1])
        with main:
            st.subheader("Income & Goals")
            income_value = forms.format_amount(data.monthly_income) if data.monthly_income else ''
            savings_value = forms.format_amount(data.savings_goal) if data.savings_goal else ''
            income_text = st.text_input("Monthly Income", value=income_value, placeholder="0")
            savings_text = st.text_input("Savings Goal", value=savings_value, placeholder="0")

            st.subheader("Budget Categories")
            for row in list(rows):
                name_col, amount_col, remove_col = st.columns([3, 2, 1])
                row.name = name_col.text_input("Category name", value=row.name, key=f"cat_name_{row.key}")
                row.amount = amount_col.text_input("Amount", value=row.amount, key=f"cat_amount_{row.key}")
                if len(rows) > 1 and remove_col.button("🗑️", key=f"cat_remove_{row.key}"):
                    # Identity, not equality: blank rows compare equal
                    rows[:] = [r for r in rows if r is not row]
                    st.rerun()
            if st.button("➕ Add Category"):
                rows.append(forms.CategoryRow(name='', amount=''))
                st.rerun()

        income = forms.parse_amount(income_text) or 0.0
        savings = forms.parse_amount(savings_text) or 0.0
        total_budget = sum(forms.parse_amount(r.amount) or 0.0 for r in rows)
        plan = forms.plan_summary(income, total_budget, savings)
        with side:
            st.subheader("Budget Summary")
            st.markdown(f"Monthly Income: **{_money(plan['income'])}**")
            st.markdown(f"Total Budget: **{_money(plan['total_budget'])}**")
            st.markdown(f"Savings Goal: **{_money(plan['savings_goal'])}**")
            st.markdown(f"Remaining: **{_money(plan['remaining'])}**")
            if plan['over_income'] > 0:
                st.warning(
                    f"Your budget exceeds your income by {_money(plan['over_income'])}. "
                    "Consider adjusting your categories or savings goal."
                )
            if st.button("Save Budget", type="primary", key="save_budget"):
                categories = forms.build_categories(
                    rows,
                    data.categories,
                    reserved_ids={e.category_id for e in data.expenses},
                )
                self.store.save_budget(categories, income, savings)
                st.session_state.pop('budget_rows', None)
                st.toast("Budget saved")
                _go(DASHBOARD)

    # Expense form

    def render_expense_form(self) -> None:
        if st.button("← Back to Dashboard"):
            _go(DASHBOARD)
        st.title("Add Expense")
        st.markdown("Record your spending to track your budget")

        categories = self.store.data.categories
        labels = {c.id: c.category for c in categories}
        with st.form("add_expense_form"):
            amount_text = st.text_input("Amount", placeholder="0.00")
            if categories:
                category_id = st.selectbox(
                    "Category",
                    options=list(labels),
                    format_func=lambda cid: labels[cid],
                    index=None,
                    placeholder="Select a category",
                )
            else:
                st.info("No categories available - create a budget first")
                category_id = None
            expense_date = st.date_input("Date", value=date.today())
            description = st.text_area("Description (optional)", placeholder="What was this expense for?")
            submitted = st.form_submit_button("Add Expense")

        if submitted:
            try:
                draft = forms.build_expense(amount_text, category_id, description, expense_date.isoformat())
            except forms.FormError as exc:
                st.error(str(exc))
                return
            self.store.add_expense(draft)
            st.toast("Expense added")
            _go(DASHBOARD)
