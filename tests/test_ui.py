import types

from budget_dashboard import ui
from budget_dashboard.persistence import MemoryStore
from budget_dashboard.store import BudgetStore


def _ui_with_recorder(monkeypatch, session_state):
    monkeypatch.setattr(ui, 'st', types.SimpleNamespace(session_state=session_state))
    dashboard = ui.BudgetDashboardUI(BudgetStore(MemoryStore()))
    called = []
    monkeypatch.setattr(dashboard, 'render_dashboard', lambda: called.append(ui.DASHBOARD))
    monkeypatch.setattr(dashboard, 'render_budget_form', lambda: called.append(ui.CREATE_BUDGET))
    monkeypatch.setattr(dashboard, 'render_expense_form', lambda: called.append(ui.ADD_EXPENSE))
    return dashboard, called


def test_render_defaults_to_dashboard(monkeypatch):
    dashboard, called = _ui_with_recorder(monkeypatch, {})
    dashboard.render()
    assert called == [ui.DASHBOARD]


def test_render_routes_by_view(monkeypatch):
    for view in (ui.CREATE_BUDGET, ui.ADD_EXPENSE, ui.DASHBOARD):
        dashboard, called = _ui_with_recorder(monkeypatch, {'view': view})
        dashboard.render()
        assert called == [view]


def test_empty_store_shows_welcome_screen(monkeypatch):
    monkeypatch.setattr(ui, 'st', types.SimpleNamespace(session_state={}))
    dashboard = ui.BudgetDashboardUI(BudgetStore(MemoryStore()))
    shown = []
    monkeypatch.setattr(dashboard, '_render_welcome_screen', lambda: shown.append(True))
    dashboard.render_dashboard()
    assert shown == [True]


def _budget_form_app():
    import streamlit as st

    from budget_dashboard.models import BudgetCategory, ExpenseDraft
    from budget_dashboard.persistence import MemoryStore
    from budget_dashboard.store import BudgetStore
    from budget_dashboard.ui import CREATE_BUDGET, BudgetDashboardUI

    if 'budget_store' not in st.session_state:
        store = BudgetStore(MemoryStore())
        store.save_budget(
            [
                BudgetCategory('1', 'Rent', 1200, 0, 'c'),
                BudgetCategory('2', 'Food', 400, 0, 'c'),
                BudgetCategory('3', 'Fun', 100, 0, 'c'),
            ],
            3000,
            0,
        )
        store.add_expense(ExpenseDraft(category_id='2', amount=300, date='2024-01-01'))
        st.session_state.budget_store = store
        st.session_state.view = CREATE_BUDGET
    BudgetDashboardUI(st.session_state.budget_store).render()


def test_removing_a_budget_row_keeps_each_row_with_its_own_text():
    from streamlit.testing.v1 import AppTest

    at = AppTest.from_function(_budget_form_app, default_timeout=30)
    at.run()
    rent = at.session_state['budget_rows'][0]
    assert rent.name == 'Rent'

    at.button(key=f"cat_remove_{rent.key}").click().run()

    rows = at.session_state['budget_rows']
    assert [(r.id, r.name) for r in rows] == [('2', 'Food'), ('3', 'Fun')]
    assert [at.text_input(key=f"cat_name_{r.key}").value for r in rows] == ['Food', 'Fun']
    assert [at.text_input(key=f"cat_amount_{r.key}").value for r in rows] == ['400', '100']

    at.button(key="save_budget").click().run()

    categories = at.session_state['budget_store'].data.categories
    assert [(c.id, c.category, c.spent) for c in categories] == [('2', 'Food', 300), ('3', 'Fun', 0)]


def test_budget_form_prefills_income_without_trailing_zero():
    from streamlit.testing.v1 import AppTest

    at = AppTest.from_function(_budget_form_app, default_timeout=30)
    at.run()
    income = [t for t in at.text_input if t.label == 'Monthly Income'][0]
    assert income.value == '3000'
