import logging

import pytest

from budget_dashboard import forms, metrics
from budget_dashboard.models import BudgetCategory, BudgetData, ExpenseDraft, default_budget_data
from budget_dashboard.persistence import JsonFileStore, MemoryStore, decode_budget_data, encode_budget_data
from budget_dashboard.store import BudgetStore

KEY = 'budget-app-data'


def _food_store():
    store = BudgetStore(MemoryStore(), key=KEY)
    store.update_categories([BudgetCategory('1', 'Food', 400, 0, 'hsl(158, 64%, 52%)')])
    return store


def _persisted(store):
    return decode_budget_data(store.backend.load(store.key))


def test_load_without_stored_data_returns_defaults():
    store = BudgetStore(MemoryStore(), key=KEY)
    assert store.data == default_budget_data()
    assert store.load() == default_budget_data()


def test_load_malformed_blob_returns_defaults(caplog):
    backend = MemoryStore({KEY: '{"categories": oops'})
    with caplog.at_level(logging.WARNING, logger='budget_dashboard'):
        store = BudgetStore(backend, key=KEY)
    assert store.data == default_budget_data()
    assert 'malformed' in caplog.text


def test_load_shape_mismatch_returns_defaults():
    backend = MemoryStore({KEY: '{"categories": [], "expenses": [], "monthlyIncome": "lots"}'})
    assert BudgetStore(backend, key=KEY).data == default_budget_data()


def test_load_reads_stored_data():
    data = BudgetData(categories=[BudgetCategory('9', 'Pets', 80, 10, 'x')], monthly_income=1000)
    backend = MemoryStore({KEY: encode_budget_data(data)})
    assert BudgetStore(backend, key=KEY).data == data


def test_add_expense_scenario():
    store = _food_store()
    store.add_expense(ExpenseDraft(category_id='1', amount=50, description='', date='2024-01-01'))

    food = store.data.categories[0]
    assert food.spent == 50
    assert metrics.remaining(store.data) == 350
    assert metrics.over_budget_categories(store.data) == []

    store.add_expense(ExpenseDraft(category_id='1', amount=400))
    food = store.data.categories[0]
    assert food.spent == 450
    assert metrics.over_budget_categories(store.data) == [food]
    assert metrics.is_over_budget(food)


def test_add_expense_only_touches_matching_category():
    store = BudgetStore(MemoryStore(), key=KEY)
    before = store.data
    store.add_expense(ExpenseDraft(category_id='2', amount=12.5))
    after = store.data

    assert len(after.expenses) == len(before.expenses) + 1
    for old, new in zip(before.categories, after.categories):
        if old.id == '2':
            assert new.spent == old.spent + 12.5
        else:
            assert new.spent == old.spent


def test_add_expense_with_unknown_category_is_kept_but_not_aggregated():
    store = _food_store()
    expense = store.add_expense(ExpenseDraft(category_id='missing', amount=20))
    assert store.data.expenses[-1] == expense
    assert store.data.categories[0].spent == 0
    assert metrics.orphaned_expenses(store.data) == [expense]


def test_add_expense_assigns_distinct_ids():
    store = _food_store()
    ids = [store.add_expense(ExpenseDraft(category_id='1', amount=1)).id for _ in range(20)]
    assert len(set(ids)) == 20
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_every_mutation_is_persisted_before_returning():
    store = _food_store()
    assert _persisted(store) == store.data

    store.add_expense(ExpenseDraft(category_id='1', amount=5))
    assert _persisted(store) == store.data

    store.update_budget_info(2500, 300)
    assert _persisted(store).monthly_income == 2500
    assert _persisted(store).savings_goal == 300


def test_update_categories_replaces_wholesale():
    store = BudgetStore(MemoryStore(), key=KEY)
    store.add_expense(ExpenseDraft(category_id='1', amount=5))
    store.update_categories([BudgetCategory('7', 'Travel', 100, 0, 'c')])
    assert [c.id for c in store.data.categories] == ['7']
    assert len(store.data.expenses) == 1


def test_save_budget_sets_categories_and_info():
    store = BudgetStore(MemoryStore(), key=KEY)
    store.save_budget([BudgetCategory('1', 'Rent', 1200, 0, 'c')], 4000, 500)
    data = _persisted(store)
    assert data.categories == (BudgetCategory('1', 'Rent', 1200, 0, 'c'),)
    assert data.monthly_income == 4000
    assert data.savings_goal == 500


def test_recompute_spent_repairs_drift():
    store = _food_store()
    store.add_expense(ExpenseDraft(category_id='1', amount=30))
    store.update_categories([BudgetCategory('1', 'Food', 400, 999, 'c')])
    store.recompute_spent()
    assert store.data.categories[0].spent == 30
    assert _persisted(store).categories[0].spent == 30


def test_reset_restores_defaults():
    store = _food_store()
    store.update_budget_info(100, 10)
    store.reset()
    assert store.data == default_budget_data()
    assert _persisted(store) == default_budget_data()


def test_has_any_data_false_for_defaults():
    assert BudgetStore(MemoryStore(), key=KEY).has_any_data() is False


@pytest.mark.parametrize('change', [
    lambda s: s.update_categories([BudgetCategory('1', 'Housing', 100, 0, 'c')]),
    lambda s: s.update_budget_info(1, 0),
    lambda s: s.add_expense(ExpenseDraft(category_id='1', amount=1)),
])
def test_has_any_data_true_after_single_change(change):
    store = BudgetStore(MemoryStore(), key=KEY)
    change(store)
    assert store.has_any_data() is True


def test_savings_goal_alone_does_not_count_as_data():
    store = BudgetStore(MemoryStore(), key=KEY)
    store.update_budget_info(0, 500)
    assert store.has_any_data() is False


def test_separate_stores_do_not_share_state():
    first = BudgetStore(MemoryStore(), key=KEY)
    second = BudgetStore(MemoryStore(), key=KEY)
    first.update_budget_info(1000, 0)
    assert second.data.monthly_income == 0


def test_state_survives_a_new_session_on_disk(tmp_path):
    path = tmp_path / 'state.json'
    store = BudgetStore(JsonFileStore(path), key=KEY)
    store.update_categories([BudgetCategory('1', 'Food', 400, 0, 'c')])
    store.add_expense(ExpenseDraft(category_id='1', amount=50, date='2024-01-01'))

    reopened = BudgetStore(JsonFileStore(path), key=KEY)
    assert reopened.data == store.data


def test_default_key_comes_from_config(monkeypatch):
    from budget_dashboard import config

    monkeypatch.setattr(config, 'STORAGE_KEY', 'custom-key')
    store = BudgetStore(MemoryStore())
    store.update_budget_info(1, 1)
    assert store.backend.load('custom-key') is not None


def test_deleted_category_expenses_stay_orphaned_after_adding_a_category():
    store = BudgetStore(MemoryStore(), key=KEY)
    store.update_categories([BudgetCategory('1', 'Housing', 1000, 0, 'c'), BudgetCategory('2', 'Food', 300, 0, 'c')])
    store.add_expense(ExpenseDraft(category_id='2', amount=80))

    def save_form(rows):
        data = store.data
        reserved = {e.category_id for e in data.expenses}
        store.save_budget(forms.build_categories(rows, data.categories, reserved_ids=reserved), 0, 0)

    save_form([forms.CategoryRow('Housing', '1000', '1')])
    save_form([forms.CategoryRow('Housing', '1000', '1'), forms.CategoryRow('Pets', '50')])
    store.recompute_spent()

    pets = store.data.categories[1]
    assert pets.category == 'Pets'
    assert pets.spent == 0
    assert [e.amount for e in metrics.orphaned_expenses(store.data)] == [80]
