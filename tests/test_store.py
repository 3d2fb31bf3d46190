import sqlite3

import pytest

from trackify.core.config import Settings
from trackify.core.errors import InvalidBudgetError, UnknownCurrencyError
from trackify.db.migrate import CURRENT_SCHEMA_VERSION, apply_migrations
from trackify.models import Budget, find_currency
from trackify.services import app_settings


def test_migrations_are_idempotent(settings):
    assert apply_migrations(settings.db_path) == CURRENT_SCHEMA_VERSION
    assert apply_migrations(settings.db_path) == CURRENT_SCHEMA_VERSION
    conn = sqlite3.connect(settings.db_path)
    try:
        row = conn.execute(
            "SELECT value FROM metadata WHERE key='schema_version'"
        ).fetchone()
    finally:
        conn.close()
    assert row[0] == str(CURRENT_SCHEMA_VERSION)


def test_add_load_delete(db, make_record):
    first = db.add_expense(make_record(10, "Food", "2024-03-01", expense_id="a"))
    db.add_expense(make_record(20, "Travel", "2024-03-02", expense_id="b"))
    loaded = db.load_all()
    assert [r.id for r in loaded] == ["b", "a"]  # newest first
    assert loaded[1] == first
    assert db.count_expenses() == 2
    assert db.get_expense("a").amount == 10
    assert db.delete_expense("a") is True
    assert db.delete_expense("a") is False
    assert db.get_expense("a") is None
    assert db.count_expenses() == 1


def test_save_all_replaces_and_keeps_order(db, make_record, sample_records):
    db.add_expense(make_record(1, "Old", "2020-01-01", expense_id="old"))
    db.save_all(sample_records)
    assert db.load_all() == sample_records
    db.save_all([])
    assert db.load_all() == []


def test_metadata_round_trip(db):
    assert db.get_metadata("missing") is None
    db.set_metadata("k", "v1")
    db.set_metadata("k", "v2")
    assert db.get_metadata("k") == "v2"


def test_currency_setting(db):
    assert app_settings.load_currency(db) is None
    app_settings.save_currency(db, find_currency("JPY"))
    assert app_settings.load_currency(db).code == "JPY"


def test_unsupported_stored_currency_is_ignored(db):
    db.set_metadata(app_settings.CURRENCY_KEY, "XXX")
    assert app_settings.load_currency(db) is None


def test_budget_defaults(db, settings):
    budget = app_settings.load_budget(db, settings)
    assert budget == Budget(monthly_limit=5000)


def test_budget_round_trip(db, settings):
    app_settings.save_budget(
        db, Budget(monthly_limit=800, category_limits={"Travel": 250.5})
    )
    budget = app_settings.load_budget(db, settings)
    assert budget.monthly_limit == 800
    assert budget.category_limits == {"Travel": 250.5}


@pytest.mark.parametrize(
    "raw", ["not json", "[1, 2]", '{"monthly_limit": -5}']
)
def test_unreadable_budget_falls_back(db, settings, raw):
    db.set_metadata(app_settings.BUDGET_KEY, raw)
    assert app_settings.load_budget(db, settings).monthly_limit == 5000


def test_budget_updates(db, settings):
    app_settings.set_monthly_budget(db, 900, settings)
    app_settings.set_category_budget(db, "Food", 200, settings)
    budget = app_settings.set_category_budget(db, "Travel", 100, settings)
    assert budget.monthly_limit == 900
    assert budget.category_limits == {"Food": 200, "Travel": 100}
    assert app_settings.load_budget(db, settings) == budget


def test_negative_budget_rejected(db, settings):
    with pytest.raises(InvalidBudgetError):
        app_settings.set_monthly_budget(db, -1, settings)
    with pytest.raises(InvalidBudgetError):
        app_settings.set_category_budget(db, "Food", -1, settings)
    assert app_settings.load_budget(db, settings) == Budget(monthly_limit=5000)


def test_settings_store_object(db, settings):
    store = app_settings.SettingsStore(db, settings)
    store.save_currency(find_currency("EUR"))
    store.save_budget(Budget(monthly_limit=10))
    assert store.load_currency().code == "EUR"
    assert store.load_budget().monthly_limit == 10


def test_default_currency_rejects_unvalidated_code(tmp_path):
    s = Settings(data_dir=tmp_path, default_currency="xyz")
    with pytest.raises(UnknownCurrencyError) as exc:
        app_settings.default_currency(s)
    assert exc.value.currency_code == "xyz"


def test_default_currency_from_settings(tmp_path):
    s = Settings(data_dir=tmp_path, default_currency="GBP")
    assert app_settings.default_currency(s).code == "GBP"
