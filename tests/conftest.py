from datetime import date

import pytest

from trackify.core.config import Settings
from trackify.db.dal import Database
from trackify.db.migrate import apply_migrations
from trackify.models import ExpenseRecord


def _record(amount, category, day, expense_id=None, description=""):
    return ExpenseRecord(
        id=expense_id or f"{category}-{day}-{amount}",
        amount=amount,
        category=category,
        description=description,
        date=date.fromisoformat(day),
    )


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def sample_records(make_record):
    return [
        make_record(100, "Food", "2024-03-01"),
        make_record(50, "Food", "2024-03-15"),
        make_record(200, "Transport", "2024-02-10"),
    ]


@pytest.fixture
def settings(tmp_path):
    s = Settings(data_dir=tmp_path / "data")
    s.init_post_load()
    return s


@pytest.fixture
def db(settings):
    apply_migrations(settings.db_path)
    return Database(settings.db_path)
