from datetime import date

import pytest

from trackify.services.aggregation import (
    categories_present,
    category_breakdown,
    category_totals,
    daily_trend,
    group_by_date,
    monthly_trend,
    total_spent,
    trailing_buckets,
)

AS_OF = date(2024, 3, 20)


def test_category_totals_first_appearance_order(make_record):
    records = [
        make_record(10, "Travel", "2024-03-01"),
        make_record(5, "Food", "2024-03-02"),
        make_record(7, "Travel", "2024-03-03"),
    ]
    totals = category_totals(records)
    assert list(totals) == ["Travel", "Food"]
    assert totals == {"Travel": 17, "Food": 5}


def test_category_totals_match_overall_total(sample_records):
    totals = category_totals(sample_records)
    assert sum(totals.values()) == total_spent(sample_records) == 350


def test_category_labels_are_exact_match(make_record):
    records = [make_record(1, "food", "2024-03-01"), make_record(2, "Food", "2024-03-01")]
    assert category_totals(records) == {"food": 1, "Food": 2}


def test_category_breakdown_percentages(sample_records):
    items = category_breakdown(sample_records)
    assert [i.category for i in items] == ["Food", "Transport"]
    assert items[0].total == 150
    assert items[0].percent == pytest.approx(150 / 350 * 100)
    assert sum(i.percent for i in items) == pytest.approx(100)


def test_category_breakdown_all_zero(make_record):
    items = category_breakdown([make_record(0, "Food", "2024-03-01")])
    assert items[0].percent == 0


def test_monthly_trend_zero_fills(sample_records):
    points = monthly_trend(sample_records, AS_OF)
    assert [p.key for p in points] == [
        "2023-10",
        "2023-11",
        "2023-12",
        "2024-01",
        "2024-02",
        "2024-03",
    ]
    assert [p.label for p in points][-2:] == ["Feb 2024", "Mar 2024"]
    assert [p.total for p in points] == [0, 0, 0, 0, 200, 150]


def test_monthly_trend_crosses_year_boundary():
    points = trailing_buckets([], date(2024, 1, 15), "month", 3)
    assert [p.key for p in points] == ["2023-11", "2023-12", "2024-01"]
    assert [p.label for p in points] == ["Nov 2023", "Dec 2023", "Jan 2024"]


def test_daily_trend_window(make_record):
    records = [
        make_record(5, "Food", "2024-02-29"),
        make_record(7, "Food", "2024-03-02"),
        make_record(3, "Food", "2024-03-02", expense_id="second"),
        make_record(99, "Food", "2024-02-27"),  # outside the window
        make_record(42, "Food", "2023-03-02"),  # same day, other year
    ]
    points = trailing_buckets(records, date(2024, 3, 2), "day", 3)
    assert [p.key for p in points] == ["2024-02-29", "2024-03-01", "2024-03-02"]
    assert [p.label for p in points] == ["Feb 29", "Mar 1", "Mar 2"]
    assert [p.total for p in points] == [5, 0, 10]


def test_daily_trend_default_length(sample_records):
    points = daily_trend(sample_records, AS_OF)
    assert len(points) == 30
    assert points[0].key == "2024-02-20"
    assert points[-1].key == "2024-03-20"
    assert sum(p.total for p in points) == 150  # February 10th falls outside


@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_is_empty(sample_records, count):
    assert trailing_buckets(sample_records, AS_OF, "month", count) == []
    assert trailing_buckets(sample_records, AS_OF, "day", count) == []


def test_unknown_granularity():
    with pytest.raises(ValueError):
        trailing_buckets([], AS_OF, "week", 4)


def test_output_independent_of_input_order(sample_records):
    forward = monthly_trend(sample_records, AS_OF)
    backward = monthly_trend(list(reversed(sample_records)), AS_OF)
    assert forward == backward


def test_categories_present_in_first_appearance_order(make_record):
    records = [
        make_record(1, "Travel", "2024-03-01"),
        make_record(2, "Food", "2024-03-02"),
        make_record(3, "Travel", "2024-03-03"),
    ]
    assert categories_present(records) == ["Travel", "Food"]
    assert categories_present([]) == []


def test_group_by_date_newest_first_with_day_totals(make_record):
    records = [
        make_record(10, "Food", "2024-03-01", expense_id="a"),
        make_record(5, "Travel", "2024-03-05", expense_id="b"),
        make_record(7, "Food", "2024-03-01", expense_id="c"),
    ]
    groups = group_by_date(records)
    assert [g.date for g in groups] == [date(2024, 3, 5), date(2024, 3, 1)]
    assert [g.total for g in groups] == [5, 17]
    assert [r.id for r in groups[1].records] == ["a", "c"]


def test_group_by_date_category_filter(make_record):
    records = [
        make_record(10, "Food", "2024-03-01"),
        make_record(5, "Travel", "2024-03-05"),
        make_record(7, "Food", "2024-02-20"),
    ]
    groups = group_by_date(records, category="Food")
    assert [g.date for g in groups] == [date(2024, 3, 1), date(2024, 2, 20)]
    assert all(r.category == "Food" for g in groups for r in g.records)
    assert group_by_date(records, category="Rent") == []
