"""
Tests for utils/capacity.py: window merge arithmetic and the MongoDB
pipelines run against a mongomock database.
"""
import sys
from pathlib import Path

import mongomock
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.capacity import (
    MonthCapacity,
    allocation_pipeline,
    build_capacity_summary,
    capacity_pipeline,
    detect_start_month,
    merge_window,
    stored_months,
    summary_payload,
)


def _alloc_row(month, **totals):
    return {"_id": month, "categories": [
        {"category": name, "total": value} for name, value in totals.items()
    ]}


# ── Pure merge ────────────────────────────────────────────────────────────────

class TestMergeWindow:
    def test_baseline_and_vacation_scenario(self):
        merged = merge_window(
            [202501],
            [_alloc_row(202501, Baseline=10, Vacation=5)],
            [{"_id": 202501, "totalPeopleCapacity": 20}],
        )
        month = merged[0]
        assert month.categories["Baseline"] == 10
        assert month.categories["Vacation"] == 5
        assert month.categories["Strategic"] == 0
        assert month.total_allocated == 15
        assert month.total_people_capacity == 20
        assert month.remaining_capacity == 5

    def test_months_without_data_are_zero_filled(self):
        merged = merge_window([202501, 202502, 202503], [], [])
        assert [m.month for m in merged] == [202501, 202502, 202503]
        for m in merged:
            assert m.total_allocated == 0
            assert m.total_people_capacity == 0
            assert m.remaining_capacity == 0
            assert set(m.categories.values()) == {0}

    def test_over_allocation_is_negative(self):
        merged = merge_window(
            [202502],
            [_alloc_row(202502, Strategic=30)],
            [{"_id": 202502, "totalPeopleCapacity": 25}],
        )
        assert merged[0].remaining_capacity == -5

    def test_unknown_categories_do_not_count(self):
        merged = merge_window([202501], [_alloc_row(202501, Training=50)], [])
        assert merged[0].total_allocated == 0

    def test_rows_outside_window_are_ignored(self):
        merged = merge_window(
            [202501],
            [_alloc_row(202412, Baseline=99)],
            [{"_id": 202412, "totalPeopleCapacity": 99}],
        )
        assert merged[0].total_allocated == 0
        assert merged[0].total_people_capacity == 0

    def test_remaining_is_capacity_minus_allocated(self):
        m = MonthCapacity(month=202501, total_allocated=12.5, total_people_capacity=10)
        assert m.remaining_capacity == pytest.approx(-2.5)


class TestSummaryPayload:
    def test_parallel_arrays(self):
        merged = merge_window(
            [202512, 202601],
            [_alloc_row(202512, Baseline=10, Vacation=5)],
            [{"_id": 202512, "totalPeopleCapacity": 20}],
        )
        payload = summary_payload(merged)
        assert payload["months"] == ["Dec-25", "Jan-26"]
        assert [c["label"] for c in payload["categories"]] == [
            "Vacation", "Baseline", "Strategic", "Discretionary Project",
        ]
        assert payload["categories"][1]["values"] == [10, 0]
        assert payload["totals"] == [15, 0]
        assert payload["peopleCapacity"] == [20, 0]
        assert payload["remainingCapacity"] == [5, 0]
        lengths = {len(payload["months"]), len(payload["totals"]),
                   len(payload["peopleCapacity"]), len(payload["remainingCapacity"])}
        lengths.update(len(c["values"]) for c in payload["categories"])
        assert lengths == {2}


# ── Pipelines against mongomock ───────────────────────────────────────────────

@pytest.fixture()
def db():
    db = mongomock.MongoClient()["capacity_test"]
    db["allocation"].insert_many([
        {"date": 202501, "category": "Baseline", "amount": 6},
        {"date": 202501, "category": "Baseline Work", "amount": 4},
        {"date": 202501, "category": "Vacation", "amount": 5},
        {"date": 202503, "category": "Strategic", "amount": 7},
    ])
    db["capacity"].insert_many([
        {"date": 202501, "amount": 12},
        {"date": 202501, "amount": 8},
        {"date": 202504, "amount": 3},
    ])
    return db


class TestPipelines:
    def test_allocation_pipeline_nests_categories(self, db):
        rows = {r["_id"]: r for r in db["allocation"].aggregate(allocation_pipeline([202501]))}
        assert set(rows) == {202501}
        totals = {c["category"]: c["total"] for c in rows[202501]["categories"]}
        assert totals == {"Baseline": 6, "Baseline Work": 4, "Vacation": 5}

    def test_capacity_pipeline_sums_per_month(self, db):
        rows = list(db["capacity"].aggregate(capacity_pipeline([202501, 202504])))
        assert {r["_id"]: r["totalPeopleCapacity"] for r in rows} == {202501: 20, 202504: 3}

    def test_stored_months_union(self, db):
        assert stored_months(db) == [202501, 202503, 202504]

    def test_detect_start_month(self, db):
        assert detect_start_month(db, current=202503) == 202503
        assert detect_start_month(db, current=202502) == 202501
        assert detect_start_month(db, current=202412) == 202412

    def test_stored_months_skips_invalid(self, db):
        db["capacity"].insert_one({"date": 202413, "amount": 1})
        db["allocation"].insert_one({"date": "bad", "category": "Baseline", "amount": 1})
        assert stored_months(db) == [202501, 202503, 202504]
        assert detect_start_month(db, current=202502) == 202501

    def test_substring_categories_feed_totals_and_remaining(self):
        db = mongomock.MongoClient()["substring_test"]
        db["allocation"].insert_many([
            {"date": 202501, "category": "Baseline Work", "amount": 5},
            {"date": 202501, "category": "Vacation Days", "amount": 2},
        ])
        db["capacity"].insert_one({"date": 202501, "amount": 10})
        payload = build_capacity_summary(db, start=202501, window_size=1)
        values = {c["label"]: c["values"] for c in payload["categories"]}
        assert values["Baseline"] == [5]
        assert values["Vacation"] == [2]
        assert payload["totals"] == [7]
        assert payload["peopleCapacity"] == [10]
        assert payload["remainingCapacity"] == [3]

    def test_build_summary(self, db):
        payload = build_capacity_summary(db, start=202501, window_size=4)
        assert payload["months"] == ["Jan-25", "Feb-25", "Mar-25", "Apr-25"]
        baseline = next(c for c in payload["categories"] if c["label"] == "Baseline")
        assert baseline["values"] == [10, 0, 0, 0]
        assert payload["totals"] == [15, 0, 7, 0]
        assert payload["peopleCapacity"] == [20, 0, 0, 3]
        assert payload["remainingCapacity"] == [5, 0, -7, 3]

    def test_build_summary_detects_start(self, db):
        payload = build_capacity_summary(db, window_size=2, current=202503)
        assert payload["months"] == ["Mar-25", "Apr-25"]

    def test_empty_database(self):
        empty = mongomock.MongoClient()["empty"]
        payload = build_capacity_summary(empty, window_size=3, current=202511)
        assert payload["months"] == ["Nov-25", "Dec-25", "Jan-26"]
        assert payload["totals"] == [0, 0, 0]
        assert payload["remainingCapacity"] == [0, 0, 0]
