"""
Tests for utils/categories.py: bucket matching and calendar grouping.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from utils.categories import (
    CAPACITY_BUCKETS,
    accumulate_totals,
    empty_totals,
    group_by_category,
    normalize_category,
    unique_activities,
)


class TestNormalizeCategory:
    @pytest.mark.parametrize("raw,bucket", [
        ("Vacation", "Vacation"),
        ("Vacation Days", "Vacation"),
        ("Baseline Work", "Baseline"),
        ("Strategic", "Strategic"),
        ("Discretionary", "Discretionary Project"),
        ("Discretionary Project", "Discretionary Project"),
    ])
    def test_substring_rules(self, raw, bucket):
        assert normalize_category(raw) == bucket

    def test_later_rule_wins(self):
        assert normalize_category("Strategic Vacation") == "Strategic"
        assert normalize_category("Baseline Discretionary") == "Discretionary Project"

    @pytest.mark.parametrize("raw", [None, "", "Training", "vacation", 5, 3.5, ["Baseline"]])
    def test_no_match(self, raw):
        assert normalize_category(raw) is None


class TestTotals:
    def test_empty_totals_in_display_order(self):
        assert list(empty_totals()) == list(CAPACITY_BUCKETS)
        assert all(v == 0 for v in empty_totals().values())

    def test_accumulates_and_ignores_unknown(self):
        totals = accumulate_totals([
            {"category": "Baseline", "total": 10},
            {"category": "Baseline Work", "total": 5},
            {"category": "Vacation", "total": 8},
            {"category": "Training", "total": 100},
            {"category": "Strategic", "total": None},
            {"category": 5, "total": 3},
        ])
        assert totals == {
            "Vacation": 8,
            "Baseline": 15,
            "Strategic": 0,
            "Discretionary Project": 0,
        }


class TestUniqueActivities:
    def test_dedupes_on_pair_keeping_order(self):
        rows = [
            {"activity": "Close", "category": "Baseline", "amount": 1},
            {"activity": "Roadmap", "category": "Strategic"},
            {"activity": "Close", "category": "Baseline"},
            {"activity": "Close", "category": "Strategic"},
        ]
        assert unique_activities(rows) == [
            {"activity": "Close", "category": "Baseline"},
            {"activity": "Roadmap", "category": "Strategic"},
            {"activity": "Close", "category": "Strategic"},
        ]


class TestGroupByCategory:
    def test_fixed_order_and_empty_buckets_omitted(self):
        groups = group_by_category([
            {"activity": "Leave", "category": "Vacation"},
            {"activity": "Close", "category": "Baseline"},
            {"activity": "Audit", "category": "Baseline"},
        ])
        assert groups == [
            {"category": "Baseline", "activities": ["Close", "Audit"]},
            {"category": "Vacation", "activities": ["Leave"]},
        ]

    def test_unknown_category_kept_after_fixed_buckets(self):
        groups = group_by_category([
            {"activity": "Offsite", "category": "Training"},
            {"activity": "Hack", "category": "Discretionary"},
        ])
        assert [g["category"] for g in groups] == ["Discretionary", "Training"]

    def test_missing_category_falls_back(self):
        groups = group_by_category([{"activity": "Mystery", "category": None}])
        assert groups == [{"category": "Other", "activities": ["Mystery"]}]

    def test_empty_input(self):
        assert group_by_category([]) == []
