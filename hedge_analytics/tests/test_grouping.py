"""
Tests for grouping and chronological ordering.
"""

import pytest
from datetime import date

from hedge_analytics.records import Record
from hedge_analytics.calculations.grouping import (
    group_by,
    group_chronologically,
    sort_chronologically,
)


def make_record(date_text, strategy, ret=0.0):
    return Record.from_row({'Date': date_text, 'Hedge': strategy, 'Return': ret})


class TestGroupBy:
    """Tests for group_by."""

    def test_first_seen_key_order(self):
        """Keys come out in the order they first appear."""
        records = [
            make_record('2023-01-02', 'Static'),
            make_record('2023-01-03', 'Dynamic'),
            make_record('2023-01-04', 'Static'),
            make_record('2023-01-05', 'Unhedged'),
        ]

        groups = group_by(records, 'strategy')

        assert list(groups) == ['Static', 'Dynamic', 'Unhedged']

    def test_group_order_preserved(self):
        """Each group keeps its members' relative input order."""
        records = [
            make_record('2023-03-01', 'Dynamic', 0.3),
            make_record('2023-01-01', 'Static', 0.1),
            make_record('2023-02-01', 'Dynamic', 0.2),
        ]

        groups = group_by(records, 'strategy')

        assert [r.period_return for r in groups['Dynamic']] == [0.3, 0.2]

    def test_concatenation_reproduces_all_records(self):
        """Concatenated groups contain every record exactly once."""
        records = [make_record('2023-01-0%d' % (i % 9 + 1), 'H%d' % (i % 3)) for i in range(10)]

        groups = group_by(records, 'strategy')
        flattened = [r for rows in groups.values() for r in rows]

        assert len(flattened) == len(records)
        assert sorted(map(id, flattened)) == sorted(map(id, records))
        for key, rows in groups.items():
            assert rows == [r for r in records if r.strategy == key]

    def test_callable_key(self):
        """A callable selector works like an attribute name."""
        groups = group_by([1, 2, 3, 4, 5], lambda n: n % 2)

        assert groups == {1: [1, 3, 5], 0: [2, 4]}

    def test_no_deduplication(self):
        record = make_record('2023-01-02', 'Dynamic')

        groups = group_by([record, record], 'strategy')

        assert len(groups['Dynamic']) == 2

    def test_empty_input(self):
        assert group_by([], 'strategy') == {}


class TestSortChronologically:
    """Tests for sort_chronologically."""

    def test_ascending_and_stable(self):
        """Ties on date keep input order."""
        records = [
            make_record('2023-02-01', 'A'),
            make_record('2023-01-01', 'B'),
            make_record('2023-02-01', 'C'),
        ]

        ordered = sort_chronologically(records)

        assert [r.strategy for r in ordered] == ['B', 'A', 'C']

    def test_invalid_dates_sort_last(self):
        """Records with unparseable dates go last in input order."""
        records = [
            make_record('invalid', 'X'),
            make_record('2023-02-01', 'A'),
            make_record('', 'Y'),
            make_record('2023-01-01', 'B'),
        ]

        ordered = sort_chronologically(records)

        assert [r.strategy for r in ordered] == ['B', 'A', 'X', 'Y']

    def test_input_not_mutated(self):
        records = [make_record('2023-02-01', 'A'), make_record('2023-01-01', 'B')]
        snapshot = list(records)

        sort_chronologically(records)

        assert records == snapshot

    def test_group_chronologically(self):
        """Groups keep first-seen order, members sorted by date."""
        records = [
            make_record('2023-03-01', 'Dynamic'),
            make_record('2023-02-01', 'Static'),
            make_record('2023-01-01', 'Dynamic'),
        ]

        groups = group_chronologically(records)

        assert list(groups) == ['Dynamic', 'Static']
        assert [r.date for r in groups['Dynamic']] == [date(2023, 1, 1), date(2023, 3, 1)]
