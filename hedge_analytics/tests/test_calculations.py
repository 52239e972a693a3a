"""
Tests for calendar bucketing, rolling windows and compounding.
Uses crafted series with hand-checked values.
"""

import pytest
from datetime import date

from hedge_analytics.records import Record
from hedge_analytics.calculations.calendar import (
    MONTH_LABELS,
    month_index,
    monthly_average_returns,
)
from hedge_analytics.calculations.rolling import (
    RollingWindowError,
    trailing_means,
    window_count,
)
from hedge_analytics.calculations.compounding import compound_index


def make_record(date_text, ret):
    return Record.from_row({'Date': date_text, 'Hedge': 'Dynamic', 'Return': ret})


class TestCalendar:
    """Tests for month bucketing."""

    def test_month_labels(self):
        assert len(MONTH_LABELS) == 12
        assert MONTH_LABELS[0] == 'Jan'
        assert MONTH_LABELS[11] == 'Dec'

    def test_month_index(self):
        assert month_index(date(2023, 1, 31)) == 0
        assert month_index(date(2023, 12, 1)) == 11
        assert month_index(None) is None

    def test_single_january_record(self):
        """One January observation; every other month averages to 0."""
        averages = monthly_average_returns([make_record('2023-01-02', 0.002)])

        assert averages[0] == pytest.approx(0.002)
        assert averages[1:] == [0.0] * 11

    def test_months_pool_across_years(self):
        """January 2022 and January 2023 share one bucket."""
        records = [
            make_record('2022-01-15', 0.01),
            make_record('2023-01-15', 0.03),
            make_record('2023-06-15', -0.02),
        ]

        averages = monthly_average_returns(records)

        assert averages[0] == pytest.approx(0.02)
        assert averages[5] == pytest.approx(-0.02)

    def test_invalid_dates_join_no_bucket(self):
        averages = monthly_average_returns([make_record('invalid', 0.5)])

        assert averages == [0.0] * 12


class TestRolling:
    """Tests for trailing means."""

    def test_trailing_means(self):
        """Each output is the mean of the window ending at that position."""
        assert trailing_means([1.0, 2.0, 3.0, 4.0], window=3) == [2.0, 3.0]

    def test_output_length(self):
        """Output is shorter than input by window - 1."""
        for n in range(0, 12):
            assert len(trailing_means([0.5] * n, window=5)) == max(0, n - 4)

    def test_short_input_is_empty(self):
        assert trailing_means([0.1, 0.2], window=5) == []
        assert trailing_means([], window=5) == []

    def test_window_of_one_is_identity(self):
        assert trailing_means([0.1, 0.2, 0.3], window=1) == [0.1, 0.2, 0.3]

    def test_invalid_window(self):
        with pytest.raises(RollingWindowError, match="Window must be"):
            trailing_means([0.1, 0.2], window=0)

    def test_window_count(self):
        assert window_count(9, 5) == 5
        assert window_count(4, 5) == 0


class TestCompounding:
    """Tests for compound_index."""

    def test_first_point_already_compounded(self):
        """The 100 base is not emitted; the first point carries one period."""
        levels = compound_index([0.002, 0.005])

        assert levels[0] == pytest.approx(100.2)
        assert levels[1] == pytest.approx(100.701)

    def test_chain_link(self):
        """Each level is the previous level times (1 + r)."""
        returns = [0.01, -0.02, 0.03, 0.0, -0.5]
        levels = compound_index(returns)

        assert levels[0] == pytest.approx(100 * 1.01)
        for i in range(1, len(returns)):
            assert levels[i] == pytest.approx(levels[i - 1] * (1 + returns[i]))

    def test_custom_base(self):
        assert compound_index([0.1], base=1.0) == [pytest.approx(1.1)]

    def test_empty_returns(self):
        assert compound_index([]) == []
