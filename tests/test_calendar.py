"""Tests for the calendar projection.

**Feature: trading-journal**
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.journal.calendar import (
    days_in_month,
    project_month,
    shift_month,
    sunday_offset,
    week_windows,
)
from tradejournal.models import Trade


def make_trade(day: date, profit: float, profit_rr: float) -> Trade:
    return Trade(
        pair="EURUSD",
        entry_method="simple",
        size=1000.0,
        profit=profit,
        profit_rr=profit_rr,
        is_win=profit > 0,
        date=day,
        account_balance=100000.0,
    )


months = st.tuples(st.integers(min_value=2000, max_value=2040), st.integers(min_value=1, max_value=12))


class TestMonthGrid:
    """
    **Feature: trading-journal, Property 8: Month Grid Layout**

    *For any* month, there is one day cell per calendar day, the leading
    blanks align day 1 to its weekday in a Sunday-first grid and the chart
    covers every day.
    """

    @given(ym=months)
    @settings(max_examples=100)
    def test_one_cell_per_day(self, ym):
        year, month = ym
        view = project_month([], year, month, today=date(1999, 1, 1))

        assert len(view.days) == days_in_month(year, month)
        assert len(view.chart) == len(view.days)
        assert [d.day for d in view.days] == list(range(1, len(view.days) + 1))
        assert view.leading_blanks == sunday_offset(date(year, month, 1))

    def test_leading_blanks_for_known_months(self):
        # 2024-03-01 is a Friday, 2024-09-01 a Sunday
        assert project_month([], 2024, 3, today=date(2024, 1, 1)).leading_blanks == 5
        assert project_month([], 2024, 9, today=date(2024, 1, 1)).leading_blanks == 0

    def test_today_marker(self):
        assert project_month([], 2024, 3, today=date(2024, 3, 15)).today == 15
        assert project_month([], 2024, 3, today=date(2024, 4, 15)).today is None

    def test_empty_month_is_flat(self):
        view = project_month([], 2024, 2, today=date(2024, 3, 1))

        assert len(view.days) == 29
        assert all(point.cumulative_pl == 0 for point in view.chart)
        assert all(point.trades == 0 for point in view.chart)
        assert all(week.trades == 0 for week in view.weeks)
        assert view.summary.trades == 0
        assert view.summary.win_rate == 0


class TestWeekWindows:
    """
    **Feature: trading-journal, Property 9: Sunday-Aligned Weeks**

    *For any* month, every week window starts on a Sunday, spans seven days
    and touches the month with its first or last day.
    """

    @given(ym=months)
    @settings(max_examples=100)
    def test_windows_are_sunday_aligned(self, ym):
        year, month = ym
        windows = week_windows(year, month)

        assert 4 <= len(windows) <= 6
        for start, end in windows:
            assert sunday_offset(start) == 0
            assert end - start == timedelta(days=6)
            assert (start.year, start.month) == (year, month) or (end.year, end.month) == (
                year,
                month,
            )

    def test_march_2024_windows(self):
        windows = week_windows(2024, 3)

        assert windows[0] == (date(2024, 2, 25), date(2024, 3, 2))
        assert windows[-1] == (date(2024, 3, 31), date(2024, 4, 6))
        assert len(windows) == 6

    def test_february_2015_has_four_weeks(self):
        # Starts on a Sunday and has 28 days
        assert week_windows(2015, 2) == [
            (date(2015, 2, 1), date(2015, 2, 7)),
            (date(2015, 2, 8), date(2015, 2, 14)),
            (date(2015, 2, 15), date(2015, 2, 21)),
            (date(2015, 2, 22), date(2015, 2, 28)),
        ]

    def test_boundary_week_belongs_to_both_months(self):
        trade = make_trade(date(2024, 4, 2), 500.0, 0.5)

        march = project_month([trade], 2024, 3, today=date(2024, 5, 1))
        april = project_month([trade], 2024, 4, today=date(2024, 5, 1))

        assert march.weeks[-1].trades == 1
        assert march.weeks[-1].profit == 500
        assert march.summary.trades == 0
        assert april.weeks[0].start == date(2024, 3, 31)
        assert april.weeks[0].trades == 1
        assert april.summary.trades == 1


class TestDailyRollups:
    """
    **Feature: trading-journal, Property 10: Daily and Cumulative P&L**

    *For any* set of trades within a month, each day sums its trades and
    the chart's cumulative series is the running total of daily P&L.
    """

    @given(
        entries=st.lists(
            st.tuples(
                st.integers(min_value=1, max_value=30),
                st.integers(min_value=-3000, max_value=3000),
            ),
            max_size=25,
        )
    )
    @settings(max_examples=100)
    def test_cumulative_is_running_total(self, entries):
        trades = [
            make_trade(date(2024, 6, day), float(profit), profit / 1000)
            for day, profit in entries
        ]

        view = project_month(trades, 2024, 6, today=date(2024, 7, 1))

        running = 0.0
        for point in view.chart:
            running += point.daily_pl
            assert point.cumulative_pl == running
        assert view.chart[-1].cumulative_pl == sum(t.profit for t in trades)
        assert sum(d.trades for d in view.days) == len(trades)
        assert view.summary.trades == len(trades)

    def test_day_summary(self):
        trades = [
            make_trade(date(2024, 3, 4), 200.0, 2.0),
            make_trade(date(2024, 3, 4), -100.0, -1.0),
            make_trade(date(2024, 3, 6), 300.0, 3.0),
            make_trade(date(2024, 2, 28), 999.0, 9.99),
        ]

        view = project_month(trades, 2024, 3, today=date(2024, 4, 1))
        day = view.days[3]

        assert day.date == date(2024, 3, 4)
        assert day.trades == 2
        assert day.profit == 100
        assert day.profit_rr == pytest.approx(1.0)
        assert day.wins == 1
        assert day.losses == 1
        assert day.win_rate == 50
        assert view.summary.trades == 3
        assert view.summary.profit == 400
        assert view.chart[5].cumulative_pl == 400

    def test_rr_chart(self):
        trades = [make_trade(date(2024, 3, 4), 200.0, 2.0)]

        view = project_month(trades, 2024, 3, display_mode="rr", today=date(2024, 4, 1))

        assert view.display_mode == "rr"
        assert view.chart[3].daily_pl == 2.0
        assert view.chart[-1].cumulative_pl == 2.0

    def test_previous_month_trades_reach_first_week(self):
        trades = [make_trade(date(2024, 2, 27), 999.0, 9.99)]

        view = project_month(trades, 2024, 3, today=date(2024, 4, 1))

        assert view.weeks[0].trades == 1
        assert view.summary.trades == 0
        assert view.chart[-1].cumulative_pl == 0


class TestShiftMonth:
    """Month navigation."""

    @pytest.mark.parametrize(
        "start, delta, expected",
        [
            ((2024, 3), 1, (2024, 4)),
            ((2024, 12), 1, (2025, 1)),
            ((2024, 1), -1, (2023, 12)),
            ((2024, 5), -17, (2022, 12)),
            ((2024, 5), 0, (2024, 5)),
        ],
    )
    def test_shift(self, start, delta, expected):
        assert shift_month(*start, delta) == expected

    @given(ym=months, delta=st.integers(min_value=-120, max_value=120))
    def test_shift_round_trip(self, ym, delta):
        assert shift_month(*shift_month(*ym, delta), -delta) == ym
