"""Property-based tests for the statistics aggregator.

**Feature: trading-journal**
"""

import math
from datetime import date
from typing import Optional

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.journal.stats import (
    calculate_profit_factor,
    calculate_stats,
    summarize_period,
    trade_value,
)
from tradejournal.models import Trade


def make_trade(profit: float, profit_rr: Optional[float] = None, day: date = date(2024, 3, 4)) -> Trade:
    """Build a simple-mode trade with the given outcome."""
    if profit_rr is None:
        profit_rr = profit / 1000
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


# Whole dollar outcomes keep sums exact regardless of order
profits = st.integers(min_value=-5000, max_value=5000).map(float)
trade_lists = st.lists(profits, max_size=30).map(lambda ps: [make_trade(p) for p in ps])


class TestWinRate:
    """
    **Feature: trading-journal, Property 4: Win Rate Bounds**

    *For any* collection of trades, the win rate is between 0 and 100, wins
    and losses partition the trades and an empty collection has a win rate
    of 0.
    """

    @given(trades=trade_lists)
    @settings(max_examples=100)
    def test_counts_partition_trades(self, trades):
        stats = calculate_stats(trades)

        assert 0 <= stats.win_rate <= 100
        assert stats.winning_trades + stats.losing_trades == stats.total_trades
        assert stats.total_trades == len(trades)
        assert stats.winning_trades == sum(1 for t in trades if t.profit > 0)

    @given(trades=trade_lists)
    @settings(max_examples=100)
    def test_order_does_not_matter(self, trades):
        forward = calculate_stats(trades)
        backward = calculate_stats(list(reversed(trades)))

        assert forward.win_rate == backward.win_rate
        assert forward.total_profit == backward.total_profit
        assert forward.avg_win == pytest.approx(backward.avg_win)
        assert forward.avg_loss == pytest.approx(backward.avg_loss)

    def test_empty_collection(self):
        stats = calculate_stats([])

        assert stats.total_trades == 0
        assert stats.win_rate == 0
        assert stats.avg_win == 0
        assert stats.avg_loss == 0
        assert stats.profit_factor == 0
        assert stats.total_profit == 0

    def test_break_even_counts_as_loss(self):
        stats = calculate_stats([make_trade(0.0, 0.0), make_trade(100.0)])

        assert stats.winning_trades == 1
        assert stats.losing_trades == 1
        assert stats.win_rate == 50


class TestAverages:
    """
    **Feature: trading-journal, Property 5: Average Win/Loss and Profit Factor**

    *For any* collection of trades, average win and average loss are non
    negative and the profit factor is the count-weighted ratio of the two.
    """

    @given(trades=trade_lists)
    @settings(max_examples=100)
    def test_averages_non_negative(self, trades):
        stats = calculate_stats(trades)

        assert stats.avg_win >= 0
        assert stats.avg_loss >= 0
        assert stats.profit_factor >= 0

    @given(trades=trade_lists)
    @settings(max_examples=100)
    def test_profit_factor_is_gross_ratio(self, trades):
        stats = calculate_stats(trades)
        gross_win = sum(t.profit for t in trades if t.is_win)
        gross_loss = abs(sum(t.profit for t in trades if not t.is_win))

        if gross_loss > 0:
            assert stats.profit_factor == pytest.approx(gross_win / gross_loss)
        elif gross_win > 0:
            assert math.isinf(stats.profit_factor)
        else:
            assert stats.profit_factor == 0

    def test_one_win_one_loss(self):
        stats = calculate_stats([make_trade(100.0), make_trade(-50.0)])

        assert stats.win_rate == 50
        assert stats.avg_win == 100
        assert stats.avg_loss == 50
        assert stats.profit_factor == 2
        assert stats.total_profit == 50

    def test_only_winners_gives_infinite_profit_factor(self):
        stats = calculate_stats([make_trade(100.0), make_trade(250.0)])

        assert stats.win_rate == 100
        assert stats.avg_loss == 0
        assert math.isinf(stats.profit_factor)

    def test_only_losers(self):
        stats = calculate_stats([make_trade(-100.0), make_trade(-300.0)])

        assert stats.win_rate == 0
        assert stats.avg_win == 0
        assert stats.avg_loss == 200
        assert stats.profit_factor == 0

    def test_profit_factor_helper(self):
        assert calculate_profit_factor(100, 3, 50, 2) == 3
        assert calculate_profit_factor(0, 0, 0, 0) == 0
        assert math.isinf(calculate_profit_factor(10, 1, 0, 0))


class TestDisplayModes:
    """
    **Feature: trading-journal, Property 6: Display Mode Selection**

    *For any* trade, the R display mode aggregates ``profit_rr`` and the
    currency mode aggregates ``profit``.
    """

    def test_rr_mode_uses_r_multiples(self):
        trades = [make_trade(2000.0, 2.0), make_trade(-1000.0, -1.0), make_trade(500.0, 0.5)]

        stats = calculate_stats(trades, "rr")

        assert stats.display_mode == "rr"
        assert stats.avg_win == pytest.approx(1.25)
        assert stats.avg_loss == pytest.approx(1.0)
        assert stats.profit_factor == pytest.approx(2.5)
        assert stats.total_value == pytest.approx(1.5)
        assert stats.total_profit == 1500

    def test_currency_total_value(self):
        stats = calculate_stats([make_trade(2000.0, 2.0)], "currency")

        assert stats.total_value == 2000

    def test_trade_value(self):
        trade = make_trade(300.0, 3.0)

        assert trade_value(trade, "currency") == 300
        assert trade_value(trade, "rr") == 3

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            calculate_stats([], "pips")
        with pytest.raises(ValueError):
            trade_value(make_trade(1.0), "pips")


class TestPeriodSummary:
    """
    **Feature: trading-journal, Property 7: Period Rollups**

    *For any* collection of trades, the rollup sums both P&L units and
    counts wins and losses.
    """

    @given(trades=trade_lists)
    @settings(max_examples=100)
    def test_rollup_sums(self, trades):
        summary = summarize_period(trades)

        assert summary.trades == len(trades)
        assert summary.profit == sum(t.profit for t in trades)
        assert summary.wins + summary.losses == summary.trades

    def test_empty_rollup(self):
        summary = summarize_period([])

        assert summary.trades == 0
        assert summary.profit == 0
        assert summary.win_rate == 0
