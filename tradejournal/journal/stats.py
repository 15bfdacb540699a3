"""Performance statistics over journaled trades.

All functions are pure reductions: they never mutate their input and
the result does not depend on trade order.
"""

import math
from typing import Iterable

from tradejournal.models import PeriodSummary, Trade, TradeStats
from tradejournal.models.stats import DisplayMode

DISPLAY_MODES = ("currency", "rr")


def trade_value(trade: Trade, display_mode: DisplayMode = "currency") -> float:
    """Return a trade's P&L in the unit selected by ``display_mode``."""
    if display_mode not in DISPLAY_MODES:
        raise ValueError(f"Unknown display mode: {display_mode}")
    return trade.value(display_mode)


def summarize_period(trades: Iterable[Trade]) -> PeriodSummary:
    """Roll up trade count, P&L and win/loss counts.

    Args:
        trades: Trades falling within the period.

    Returns:
        PeriodSummary; all zeros when there are no trades.
    """
    count = 0
    wins = 0
    profit = 0.0
    profit_rr = 0.0

    for trade in trades:
        count += 1
        profit += trade.profit
        profit_rr += trade.profit_rr
        if trade.is_win:
            wins += 1

    return PeriodSummary(
        trades=count,
        profit=profit,
        profit_rr=profit_rr,
        wins=wins,
        losses=count - wins,
        win_rate=(wins / count * 100) if count > 0 else 0.0,
    )


def calculate_profit_factor(
    avg_win: float, winning_trades: int, avg_loss: float, losing_trades: int
) -> float:
    """Calculate the count-weighted ratio of average win to average loss.

    Returns ``math.inf`` when there are winners and nothing was lost, and
    0 when there is nothing on either side.
    """
    gross_win = avg_win * winning_trades
    gross_loss = avg_loss * losing_trades
    if gross_loss > 0:
        return gross_win / gross_loss
    return math.inf if gross_win > 0 else 0.0


def calculate_stats(
    trades: Iterable[Trade], display_mode: DisplayMode = "currency"
) -> TradeStats:
    """Calculate win rate, average win/loss and profit factor.

    Losing trades are all trades that are not wins, so a break-even
    trade counts against the win rate.

    Args:
        trades: Trades to aggregate.
        display_mode: ``currency`` to average ``profit``, ``rr`` to
            average ``profit_rr``.

    Returns:
        TradeStats for the collection.
    """
    if display_mode not in DISPLAY_MODES:
        raise ValueError(f"Unknown display mode: {display_mode}")

    trades = list(trades)
    summary = summarize_period(trades)

    win_total = sum(t.value(display_mode) for t in trades if t.is_win)
    loss_total = sum(t.value(display_mode) for t in trades if not t.is_win)

    avg_win = (win_total / summary.wins) if summary.wins > 0 else 0.0
    avg_loss = abs(loss_total / summary.losses) if summary.losses > 0 else 0.0

    return TradeStats(
        display_mode=display_mode,
        total_trades=summary.trades,
        winning_trades=summary.wins,
        losing_trades=summary.losses,
        win_rate=summary.win_rate,
        total_profit=summary.profit,
        total_profit_rr=summary.profit_rr,
        avg_win=avg_win,
        avg_loss=avg_loss,
        profit_factor=calculate_profit_factor(
            avg_win, summary.wins, avg_loss, summary.losses
        ),
    )
