"""Calendar projection of trades.

Buckets trades by day and by Sunday-aligned week for one month and
builds the cumulative daily P&L series used for the month chart.
"""

import calendar as _calendar
from datetime import date, timedelta
from typing import Iterable, Optional

from tradejournal.journal.stats import summarize_period, trade_value
from tradejournal.models import (
    ChartPoint,
    DaySummary,
    MonthView,
    Trade,
    WeekSummary,
)
from tradejournal.models.stats import DisplayMode

MAX_WEEKS = 6


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month."""
    return _calendar.monthrange(year, month)[1]


def sunday_offset(day: date) -> int:
    """Days since the most recent Sunday (Sunday = 0, Saturday = 6)."""
    return (day.weekday() + 1) % 7


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or back when negative)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def trades_on(trades: Iterable[Trade], day: date) -> list[Trade]:
    """Trades whose date is ``day``."""
    return [t for t in trades if t.date == day]


def trades_between(trades: Iterable[Trade], start: date, end: date) -> list[Trade]:
    """Trades dated within ``start`` and ``end`` inclusive."""
    return [t for t in trades if start <= t.date <= end]


def week_windows(year: int, month: int) -> list[tuple[date, date]]:
    """Sunday-aligned week windows touching a month.

    Windows start on the Sunday on or before the 1st and slide by seven
    days, up to six windows. A window is kept when its first or last day
    falls inside the month, so a week that straddles a month boundary
    belongs to both months.
    """
    first = date(year, month, 1)
    first_start = first - timedelta(days=sunday_offset(first))

    windows = []
    for i in range(MAX_WEEKS):
        start = first_start + timedelta(days=i * 7)
        end = start + timedelta(days=6)
        if (start.year, start.month) == (year, month) or (end.year, end.month) == (
            year,
            month,
        ):
            windows.append((start, end))
    return windows


def project_month(
    trades: Iterable[Trade],
    year: int,
    month: int,
    display_mode: DisplayMode = "currency",
    today: Optional[date] = None,
) -> MonthView:
    """Project trades onto a month view.

    Args:
        trades: All trades; those outside the month are ignored except
            where a week window reaches past the month boundary.
        year: Target year.
        month: Target month (1-12).
        display_mode: Unit for the chart series.
        today: Reference date for the today marker, defaults to today.

    Returns:
        MonthView with per-day and per-week rollups, the month summary
        and the cumulative chart series.
    """
    trades = list(trades)
    today = today or date.today()
    first = date(year, month, 1)
    last_day = days_in_month(year, month)

    days = []
    chart = []
    cumulative = 0.0
    for day_number in range(1, last_day + 1):
        day = date(year, month, day_number)
        day_trades = trades_on(trades, day)
        summary = summarize_period(day_trades)
        days.append(DaySummary(day=day_number, date=day, **summary.model_dump()))

        daily = sum(trade_value(t, display_mode) for t in day_trades)
        cumulative += daily
        chart.append(
            ChartPoint(
                day=day_number,
                daily_pl=daily,
                cumulative_pl=cumulative,
                trades=len(day_trades),
            )
        )

    weeks = [
        WeekSummary(
            start=start,
            end=end,
            **summarize_period(trades_between(trades, start, end)).model_dump(),
        )
        for start, end in week_windows(year, month)
    ]

    month_trades = [t for t in trades if (t.date.year, t.date.month) == (year, month)]

    return MonthView(
        year=year,
        month=month,
        display_mode=display_mode,
        leading_blanks=sunday_offset(first),
        today=today.day if (today.year, today.month) == (year, month) else None,
        days=days,
        weeks=weeks,
        chart=chart,
        summary=summarize_period(month_trades),
    )
