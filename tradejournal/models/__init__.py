"""Data models for tradejournal."""

from tradejournal.models.account import Account, AccountSettings, User, UserProfile
from tradejournal.models.record import TradeRecord, record_to_trade, trade_to_record
from tradejournal.models.stats import (
    ChartPoint,
    DaySummary,
    DisplayMode,
    ImportResult,
    MonthView,
    PeriodSummary,
    SkippedRow,
    TradeStats,
    WeekSummary,
)
from tradejournal.models.trade import EntryMethod, Trade

__all__ = [
    "Account",
    "AccountSettings",
    "ChartPoint",
    "DaySummary",
    "DisplayMode",
    "EntryMethod",
    "ImportResult",
    "MonthView",
    "PeriodSummary",
    "SkippedRow",
    "Trade",
    "TradeRecord",
    "TradeStats",
    "User",
    "UserProfile",
    "WeekSummary",
    "record_to_trade",
    "trade_to_record",
]
