"""Aggregate result models for statistics, calendar and import."""

from datetime import date as date_type
from typing import Literal, Optional

from pydantic import BaseModel, Field

from tradejournal.models.trade import Trade

DisplayMode = Literal["currency", "rr"]


class TradeStats(BaseModel):
    """Summary metrics over a collection of trades."""

    display_mode: DisplayMode = Field(default="currency")
    total_trades: int = Field(..., ge=0)
    winning_trades: int = Field(..., ge=0)
    losing_trades: int = Field(..., ge=0)
    win_rate: float = Field(..., ge=0, le=100, description="Win rate percentage")
    total_profit: float = Field(..., description="Sum of currency P&L")
    total_profit_rr: float = Field(..., description="Sum of R P&L")
    avg_win: float = Field(..., ge=0, description="Average win in display units")
    avg_loss: float = Field(..., ge=0, description="Average loss in display units")
    profit_factor: float = Field(..., ge=0, description="Weighted win/loss ratio")

    model_config = {"frozen": True}

    @property
    def total_value(self) -> float:
        return self.total_profit_rr if self.display_mode == "rr" else self.total_profit


class PeriodSummary(BaseModel):
    """Rollup of the trades that fall within a period."""

    trades: int = Field(default=0, ge=0)
    profit: float = Field(default=0.0)
    profit_rr: float = Field(default=0.0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    win_rate: float = Field(default=0.0, ge=0, le=100)

    model_config = {"frozen": True}


class DaySummary(PeriodSummary):
    """Rollup for a single calendar day."""

    day: int = Field(..., ge=1, le=31)
    date: date_type


class WeekSummary(PeriodSummary):
    """Rollup for a Sunday-aligned seven day window."""

    start: date_type
    end: date_type


class ChartPoint(BaseModel):
    """One point of the cumulative daily P&L series."""

    day: int = Field(..., ge=1, le=31)
    daily_pl: float
    cumulative_pl: float
    trades: int = Field(..., ge=0)

    model_config = {"frozen": True}


class MonthView(BaseModel):
    """Calendar projection of trades onto one month."""

    year: int
    month: int = Field(..., ge=1, le=12)
    display_mode: DisplayMode = Field(default="currency")
    leading_blanks: int = Field(..., ge=0, le=6, description="Empty cells before day 1")
    today: Optional[int] = Field(default=None, description="Today's day number if in month")
    days: list[DaySummary]
    weeks: list[WeekSummary]
    chart: list[ChartPoint]
    summary: PeriodSummary

    model_config = {"frozen": True}


class SkippedRow(BaseModel):
    """A CSV row that could not be imported."""

    line: int = Field(..., ge=1, description="1-based line number in the file")
    reason: str

    model_config = {"frozen": True}


class ImportResult(BaseModel):
    """Outcome of a CSV import."""

    trades: list[Trade] = Field(default_factory=list)
    skipped: list[SkippedRow] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def imported_count(self) -> int:
        return len(self.trades)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)
