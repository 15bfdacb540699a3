"""Trade calculation, statistics and calendar module."""

from tradejournal.journal.calculator import (
    calculate_detailed,
    calculate_simple,
    one_r,
    position_size,
    risk_amount,
)
from tradejournal.journal.calendar import project_month, shift_month, week_windows
from tradejournal.journal.interchange import export_csv, import_csv, read_csv, write_csv
from tradejournal.journal.stats import calculate_stats, summarize_period

__all__ = [
    "calculate_detailed",
    "calculate_simple",
    "calculate_stats",
    "export_csv",
    "import_csv",
    "one_r",
    "position_size",
    "project_month",
    "read_csv",
    "risk_amount",
    "shift_month",
    "summarize_period",
    "week_windows",
    "write_csv",
]
