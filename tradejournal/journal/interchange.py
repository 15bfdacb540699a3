"""CSV import and export of journaled trades.

The column order is fixed; every cell is double-quoted on export. Import
skips the header row and any row it cannot turn into a valid trade, and
reports the skipped rows instead of failing the whole file.
"""

import csv
import io
import logging
import uuid
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from tradejournal.errors import ImportParseFailure
from tradejournal.models import ImportResult, SkippedRow, Trade

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Date",
    "Pair",
    "Entry Method",
    "Entry Price",
    "Exit Price",
    "Stop Loss",
    "Take Profit",
    "Size",
    "Profit ($)",
    "Profit (RR)",
    "Win/Loss",
    "Account Balance",
]


def default_export_name(today: Optional[date] = None) -> str:
    """File name used when no export path is given."""
    today = today or date.today()
    return f"trading-journal-{today.isoformat()}.csv"


def _cell(value: Optional[float]) -> str:
    return "" if value is None else repr(float(value))


def trade_to_row(trade: Trade) -> list[str]:
    """Render a trade as CSV cells in column order."""
    return [
        trade.date.isoformat(),
        trade.pair,
        trade.entry_method,
        _cell(trade.entry),
        _cell(trade.exit),
        _cell(trade.stop_loss),
        _cell(trade.take_profit),
        _cell(trade.size),
        _cell(trade.profit),
        _cell(trade.profit_rr),
        "Win" if trade.is_win else "Loss",
        _cell(trade.account_balance),
    ]


def export_csv(trades: Iterable[Trade]) -> str:
    """Export trades as CSV text, header first."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for trade in trades:
        writer.writerow(trade_to_row(trade))
    return buffer.getvalue()


def _optional_float(value: str) -> Optional[float]:
    value = value.strip()
    return float(value) if value else None


def row_to_trade(row: list[str]) -> Trade:
    """Parse CSV cells into a trade with a fresh ID.

    Raises:
        ImportParseFailure: If the row is too short or a value cannot be
            parsed.
    """
    if len(row) < len(CSV_HEADERS):
        raise ImportParseFailure(
            f"expected {len(CSV_HEADERS)} columns, found {len(row)}"
        )
    cells = [cell.strip() for cell in row]
    try:
        return Trade(
            id=str(uuid.uuid4()),
            date=date.fromisoformat(cells[0]),
            pair=cells[1],
            entry_method="simple" if cells[2] == "simple" else "detailed",
            entry=_optional_float(cells[3]),
            exit=_optional_float(cells[4]),
            stop_loss=_optional_float(cells[5]),
            take_profit=_optional_float(cells[6]),
            size=float(cells[7]),
            profit=float(cells[8]),
            profit_rr=float(cells[9]),
            is_win=cells[10] == "Win",
            account_balance=float(cells[11]),
        )
    except ValidationError as e:
        first = e.errors()[0]
        raise ImportParseFailure(first["msg"]) from e
    except ValueError as e:
        raise ImportParseFailure(str(e)) from e


def import_csv(text: str) -> ImportResult:
    """Import trades from CSV text.

    Blank lines are ignored. Rows that are too short or do not parse are
    skipped and listed in the result with their line number.
    """
    trades = []
    skipped = []

    reader = csv.reader(io.StringIO(text))
    for index, row in enumerate(reader):
        if index == 0:
            continue  # header
        if not any(cell.strip() for cell in row):
            continue
        try:
            trades.append(row_to_trade(row))
        except ImportParseFailure as e:
            logger.warning("Skipping CSV line %d: %s", reader.line_num, e)
            skipped.append(SkippedRow(line=reader.line_num, reason=str(e)))

    return ImportResult(trades=trades, skipped=skipped)


def write_csv(trades: Iterable[Trade], path: Path) -> Path:
    """Write an export to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_csv(trades), encoding="utf-8")
    return path


def read_csv(path: Path) -> ImportResult:
    """Import trades from a CSV file."""
    return import_csv(path.read_text(encoding="utf-8"))
