"""Tests for CSV import and export.

**Feature: trading-journal**
"""

import csv
import io
from datetime import date

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.errors import ImportParseFailure
from tradejournal.journal.calculator import calculate_detailed, calculate_simple
from tradejournal.journal.interchange import (
    CSV_HEADERS,
    default_export_name,
    export_csv,
    import_csv,
    read_csv,
    row_to_trade,
    write_csv,
)

HEADER_LINE = ",".join(f'"{h}"' for h in CSV_HEADERS)


@st.composite
def simple_trades(draw):
    return calculate_simple(
        pair=draw(st.sampled_from(["EURUSD", "GBPJPY", "XAUUSD", "NAS100"])),
        rr_value=draw(st.floats(min_value=-100, max_value=1000, allow_nan=False)),
        account_balance=draw(st.floats(min_value=100, max_value=1e7, allow_nan=False)),
        trade_date=draw(st.dates(min_value=date(2015, 1, 1), max_value=date(2024, 12, 31))),
    )


@st.composite
def detailed_trades(draw):
    entry = draw(st.floats(min_value=0.5, max_value=5000, allow_nan=False))
    stop = draw(st.floats(min_value=0.1, max_value=5000, allow_nan=False).filter(lambda s: s != entry))
    return calculate_detailed(
        pair="EURUSD",
        entry=entry,
        exit=draw(st.floats(min_value=0.1, max_value=5000, allow_nan=False)),
        stop_loss=stop,
        account_balance=draw(st.floats(min_value=100, max_value=1e7, allow_nan=False)),
        risk_percent=draw(st.floats(min_value=0.01, max_value=100, allow_nan=False)),
        trade_date=date(2024, 5, 1),
    )


class TestExport:
    """
    **Feature: trading-journal, Property 11: CSV Export Layout**

    *For any* trade collection, the export starts with the header row and
    has one quoted row per trade.
    """

    def test_empty_export_has_header(self):
        assert export_csv([]) == HEADER_LINE + "\n"

    @given(trades=st.lists(simple_trades(), max_size=10))
    @settings(max_examples=50)
    def test_one_row_per_trade(self, trades):
        rows = list(csv.reader(io.StringIO(export_csv(trades))))

        assert rows[0] == CSV_HEADERS
        assert len(rows) == len(trades) + 1
        assert all(len(row) == len(CSV_HEADERS) for row in rows)

    def test_row_layout(self):
        trade = calculate_simple("EURUSD", 2, 100000, date(2024, 3, 4))

        lines = export_csv([trade]).splitlines()

        assert lines[1] == (
            '"2024-03-04","EURUSD","simple","","","","","1000.0",'
            '"2000.0","2.0","Win","100000.0"'
        )

    def test_all_cells_quoted(self):
        trade = calculate_detailed("EURUSD", 1.1, 1.09, 1.095, 100000, 1, date(2024, 3, 4))

        line = export_csv([trade]).splitlines()[1]

        assert line.startswith('"2024-03-04","EURUSD","detailed","1.1","1.09","1.095",""')
        assert '"Loss"' in line

    def test_default_export_name(self):
        assert default_export_name(date(2024, 3, 31)) == "trading-journal-2024-03-31.csv"


class TestRoundTrip:
    """
    **Feature: trading-journal, Property 12: CSV Round Trip**

    *For any* exported trade, importing it back preserves the date, pair,
    method, prices, P&L in both units and the win flag.
    """

    @given(trades=st.lists(st.one_of(simple_trades(), detailed_trades()), max_size=10))
    @settings(max_examples=50)
    def test_round_trip_preserves_outcome(self, trades):
        result = import_csv(export_csv(trades))

        assert result.skipped == []
        assert result.imported_count == len(trades)
        for original, imported in zip(trades, result.trades):
            assert imported.date == original.date
            assert imported.pair == original.pair
            assert imported.entry_method == original.entry_method
            assert imported.entry == original.entry
            assert imported.exit == original.exit
            assert imported.stop_loss == original.stop_loss
            assert imported.size == original.size
            assert imported.profit == original.profit
            assert imported.profit_rr == original.profit_rr
            assert imported.is_win == original.is_win
            assert imported.account_balance == original.account_balance

    def test_imported_trades_get_fresh_ids(self):
        trade = calculate_simple("EURUSD", 1, 1000, date(2024, 3, 4)).model_copy(
            update={"id": "abc"}
        )

        result = import_csv(export_csv([trade, trade]))

        ids = [t.id for t in result.trades]
        assert "abc" not in ids
        assert len(set(ids)) == 2

    def test_file_round_trip(self, tmp_path):
        trade = calculate_simple("EURUSD", -1, 1000, date(2024, 3, 4))
        path = write_csv([trade], tmp_path / "out" / "journal.csv")

        result = read_csv(path)

        assert path.exists()
        assert result.trades[0].profit == -10


class TestImportSkipping:
    """
    **Feature: trading-journal, Property 13: Tolerant Import**

    *For any* CSV text, rows that are too short or do not parse are skipped
    and reported with their line number, and blank lines are ignored.
    """

    def test_header_only(self):
        result = import_csv(HEADER_LINE + "\n")

        assert result.imported_count == 0
        assert result.skipped_count == 0

    def test_empty_text(self):
        assert import_csv("").imported_count == 0

    def test_short_row_skipped(self):
        text = "\n".join([
            HEADER_LINE,
            '"2024-03-04","EURUSD","simple"',
            '"2024-03-05","EURUSD","simple","","","","","1000","2000","2","Win","100000"',
        ])

        result = import_csv(text)

        assert result.imported_count == 1
        assert result.skipped_count == 1
        assert result.skipped[0].line == 2
        assert "columns" in result.skipped[0].reason

    def test_unparseable_values_skipped(self):
        text = "\n".join([
            HEADER_LINE,
            '"not-a-date","EURUSD","simple","","","","","1000","2000","2","Win","100000"',
            '"2024-03-05","EURUSD","simple","","","","","1000","lots","2","Win","100000"',
            '"2024-03-05","EURUSD","simple","","","","","1000","2000","2","Win","-5"',
        ])

        result = import_csv(text)

        assert result.imported_count == 0
        assert [row.line for row in result.skipped] == [2, 3, 4]

    def test_inconsistent_outcome_skipped(self):
        # Labelled a loss despite a positive profit
        text = HEADER_LINE + '\n"2024-03-05","EURUSD","simple","","","","","1000","2000","2","Loss","100000"\n'

        result = import_csv(text)

        assert result.imported_count == 0
        assert result.skipped_count == 1

    def test_blank_lines_ignored(self):
        text = (
            HEADER_LINE
            + "\n\n"
            + '"2024-03-05","EURUSD","simple","","","","","1000","-1000","-1","Loss","100000"\n'
            + "\n"
        )

        result = import_csv(text)

        assert result.imported_count == 1
        assert result.skipped_count == 0
        assert result.trades[0].is_win is False

    def test_unknown_method_is_detailed(self):
        trade = row_to_trade(
            ["2024-03-05", "EURUSD", "manual", "1.1", "1.11", "1.095", "", "200000", "2000", "2", "Win", "100000"]
        )

        assert trade.entry_method == "detailed"
        assert trade.take_profit is None
        assert trade.entry == 1.1

    def test_row_errors_are_import_parse_failures(self):
        with pytest.raises(ImportParseFailure, match="expected 12 columns"):
            row_to_trade(["2024-03-05", "EURUSD"])
        with pytest.raises(ImportParseFailure):
            row_to_trade(["2024-13-05"] + ["1"] * 11)
