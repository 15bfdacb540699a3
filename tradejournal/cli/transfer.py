"""CSV export and import commands for tradejournal CLI."""

from pathlib import Path
from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import console, fail, require_service
from tradejournal.cli.trade import resolve_account


@click.command(name="export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), required=False)
@click.option("--account", default=None, help="Only export trades of this account.")
def export_trades(path: Optional[Path], account: Optional[str]) -> None:
    """Export trades to CSV.

    Writes to trading-journal-YYYY-MM-DD.csv in the current directory
    when no PATH is given.

    \b
    Examples:
      tradejournal export
      tradejournal export ~/journal.csv
    """
    from tradejournal.journal.interchange import default_export_name, write_csv

    service = require_service()
    rows = service.filtered(resolve_account(service, account))
    path = path or Path(default_export_name())

    try:
        write_csv(rows, path)
    except OSError as e:
        fail(f"[red]Cannot write {path}:[/red] {e}")

    console.print(f"[green]Exported {len(rows)} trades to {path}[/green]")


@click.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--dry-run", is_flag=True, default=False, help="Parse the file without saving.")
def import_trades(path: Path, dry_run: bool) -> None:
    """Import trades from a CSV export.

    Rows that are too short or do not parse are skipped and listed.

    \b
    Examples:
      tradejournal import trading-journal-2024-03-31.csv
      tradejournal import old.csv --dry-run
    """
    from tradejournal.journal.interchange import read_csv

    try:
        result = read_csv(path)
    except (OSError, UnicodeDecodeError) as e:
        fail(f"[red]Cannot read {path}:[/red] {e}")

    if dry_run:
        stored_count = result.imported_count
    else:
        service = require_service()
        stored_count = len(service.import_trades(result.trades))

    failed = result.imported_count - stored_count
    lines = [
        f"[bold]{'Parsed' if dry_run else 'Imported'}:[/bold] {stored_count} trades",
        f"[bold]Skipped:[/bold]  {result.skipped_count} rows",
    ]
    if failed:
        lines.append(f"[bold]Not saved:[/bold] {failed} trades (see log)")
    for row in result.skipped[:10]:
        lines.append(f"  [dim]line {row.line}: {row.reason}[/dim]")
    if result.skipped_count > 10:
        lines.append(f"  [dim]... and {result.skipped_count - 10} more[/dim]")

    style = "yellow" if result.skipped_count or failed else "green"
    console.print(Panel(
        "\n".join(lines),
        title=f"[bold {style}]CSV Import[/bold {style}]",
        border_style=style,
    ))
