"""Trade commands for tradejournal CLI.

Handles trade entry (simple and detailed), listing and deletion.
"""

from datetime import date, datetime, timedelta
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    colored,
    console,
    fail,
    format_money,
    format_value,
    get_config,
    require_service,
)
from tradejournal.errors import InvalidInput


def resolve_account(service, account: Optional[str]) -> Optional[str]:
    """Resolve an account name or ID prefix to an account ID."""
    if account is None:
        return None

    accounts = service.load_accounts()
    for candidate in accounts:
        if candidate.account_name.lower() == account.lower():
            return candidate.id

    matches = [a for a in accounts if a.id and a.id.startswith(account)]
    if len(matches) == 1:
        return matches[0].id

    fail(
        f"[red]Unknown account:[/red] {account}\n\n"
        "Run [cyan]tradejournal account list[/cyan] to see your accounts."
    )


def _format_price(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.5g}"


@click.command()
@click.option("--pair", required=True, help="Instrument, e.g. EURUSD.")
@click.option("--rr", "rr_value", type=float, default=None, help="Outcome in R (simple entry).")
@click.option("--entry", type=float, default=None, help="Entry price (detailed entry).")
@click.option("--exit", "exit_price", type=float, default=None, help="Exit price (detailed entry).")
@click.option("--stop", "stop_loss", type=float, default=None, help="Stop loss price (detailed entry).")
@click.option("--tp", "take_profit", type=float, default=None, help="Take profit price (optional).")
@click.option("--balance", type=float, default=None, help="Account balance. Defaults to your last balance.")
@click.option("--risk", "risk_percent", type=float, default=None, help="Percent risked (detailed entry).")
@click.option(
    "--date",
    "trade_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Trade date (YYYY-MM-DD). Defaults to today.",
)
@click.option("--account", default=None, help="Account name or ID.")
def add(
    pair: str,
    rr_value: Optional[float],
    entry: Optional[float],
    exit_price: Optional[float],
    stop_loss: Optional[float],
    take_profit: Optional[float],
    balance: Optional[float],
    risk_percent: Optional[float],
    trade_date: Optional[datetime],
    account: Optional[str],
) -> None:
    """Record a trade.

    Give --rr to log the outcome in risk multiples (1R = 1% of the
    balance), or --entry/--exit/--stop to have size and P&L calculated
    from prices. Detailed trades are treated as long positions.

    \b
    Examples:
      tradejournal add --pair EURUSD --rr 2
      tradejournal add --pair GBPUSD --rr -1 --date 2024-03-01
      tradejournal add --pair EURUSD --entry 1.1 --stop 1.095 --exit 1.11 --risk 1
    """
    from tradejournal.journal.calculator import calculate_detailed, calculate_simple

    prices_given = any(v is not None for v in (entry, exit_price, stop_loss, take_profit))
    if rr_value is not None and prices_given:
        fail("[red]Use either --rr or prices (--entry/--exit/--stop), not both.[/red]")

    service = require_service()
    account_id = resolve_account(service, account)
    balance = balance if balance is not None else service.settings.balance
    day = trade_date.date() if trade_date else None

    try:
        if rr_value is not None:
            trade = calculate_simple(
                pair=pair,
                rr_value=rr_value,
                account_balance=balance,
                trade_date=day,
                account_id=account_id,
            )
        else:
            trade = calculate_detailed(
                pair=pair,
                entry=entry,
                exit=exit_price,
                stop_loss=stop_loss,
                take_profit=take_profit,
                account_balance=balance,
                risk_percent=risk_percent
                if risk_percent is not None
                else service.settings.default_risk_percent,
                trade_date=day,
                account_id=account_id,
            )
    except InvalidInput as e:
        fail("\n".join(f"[red]•[/red] {msg}" for msg in e.errors), title="Invalid Trade")

    saved = service.add_trade(trade)
    if saved is None:
        fail("[red]Failed to save trade.[/red] Run with -v for details.")

    lines = [
        f"[bold]{saved.pair}[/bold] ({saved.entry_method}) on {saved.date.isoformat()}\n",
    ]
    if saved.entry_method == "detailed":
        lines.append(
            f"Entry {_format_price(saved.entry)} | Stop {_format_price(saved.stop_loss)} "
            f"| Exit {_format_price(saved.exit)}"
        )
        lines.append(f"Position Size: {saved.size:,.2f}")
    else:
        lines.append(f"1R: {format_money(saved.size)}")
    lines.append(
        f"P&L: {colored(saved.profit, format_money(saved.profit, signed=True))} "
        f"({colored(saved.profit_rr, format_value(saved.profit_rr, 'rr', signed=True))})"
    )
    lines.append(f"Result: {'[green]Win[/green]' if saved.is_win else '[red]Loss[/red]'}")

    console.print(Panel(
        "\n".join(lines),
        title="[bold cyan]Trade Recorded[/bold cyan]",
        border_style="cyan",
    ))


@click.command()
@click.option("--days", type=int, default=None, help="Only trades from the last N days.")
@click.option("--account", default=None, help="Account name or ID.")
@click.option(
    "--mode",
    "display_mode",
    type=click.Choice(["currency", "rr"]),
    default=None,
    help="Show P&L in currency or R.",
)
def trades(days: Optional[int], account: Optional[str], display_mode: Optional[str]) -> None:
    """List recorded trades, newest first.

    \b
    Examples:
      tradejournal trades
      tradejournal trades --days 30 --mode rr
    """
    from tradejournal.config import get_display_mode

    display_mode = display_mode or get_display_mode(get_config())
    service = require_service()
    account_id = resolve_account(service, account)
    rows = service.filtered(account_id)

    if days is not None:
        from_date = date.today() - timedelta(days=days)
        rows = [t for t in rows if t.date >= from_date]

    if not rows:
        console.print(Panel(
            "[dim]No trades found[/dim]",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Pair", style="bold")
    table.add_column("Method", justify="center")
    table.add_column("Entry", justify="right")
    table.add_column("Stop", justify="right")
    table.add_column("Exit", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Result", justify="center")

    total = 0.0
    for trade in rows:
        value = trade.value(display_mode)
        total += value
        table.add_row(
            (trade.id or "")[:8],
            trade.date.isoformat(),
            trade.pair,
            trade.entry_method,
            _format_price(trade.entry),
            _format_price(trade.stop_loss),
            _format_price(trade.exit),
            colored(value, format_value(value, display_mode, signed=True)),
            "[green]Win[/green]" if trade.is_win else "[red]Loss[/red]",
        )

    console.print(table)
    console.print(f"\n[bold]Total Trades:[/bold] {len(rows)}")
    console.print(
        f"[bold]Total P&L:[/bold] {colored(total, format_value(total, display_mode, signed=True))}"
    )


@click.command(name="delete")
@click.argument("trade_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
def delete_trade(trade_id: str, yes: bool) -> None:
    """Delete a trade by ID (or a unique ID prefix).

    \b
    Examples:
      tradejournal delete 3f2a9c1b
    """
    service = require_service()
    trade = service.find_trade(trade_id)

    if trade is None:
        fail(f"[red]No single trade matches[/red] {trade_id}")

    if not yes:
        click.confirm(
            f"Delete {trade.pair} trade from {trade.date.isoformat()}?",
            abort=True,
        )

    if not service.delete_trade(trade.id):
        fail("[red]Failed to delete trade.[/red] Run with -v for details.")

    console.print(f"[green]Deleted trade {trade.id[:8]}[/green]")
