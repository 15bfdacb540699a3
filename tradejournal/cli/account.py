"""Account and settings commands for tradejournal CLI."""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import console, fail, format_money, require_service
from tradejournal.cli.trade import resolve_account
from tradejournal.errors import InvalidInput


@click.group()
def account() -> None:
    """Manage named trading accounts.

    \b
    Examples:
      tradejournal account list
      tradejournal account add "Main Account" --balance 25000
      tradejournal account remove "Demo"
    """
    pass


@account.command(name="list")
def list_accounts() -> None:
    """List your trading accounts."""
    service = require_service()
    accounts = service.load_accounts()

    if not accounts:
        console.print(Panel(
            "[dim]No accounts yet[/dim]\n\n"
            "Add one with [cyan]tradejournal account add NAME --balance AMOUNT[/cyan]",
            title="[bold]Accounts[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Accounts", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Balance", justify="right")
    table.add_column("Trades", justify="right")

    for item in accounts:
        table.add_row(
            (item.id or "")[:8],
            item.account_name,
            format_money(item.balance),
            str(len(service.filtered(item.id))),
        )

    console.print(table)


@account.command(name="add")
@click.argument("name")
@click.option("--balance", type=float, default=10000.0, show_default=True, help="Starting balance.")
def add_account(name: str, balance: float) -> None:
    """Create a trading account."""
    service = require_service()

    try:
        created = service.add_account(name, balance)
    except InvalidInput as e:
        fail(f"[red]{e}[/red]", title="Invalid Account")

    if created is None:
        fail("[red]Failed to create account.[/red] Run with -v for details.")

    console.print(
        f"[green]Created account {created.account_name} "
        f"({format_money(created.balance)})[/green]"
    )


@account.command(name="remove")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
def remove_account(name: str, yes: bool) -> None:
    """Delete a trading account. Its trades are kept."""
    service = require_service()
    account_id = resolve_account(service, name)

    if not yes:
        click.confirm(f"Delete account {name}?", abort=True)

    if not service.remove_account(account_id):
        fail("[red]Failed to delete account.[/red] Run with -v for details.")

    console.print(f"[green]Deleted account {name}[/green]")


@click.command()
@click.option("--balance", type=float, default=None, help="Set your account balance.")
@click.option("--risk", "risk_percent", type=float, default=None, help="Set the default risk percent.")
@click.option("--db", "show_db", is_flag=True, default=False, help="Also show the database file and record counts.")
def settings(balance: Optional[float], risk_percent: Optional[float], show_db: bool) -> None:
    """Show or change trade-entry defaults.

    \b
    Examples:
      tradejournal settings
      tradejournal settings --balance 120000 --risk 0.5
      tradejournal settings --db
    """
    service = require_service()

    if balance is not None or risk_percent is not None:
        try:
            updated = service.update_settings(balance, risk_percent)
        except InvalidInput as e:
            fail(f"[red]{e}[/red]", title="Invalid Settings")
        if not updated:
            fail("[red]Failed to update settings.[/red] Run with -v for details.")

    current = service.settings
    console.print(Panel(
        f"Account Balance:      [bold]{format_money(current.balance)}[/bold]\n"
        f"Default Risk:         [bold]{current.default_risk_percent:g}%[/bold]\n"
        f"Risk per Trade:       {format_money(current.balance * current.default_risk_percent / 100)}",
        title="[bold cyan]Settings[/bold cyan]",
        border_style="cyan",
    ))

    if show_db:
        console.print(f"Database: [cyan]{service.store.db_path}[/cyan]")
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Table")
        table.add_column("Records", justify="right")
        for name, count in service.store.get_stats().items():
            table.add_row(name, str(count))
        console.print(table)
