"""Helpers shared by the CLI command modules."""

import math
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from tradejournal.errors import StoreFailure

console = Console()


def get_config(ctx: Optional[click.Context] = None) -> dict:
    """Config loaded by the root group, or freshly loaded."""
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "config" in ctx.obj:
        return ctx.obj["config"]

    from tradejournal.config import load_config

    return load_config()


def print_error(message: str, title: str = "Error") -> None:
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def fail(message: str, title: str = "Error") -> None:
    """Print an error panel and exit with status 1."""
    print_error(message, title)
    raise SystemExit(1)


def require_service(ctx: Optional[click.Context] = None):
    """Journal service for the signed in user, loaded and ready.

    Exits with an error panel when nobody is signed in or the journal
    cannot be loaded.
    """
    from tradejournal.config import (
        get_data_store,
        get_identity_provider,
        get_settings_defaults,
    )
    from tradejournal.service import JournalService

    config = get_config(ctx)

    try:
        user = get_identity_provider(config).get_current_user()
        store = get_data_store(config)
    except StoreFailure as e:
        fail(f"[red]Cannot open the journal database:[/red]\n\n{e}")

    if user is None:
        fail(
            "[red]Not signed in.[/red]\n\n"
            "Run [cyan]tradejournal login[/cyan] or [cyan]tradejournal signup[/cyan] first.",
            title="Authentication Required",
        )

    service = JournalService(store, user, get_settings_defaults(config))
    if not service.load():
        fail("[red]Failed to load your journal.[/red] Run with -v for details.")
    return service


def format_money(value: float, signed: bool = False) -> str:
    sign = "+" if signed and value > 0 else ""
    if value < 0:
        return f"-${abs(value):,.2f}"
    return f"{sign}${value:,.2f}"


def format_value(value: float, display_mode: str = "currency", signed: bool = False) -> str:
    """Format P&L as ``$1,234.50`` or ``2.00R``."""
    if display_mode == "rr":
        sign = "+" if signed and value > 0 else ""
        return f"{sign}{value:.2f}R"
    return format_money(value, signed)


def colored(value: float, text: str) -> str:
    """Wrap text in green for gains and red for losses."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{text}[/{color}]"


def format_profit_factor(value: float) -> str:
    return "∞" if math.isinf(value) else f"{value:.2f}"
