"""Authentication commands for tradejournal CLI.

Handles sign up, sign in and sign out against the configured
identity provider.
"""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import console, fail, get_config
from tradejournal.errors import AuthFailure


def _get_provider():
    from tradejournal.config import get_identity_provider

    return get_identity_provider(get_config())


def _ensure_config() -> None:
    """Create the template config on first use."""
    from tradejournal.config import create_template_config, get_config_path

    if not get_config_path().exists():
        path = create_template_config()
        console.print(f"[dim]Created config at {path}[/dim]")


@click.command()
@click.option("--email", prompt=True, help="Email address.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password (at least 6 characters).",
)
@click.option("--name", "full_name", default=None, help="Display name.")
def signup(email: str, password: str, full_name: Optional[str]) -> None:
    """Create a journal account and sign in.

    \b
    Examples:
      tradejournal signup
      tradejournal signup --email me@example.com --name "Jane Trader"
    """
    _ensure_config()

    try:
        user = _get_provider().sign_up(email, password, full_name)
    except AuthFailure as e:
        fail(f"[red]Sign up failed:[/red] {e}")

    console.print(Panel(
        f"[green]Welcome, {user.full_name or user.email}![/green]\n\n"
        "Log your first trade with [cyan]tradejournal add[/cyan].",
        title="[bold green]Signed Up[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--email", prompt=True, help="Email address.")
@click.option("--password", prompt=True, hide_input=True, help="Password.")
def login(email: str, password: str) -> None:
    """Sign in to your journal.

    \b
    Examples:
      tradejournal login
      tradejournal login --email me@example.com
    """
    _ensure_config()

    try:
        user = _get_provider().sign_in(email, password)
    except AuthFailure as e:
        fail(f"[red]Sign in failed:[/red] {e}")

    console.print(Panel(
        f"[green]Signed in as {user.email}[/green]",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
def logout() -> None:
    """Sign out of your journal.

    \b
    Examples:
      tradejournal logout
    """
    provider = _get_provider()

    if provider.get_current_user() is None:
        console.print("[dim]Not signed in[/dim]")
        return

    provider.sign_out()
    console.print(Panel(
        "[green]Signed out[/green]",
        title="[bold]Logout[/bold]",
        border_style="dim",
    ))


@click.command()
def whoami() -> None:
    """Show the signed in user."""
    user = _get_provider().get_current_user()

    if user is None:
        console.print("[dim]Not signed in[/dim]")
        return

    name = f" ({user.full_name})" if user.full_name else ""
    console.print(f"[bold]{user.email}[/bold]{name}")
