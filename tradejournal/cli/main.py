"""Main CLI entry point for tradejournal.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        # Commands are found by their click name, which may differ from the
        # attribute name (e.g. "import" is a keyword)
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Authentication
    "signup": "tradejournal.cli.auth",
    "login": "tradejournal.cli.auth",
    "logout": "tradejournal.cli.auth",
    "whoami": "tradejournal.cli.auth",
    # Trades
    "add": "tradejournal.cli.trade",
    "trades": "tradejournal.cli.trade",
    "delete": "tradejournal.cli.trade",
    # Statistics
    "stats": "tradejournal.cli.stats",
    "calendar": "tradejournal.cli.stats",
    # CSV interchange
    "export": "tradejournal.cli.transfer",
    "import": "tradejournal.cli.transfer",
    # Accounts and settings
    "account": "tradejournal.cli.account",
    "settings": "tradejournal.cli.account",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def setup_logging(level: str) -> None:
    """Route log records through rich at the given level."""
    numeric = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tradejournal - record trades and review your performance.

    Log trades by price (entry, exit, stop) or by their outcome in R,
    then review win rate, profit factor and a monthly calendar.

    \b
    Quick Start:
      tradejournal signup                       # Create an account
      tradejournal add --pair EURUSD --rr 2     # Log a 2R winner
      tradejournal stats                        # Performance summary
      tradejournal calendar                     # This month's calendar
    """
    from tradejournal.config import load_config

    config = load_config()
    level = "DEBUG" if verbose else config.get("logging", {}).get("level", "WARNING")
    setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
