"""Statistics commands for tradejournal CLI.

Handles the performance summary and the monthly calendar view.
"""

import calendar as _calendar
from datetime import date
from typing import Optional

import click
from rich.columns import Columns
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    colored,
    console,
    fail,
    format_profit_factor,
    format_value,
    get_config,
    require_service,
)
from tradejournal.cli.trade import resolve_account

MODE_OPTION = click.option(
    "--mode",
    "display_mode",
    type=click.Choice(["currency", "rr"]),
    default=None,
    help="Show values in currency or R. Defaults to the configured mode.",
)


def _display_mode(display_mode: Optional[str]) -> str:
    from tradejournal.config import get_display_mode

    return display_mode or get_display_mode(get_config())


def _stat_card(title: str, value: str, subtitle: str, positive: bool) -> Panel:
    color = "green" if positive else "red"
    return Panel(
        f"[bold {color}]{value}[/bold {color}]\n[dim]{subtitle}[/dim]",
        title=f"[bold]{title}[/bold]",
        border_style=color,
        expand=True,
    )


@click.command()
@MODE_OPTION
@click.option("--account", default=None, help="Account name or ID.")
def stats(display_mode: Optional[str], account: Optional[str]) -> None:
    """Show win rate, average win/loss and profit factor.

    \b
    Examples:
      tradejournal stats
      tradejournal stats --mode rr
      tradejournal stats --account "Main Account"
    """
    display_mode = _display_mode(display_mode)
    service = require_service()
    result = service.stats(display_mode, resolve_account(service, account))

    cards = [
        _stat_card(
            "Total P&L",
            format_value(result.total_value, display_mode, signed=True),
            f"From {result.total_trades} trades",
            result.total_value >= 0,
        ),
        _stat_card(
            "Win Rate",
            f"{result.win_rate:.1f}%",
            f"{result.winning_trades}W / {result.losing_trades}L",
            result.win_rate >= 50,
        ),
        _stat_card(
            "Average Win",
            format_value(result.avg_win, display_mode),
            f"Avg loss {format_value(result.avg_loss, display_mode)}",
            True,
        ),
        _stat_card(
            "Profit Factor",
            format_profit_factor(result.profit_factor),
            "Gross profit / Gross loss",
            result.profit_factor >= 1,
        ),
    ]

    console.print(Columns(cards, equal=True, expand=True))


def _parse_month(value: Optional[str]) -> tuple[int, int]:
    if value is None:
        today = date.today()
        return today.year, today.month
    try:
        year, month = (int(part) for part in value.split("-"))
        date(year, month, 1)
    except ValueError:
        fail(f"[red]Invalid month: {value}. Use YYYY-MM[/red]")
    return year, month


def _cell(day, display_mode: str, is_today: bool) -> str:
    label = f"[bold reverse]{day.day:>2}[/bold reverse]" if is_today else f"{day.day:>2}"
    if day.trades == 0:
        return label

    value = day.profit_rr if display_mode == "rr" else day.profit
    if display_mode == "rr":
        text = f"{value:.1f}R"
    elif abs(value) >= 1000:
        text = f"${value / 1000:.1f}k"
    else:
        text = f"${value:.0f}"
    color = "green" if day.profit > 0 else "red"
    return f"{label}\n[{color}]{text}[/{color}]\n[dim]{day.trades}t[/dim]"


@click.command()
@click.option("--month", "month_value", default=None, help="Month to show (YYYY-MM). Defaults to this month.")
@MODE_OPTION
@click.option("--account", default=None, help="Account name or ID.")
def calendar(month_value: Optional[str], display_mode: Optional[str], account: Optional[str]) -> None:
    """Show a month calendar with daily, weekly and monthly P&L.

    \b
    Examples:
      tradejournal calendar
      tradejournal calendar --month 2024-03 --mode rr
    """
    year, month = _parse_month(month_value)
    display_mode = _display_mode(display_mode)
    service = require_service()
    view = service.month(year, month, display_mode, resolve_account(service, account))

    title = f"{_calendar.month_name[month]} {year}"

    grid = Table(title=title, show_header=True, header_style="bold cyan", show_lines=True)
    for name in ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]:
        grid.add_column(name, justify="center", min_width=8)

    cells = [""] * view.leading_blanks
    cells += [_cell(day, display_mode, day.day == view.today) for day in view.days]
    cells += [""] * (-len(cells) % 7)
    for i in range(0, len(cells), 7):
        grid.add_row(*cells[i:i + 7])

    console.print(grid)

    # Weekly breakdown
    weeks = Table(title="Weekly Breakdown", show_header=True, header_style="bold cyan")
    weeks.add_column("Week")
    weeks.add_column("Trades", justify="right")
    weeks.add_column("P&L", justify="right")
    weeks.add_column("W/L", justify="center")
    weeks.add_column("Win Rate", justify="right")

    for week in view.weeks:
        value = week.profit_rr if display_mode == "rr" else week.profit
        weeks.add_row(
            f"{week.start.strftime('%b %d')} - {week.end.strftime('%b %d')}",
            str(week.trades),
            colored(value, format_value(value, display_mode, signed=True)) if week.trades else "-",
            f"{week.wins}/{week.losses}",
            f"{week.win_rate:.0f}%",
        )

    console.print(weeks)

    # Monthly summary
    summary = view.summary
    month_value_total = summary.profit_rr if display_mode == "rr" else summary.profit
    final = view.chart[-1].cumulative_pl if view.chart else 0.0
    best = max(view.chart, key=lambda p: p.daily_pl, default=None)

    lines = [
        f"Total P&L: {colored(month_value_total, format_value(month_value_total, display_mode, signed=True))}",
        f"Trades:    {summary.trades} ({summary.wins}W / {summary.losses}L)",
        f"Win Rate:  {summary.win_rate:.1f}%",
        f"Cumulative at month end: {format_value(final, display_mode, signed=True)}",
    ]
    if best is not None and best.daily_pl > 0:
        lines.append(f"Best Day:  {best.day} ({format_value(best.daily_pl, display_mode, signed=True)})")

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold cyan]{title} Summary[/bold cyan]",
        border_style="cyan",
    ))
