"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from pendulum import DateTime
from rich.console import Console
from rich.table import Table

from ..config import get_default_config_path
from ..domain.exceptions import WorkCalendarError
from ..services.working_calendar import WorkingCalendar

app = typer.Typer(
    name="workcalendar",
    help="Working-day and working-time arithmetic over a configured work week",
    add_completion=False,
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./workcalendar.yaml"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Compute with working days, hours and minutes.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def _load_calendar(config_file: Optional[Path]) -> WorkingCalendar:
    config_path = config_file or get_default_config_path()
    return WorkingCalendar.from_yaml(config_path)


def _parse_instant(value: str) -> DateTime:
    """Parse an ISO 8601 date or date-time; no timezone is attached."""
    try:
        parsed = pendulum.parse(value, tz=None)
    except ValueError as exc:
        raise typer.BadParameter(f"Not a valid date/time: '{value}'") from exc
    if not isinstance(parsed, DateTime):
        raise typer.BadParameter(f"Not a valid date/time: '{value}'")
    return parsed


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


def _print_result(label: str, start: DateTime, result: DateTime) -> None:
    console.print(
        f"{label}: [bold]{start.format('YYYY-MM-DD HH:mm:ss')}[/bold] → "
        f"[bold green]{result.format('YYYY-MM-DD HH:mm:ss')}[/bold green]"
    )


@app.command()
def add_days(
    start: Annotated[str, typer.Argument(help="Start instant (YYYY-MM-DD[THH:mm])")],
    days: Annotated[int, typer.Argument(help="Working days to add")],
    config_file: ConfigOption = None,
):
    """
    Add working days to an instant, keeping the time of day.

    Example:

        workcalendar add-days 2015-12-31T09:00 3
    """
    moment = _parse_instant(start)
    try:
        calendar = _load_calendar(config_file)
        result = calendar.add_working_days(moment, days)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)
    _print_result(f"+{days} working days", moment, result)


@app.command()
def add_hours(
    start: Annotated[str, typer.Argument(help="Start instant (YYYY-MM-DD[THH:mm])")],
    hours: Annotated[float, typer.Argument(help="Working hours to add")],
    config_file: ConfigOption = None,
):
    """
    Add working hours to an instant.
    """
    moment = _parse_instant(start)
    try:
        calendar = _load_calendar(config_file)
        result = calendar.add_working_hours(moment, hours)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)
    _print_result(f"+{hours:g} working hours", moment, result)


@app.command()
def add_minutes(
    start: Annotated[str, typer.Argument(help="Start instant (YYYY-MM-DD[THH:mm])")],
    minutes: Annotated[float, typer.Argument(help="Working minutes to add")],
    config_file: ConfigOption = None,
):
    """
    Add working minutes to an instant.
    """
    moment = _parse_instant(start)
    try:
        calendar = _load_calendar(config_file)
        result = calendar.add_working_minutes(moment, minutes)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)
    _print_result(f"+{minutes:g} working minutes", moment, result)


@app.command()
def check(
    moment: Annotated[str, typer.Argument(help="Instant to classify (YYYY-MM-DDTHH:mm)")],
    granularity: Annotated[float, typer.Option("--granularity", "-g", help="Search step in minutes")] = 1,
    config_file: ConfigOption = None,
):
    """
    Tell whether an instant is a working moment, with its neighbours.
    """
    instant = _parse_instant(moment)
    try:
        calendar = _load_calendar(config_file)
        is_working, following, previous = calendar.is_working_moment(instant, granularity)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)

    status = "[bold green]working[/bold green]" if is_working else "[yellow]not working[/yellow]"
    console.print(f"{instant.format('YYYY-MM-DD HH:mm:ss')} is {status}")
    console.print(f"  previous: {previous.format('YYYY-MM-DD HH:mm:ss')}")
    console.print(f"  next:     {following.format('YYYY-MM-DD HH:mm:ss')}")


@app.command()
def between(
    start: Annotated[str, typer.Argument(help="First date (YYYY-MM-DD)")],
    end: Annotated[str, typer.Argument(help="Last date (YYYY-MM-DD)")],
    exclude_ends: Annotated[bool, typer.Option("--exclude-ends", help="Leave out the two endpoint dates.")] = False,
    config_file: ConfigOption = None,
):
    """
    List the working days between two dates, latest first.
    """
    first = _parse_instant(start)
    last = _parse_instant(end)
    try:
        calendar = _load_calendar(config_file)
        days = calendar.working_days_between(first, last, include_ends=not exclude_ends)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)

    table = Table(
        title=f"Working days {first.to_date_string()} – {last.to_date_string()}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Weekday", style="dim")
    for day in days:
        table.add_row(day.to_date_string(), day.format("dddd"))

    console.print()
    console.print(table)
    console.print(f"{len(days)} day(s)")


@app.command()
def holidays(
    year: Annotated[int, typer.Argument(help="Year to resolve")],
    config_file: ConfigOption = None,
):
    """
    Show the configured holidays for a year.
    """
    try:
        calendar = _load_calendar(config_file)
    except (FileNotFoundError, WorkCalendarError) as e:
        _fail(e)

    resolved = sorted(calendar.holidays_for(year))
    if not resolved:
        console.print(f"[yellow]No holidays configured for {year}.[/yellow]")
        return

    table = Table(title=f"Holidays {year}", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold yellow")
    table.add_column("Weekday", style="dim")
    for day in resolved:
        table.add_row(day.isoformat(), day.strftime("%A"))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]workcalendar[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
