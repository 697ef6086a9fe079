"""
Main CLI application using Typer.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.file_availability_store import FileAvailabilityStore
from ..adapters.file_event_source import FileEventSource
from ..adapters.schemas import AvailabilityStatusPayload, TimeBlockPayload
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import AvailabilityError
from ..domain.formatting import describe_block, format_duration, format_suggestions
from ..logging_config import setup_logging
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="freetimefinder",
    help="Find free time from recurring weekly availability and calendar events",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
StartOption = Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD)")]
EndOption = Annotated[Optional[str], typer.Option("--end", help="End date (YYYY-MM-DD), inclusive")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print epoch-millisecond JSON instead of a table.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Availability summaries and mutual free time.
    """
    setup_logging(verbose=verbose)


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig) -> AvailabilityService:
    return AvailabilityService(
        event_source=FileEventSource(config.events_file, timezone=config.timezone),
        availability_store=FileAvailabilityStore(config.availabilities_file),
    )


def _determine_time_range(
    *,
    tz: str,
    range_days: int,
    start_option: Optional[str],
    end_option: Optional[str]
):
    """
    Resolve the query window from explicit dates or the configured default.
    Returns (start_date, end_date) with the end date being exclusive.

    Raises:
        ValueError: If a date cannot be parsed
    """
    if start_option:
        try:
            start_date = pendulum.from_format(start_option, "YYYY-MM-DD", tz=tz).start_of("day")
        except ValueError as exc:
            raise ValueError(f"Could not parse start date '{start_option}': {exc}") from exc
    else:
        start_date = pendulum.now(tz).start_of("day")

    if end_option:
        try:
            end_day = pendulum.from_format(end_option, "YYYY-MM-DD", tz=tz)
        except ValueError as exc:
            raise ValueError(f"Could not parse end date '{end_option}': {exc}") from exc
        # End date is inclusive on the command line
        end_date = end_day.start_of("day").add(days=1)
    else:
        end_date = start_date.add(days=range_days)

    return start_date, end_date


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def summary(
    people: Annotated[List[str], typer.Argument(help="Names or email addresses (e.g. 'alice bob').")],
    config_file: ConfigOption = None,
    start: StartOption = None,
    end: EndOption = None,
    as_json: JsonOption = False,
):
    """
    Show the pooled free/busy timeline: when is anyone available.

    Examples:

        freetimefinder summary alice bob

        freetimefinder summary alice --start 2024-01-01 --end 2024-01-07 --json
    """
    try:
        config = _load_config(config_file)
        owners = config.resolve_people(people)
        start_date, end_date = _determine_time_range(
            tz=config.timezone,
            range_days=config.defaults.range_days,
            start_option=start,
            end_option=end,
        )

        statuses = asyncio.run(
            _build_service(config).summary(owners=owners, start_date=start_date, end_date=end_date)
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([AvailabilityStatusPayload.from_domain(s).model_dump() for s in statuses]))
        return

    if not statuses:
        console.print("[yellow]No declared availability in the requested range.[/yellow]")
        return

    table = Table(
        title=f"Availability: {', '.join(owners)}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Duration", justify="right")
    table.add_column("Status")

    for status in statuses:
        details = describe_block(status)
        table.add_row(
            details["date"],
            details["start_time"],
            details["end_time"],
            format_duration(details["duration_minutes"]),
            "[green]free[/green]" if status.free else "[red]busy[/red]",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def common(
    people: Annotated[List[str], typer.Argument(help="Names or email addresses (e.g. 'alice bob').")],
    config_file: ConfigOption = None,
    start: StartOption = None,
    end: EndOption = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Minimum free block length in minutes")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Maximum number of suggestions to show")] = None,
    as_json: JsonOption = False,
):
    """
    Find mutual free time: when is everyone free.

    Examples:

        freetimefinder common alice bob

        freetimefinder common alice bob --duration 60 --start 2024-01-01
    """
    try:
        config = _load_config(config_file)
        owners = config.resolve_people(people)
        start_date, end_date = _determine_time_range(
            tz=config.timezone,
            range_days=config.defaults.range_days,
            start_option=start,
            end_option=end,
        )
        min_duration = duration if duration is not None else config.defaults.min_duration_minutes

        blocks = asyncio.run(
            _build_service(config).common_free_time(
                owners=owners,
                start_date=start_date,
                end_date=end_date,
                min_duration_minutes=min_duration,
            )
        )
    except (FileNotFoundError, ValueError, AvailabilityError) as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps([TimeBlockPayload.from_domain(b).model_dump() for b in blocks]))
        return

    if not blocks:
        console.print(
            f"[yellow]No mutual free time found with {', '.join(owners)} "
            f"in the requested timeframe.[/yellow]"
        )
        return

    max_suggestions = limit if limit is not None else config.defaults.max_suggestions
    lines = format_suggestions(blocks, limit=max_suggestions)

    console.print(f"\n[bold green]{len(blocks)} common free slot(s) with {', '.join(owners)}:[/bold green]\n")
    for block, line in zip(blocks[:max_suggestions], lines):
        console.print(f"  {block.start.format('ddd, MMM D')}  {line}")
    if len(blocks) > max_suggestions:
        console.print(f"  {lines[-1]}")
    console.print()


@app.command()
def list_people(config_file: ConfigOption = None):
    """
    List all configured people.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    if not config.people:
        console.print("[yellow]No people defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured people",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name (Alias)", style="bold yellow")
    table.add_column("E-Mail", style="dim")

    for person in config.people:
        table.add_row(person.name, person.email)

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]freetimefinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
