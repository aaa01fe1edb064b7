"""Command-line interface for the reading planner.

Built with Typer for commands and Rich for beautiful output.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_config
from .db import get_db
from .progress import ProgressSnapshot, format_date_long
from .schedule import TOTAL_PAGES, DayEntry, PlanMode, PlannerSettings
from .settings import SETTINGS_METADATA, PlannerManager, ThemeMode

# Create the main app
app = typer.Typer(
    name="tartil",
    help="Plan and track a recitation of all 604 pages.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

# Accent colours per theme
THEME_STYLES = {
    ThemeMode.DARK: {"accent": "bold yellow", "done": "green", "muted": "dim"},
    ThemeMode.LIGHT: {"accent": "bold blue", "done": "dark_green", "muted": "grey50"},
}


@app.callback()
def main_callback() -> None:
    """Plan and track a recitation of all 604 pages."""
    config = get_config()
    errors = config.validate()
    if errors:
        for error in errors:
            print_error(error)
        raise typer.Exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def get_manager() -> PlannerManager:
    """Create a planner manager on the configured database."""
    return PlannerManager(get_db())


def warn_if_unscheduled(manager: PlannerManager, day: int) -> None:
    """Warn when a day number is not part of the current schedule."""
    scheduled = len(manager.get_schedule())
    if day > scheduled:
        print_warning(f"Day {day} is not in the current {scheduled}-day schedule")


def progress_bar(percentage: int, width: int = 20) -> str:
    """Render a text progress bar."""
    filled = int((percentage / 100) * width)
    return "█" * filled + "░" * (width - filled)


def format_schedule_table(
    schedule: list[DayEntry], theme: ThemeMode, title: str = "Reading Schedule"
) -> Table:
    """Create a rich table for displaying scheduled days."""
    styles = THEME_STYLES[theme]
    table = Table(title=title, show_header=True, header_style=styles["accent"])
    table.add_column("Day", justify="right", style="cyan")
    table.add_column("Date")
    table.add_column("Pages", justify="center")
    table.add_column("Count", justify="right")
    table.add_column("Status")

    for day in schedule:
        status = (
            f"[{styles['done']}]✓ Recited[/{styles['done']}]"
            if day.is_completed
            else f"[{styles['muted']}]○ Pending[/{styles['muted']}]"
        )
        table.add_row(
            str(day.day_number),
            day.date_label,
            day.page_range,
            str(day.pages_to_read),
            status,
        )

    return table


def describe_pace(settings: PlannerSettings) -> str:
    """Describe the active pacing strategy."""
    if settings.plan_mode == PlanMode.PACE:
        return f"{settings.daily_goal} pages/day"
    if settings.plan_mode == PlanMode.END_DATE:
        return f"finish by {settings.target_end_date.isoformat()}"
    return f"{settings.target_days} days"


def print_completed_banner() -> None:
    """Print the khatm-complete message."""
    console.print(
        Panel(
            f"[bold yellow]Mubarak![/bold yellow]\n"
            f"Your journey through all {TOTAL_PAGES} pages is complete.\n"
            "[dim]Run 'tartil restart' to start a new khatm.[/dim]",
            style="yellow",
        )
    )


# ============================================================================
# Schedule Commands
# ============================================================================


@app.command()
def show(
    pending: bool = typer.Option(False, "--pending", "-p", help="Only show days not yet recited"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Max days to show"),
) -> None:
    """Show the generated reading schedule."""
    manager = get_manager()
    state = manager.load_state()
    schedule = manager.get_schedule()

    if not schedule:
        print_completed_banner()
        return

    days = [day for day in schedule if not day.is_completed] if pending else schedule
    if limit is not None:
        days = days[:limit]

    if not days:
        print_info("All scheduled days are recited.")
        return

    title = f"Reading Schedule ({describe_pace(state.settings)})"
    console.print(format_schedule_table(days, state.theme, title=title))
    print_info(f"{len(schedule)} days scheduled, ending {schedule[-1].date_label}")


@app.command()
def status() -> None:
    """Show overall progress and projected finish dates."""
    manager = get_manager()
    state = manager.load_state()
    snapshot: ProgressSnapshot = manager.get_progress()
    styles = THEME_STYLES[state.theme]

    console.print(Panel(f"[{styles['accent']}]Recitation Progress[/{styles['accent']}]"))
    console.print(
        f"  [{progress_bar(snapshot.percentage)}] {snapshot.percentage}%"
    )
    console.print(f"  Pages: {snapshot.total_pages_read} / {TOTAL_PAGES}")
    console.print(f"  Remaining: {snapshot.remaining_pages} pages")
    console.print(f"  Days recited: {snapshot.days_completed} / {snapshot.days_scheduled}")
    console.print(f"  Mode: {state.settings.plan_mode.value} ({describe_pace(state.settings)})")

    planned = (
        format_date_long(snapshot.planned_finish_date)
        if snapshot.planned_finish_date
        else "N/A"
    )
    console.print(f"  Planned finish: {planned}")

    if snapshot.is_complete:
        console.print("  Expected finish: Completed")
        print_completed_banner()
    elif snapshot.expected_finish_date:
        console.print(
            f"  Expected finish: {format_date_long(snapshot.expected_finish_date)} "
            f"[dim]({snapshot.days_to_finish_expected} days at "
            f"{state.settings.daily_goal} pages/day)[/dim]"
        )
    else:
        console.print("  Expected finish: N/A [dim](set a daily goal)[/dim]")


# ============================================================================
# Settings Commands
# ============================================================================


@app.command("settings")
def settings_show() -> None:
    """Show current plan settings."""
    state = get_manager().load_state()
    values = state.settings.model_dump(mode="json")

    table = Table(title="Plan Settings", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Description", style="dim")

    for field, metadata in SETTINGS_METADATA.items():
        table.add_row(field, str(values[field]), metadata["description"])
    table.add_row("theme", state.theme.value, "Display theme")

    console.print(table)


@app.command("set")
def set_value(
    field: str = typer.Argument(..., help="Setting name, e.g. daily_goal or start_date"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a plan setting."""
    manager = get_manager()
    try:
        settings = manager.update_setting(field, value)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Plan updated ({settings.plan_mode.value}: {describe_pace(settings)})")


@app.command()
def mode(
    plan_mode: str = typer.Argument(..., help="days, end-date or pace"),
) -> None:
    """Switch the pacing strategy."""
    manager = get_manager()
    try:
        settings = manager.update_setting("plan_mode", plan_mode)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Mode set to {settings.plan_mode.value} ({describe_pace(settings)})")


# ============================================================================
# Progress Commands
# ============================================================================


@app.command()
def toggle(
    days: list[int] = typer.Argument(..., help="Day numbers to toggle"),
) -> None:
    """Toggle one or more days between recited and pending."""
    manager = get_manager()
    for day in days:
        try:
            completed = manager.toggle_day(day)
        except ValueError as e:
            print_error(str(e))
            raise typer.Exit(1)
        label = "recited" if completed else "pending"
        print_success(f"Day {day} marked {label}")
        warn_if_unscheduled(manager, day)


@app.command()
def done(
    day: int = typer.Argument(..., help="Day number"),
) -> None:
    """Mark a day as recited."""
    manager = get_manager()
    try:
        manager.mark_day(day, True)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"Day {day} marked recited")
    warn_if_unscheduled(manager, day)


@app.command()
def undo(
    day: int = typer.Argument(..., help="Day number"),
) -> None:
    """Mark a day as not recited."""
    try:
        get_manager().mark_day(day, False)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)
    print_success(f"Day {day} marked pending")


@app.command()
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset all checked days. Settings are kept."""
    if not yes and not typer.confirm(
        "Reset all progress? Checked days are cleared but settings are kept."
    ):
        print_info("Cancelled.")
        raise typer.Exit(0)

    get_manager().reset_progress()
    print_success("Progress reset")


@app.command()
def restart(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Start a new khatm from page 1."""
    if not yes and not typer.confirm("Start a new khatm from page 1?"):
        print_info("Cancelled.")
        raise typer.Exit(0)

    get_manager().start_new_khatm()
    print_success("New khatm started")


@app.command()
def theme(
    value: Optional[ThemeMode] = typer.Argument(None, help="light or dark (omit to toggle)"),
) -> None:
    """Set or toggle the display theme."""
    manager = get_manager()
    current = manager.set_theme(value) if value else manager.toggle_theme()
    print_success(f"Theme set to {current.value}")


# ============================================================================
# Export / Import Commands
# ============================================================================


@app.command("export")
def export_state(
    output: Optional[Path] = typer.Argument(None, help="Output file (default: stdout)"),
) -> None:
    """Export planner state as JSON."""
    data = json.dumps(get_manager().export_state(), indent=2)
    if output is None:
        console.print_json(data)
        return

    output.write_text(data, encoding="utf-8")
    print_success(f"Exported to {output}")


@app.command("import")
def import_state(
    path: Path = typer.Argument(..., help="JSON file produced by 'tartil export'"),
) -> None:
    """Import planner state from JSON."""
    if not path.exists():
        print_error(f"File not found: {path}")
        raise typer.Exit(1)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        get_manager().import_state(data)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Imported from {path}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"tartil version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
