"""Command-line interface for ClickUp tasks."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from clickup_tasks import __version__
from clickup_tasks.clickup import ClickUpClient
from clickup_tasks.config import Config
from clickup_tasks.errors import ClickUpApiError, InvalidTimeFormatError, RepositoryError
from clickup_tasks.repository import ClickUpRepository
from clickup_tasks.service import ClickUpTaskService
from clickup_tasks.utils import get_logger, setup_logging

app = typer.Typer(help="Browse ClickUp tasks, move them between statuses and track time")
console = Console()
logger = get_logger(__name__)

CONFIG_DIR_HELP = "Configuration directory. Defaults to ~/.clickup-tasks/"


@contextmanager
def _open_repository(config_dir: Optional[Path], verbose: bool) -> Iterator[ClickUpRepository]:
    """Set up logging and yield a repository for the stored settings.

    Exits with code 1 when no token is stored or an API call fails.
    """
    config = Config(config_dir)
    token = config.api_token
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
        secrets=[token] if token else [],
    )
    if not token:
        console.print("[yellow]ClickUp API token not found. Please configure it first.[/yellow]")
        console.print("Run: clickup-tasks configure")
        raise typer.Exit(code=1)

    try:
        with ClickUpClient(api_token=token) as client:
            yield ClickUpRepository(ClickUpTaskService(client), config.settings)
    except (ClickUpApiError, RepositoryError, InvalidTimeFormatError) as e:
        logger.error(f"Command failed: {e}", exc_info=verbose)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def _choose(title: str, options: list[tuple[str, str]], optional: bool = False) -> str | None:
    """Show numbered options and return the id of the chosen one."""
    table = Table(title=title)
    table.add_column("#", style="cyan")
    table.add_column("ID", style="magenta")
    table.add_column("Name")
    for index, (option_id, name) in enumerate(options, start=1):
        table.add_row(str(index), option_id, name)
    console.print(table)

    choices = [str(index) for index in range(1, len(options) + 1)]
    if optional:
        choices.append("0")
        console.print("[dim]0 = none[/dim]")
    answer = Prompt.ask("Select", choices=choices, default=choices[0] if choices else None)
    if answer == "0":
        return None
    return options[int(answer) - 1][0]


@app.command()
def configure(
    token: Optional[str] = typer.Option(
        None,
        "--token",
        help="ClickUp personal API token. Prompted for when omitted.",
    ),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Store the API token and select workspace, assignee, space and list."""
    config = Config(config_dir)

    console.print("[bold cyan]ClickUp Configuration[/bold cyan]")
    if token is None:
        token = Prompt.ask("Enter your ClickUp API token", password=True)
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
        secrets=[token],
    )

    with ClickUpClient(api_token=token) as client:
        repository = ClickUpRepository(ClickUpTaskService(client), config.settings)
        try:
            repository.test_connection()
        except ClickUpApiError as e:
            console.print(f"[red]✗ Failed to connect to ClickUp: {e}[/red]")
            raise typer.Exit(code=1)

        config.set_api_token(token)
        console.print("[green]✓ ClickUp API token saved[/green]")

        try:
            available_workspaces = repository.fetch_workspaces()
            if not available_workspaces:
                console.print("[yellow]No workspaces available for this token.[/yellow]")
                raise typer.Exit(code=1)

            workspace_id = _choose("Workspaces", [(w.id, w.name) for w in available_workspaces])
            config.select_workspace(workspace_id)
            workspace = next(w for w in available_workspaces if w.id == workspace_id)

            members = [(m.user.id, str(m.user)) for m in workspace.members]
            assignee_id = _choose("Assignee", members, optional=True) if members else None
            config.update_settings(assignee_id=assignee_id)

            available_spaces = repository.fetch_spaces(workspace_id)
            if available_spaces:
                space_id = _choose("Spaces", [(s.id, s.name) for s in available_spaces], optional=True)
                if space_id is None:
                    config.clear_selected_space()
                else:
                    config.select_space(space_id)
                    available_lists = repository.fetch_lists(space_id)
                    if available_lists:
                        list_id = _choose("Lists", [(item.id, item.name) for item in available_lists], optional=True)
                        config.update_settings(list_id=list_id)

            use_custom = Confirm.ask(
                "Use custom task IDs?", default=config.settings.use_custom_task_ids
            )
            config.update_settings(use_custom_task_ids=use_custom)
        except (ClickUpApiError, RepositoryError) as e:
            console.print(f"[red]✗ Failed to fetch ClickUp data: {e}[/red]")
            raise typer.Exit(code=1)

    console.print("\n[green]Configuration complete![/green]")
    console.print("Run 'clickup-tasks tasks' to list your tasks.")


@app.command()
def workspaces(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """List authorized workspaces and their members."""
    with _open_repository(config_dir, verbose) as repository:
        table = Table(title="Workspaces")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Members")
        for workspace in repository.fetch_workspaces():
            table.add_row(
                workspace.id,
                workspace.name,
                ", ".join(str(member.user) for member in workspace.members),
            )
        console.print(table)


@app.command()
def spaces(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """List spaces of the selected workspace."""
    with _open_repository(config_dir, verbose) as repository:
        table = Table(title="Spaces")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="magenta")
        table.add_column("Statuses")
        for space in repository.fetch_spaces():
            table.add_row(space.id, space.name, ", ".join(s.status for s in space.statuses))
        console.print(table)


@app.command(name="lists")
def lists_(
    space_id: Optional[str] = typer.Option(
        None,
        "--space",
        help="Space ID. Defaults to the selected space.",
    ),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """List folderless lists of a space."""
    with _open_repository(config_dir, verbose) as repository:
        table = Table(title="Lists")
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="magenta")
        for item in repository.fetch_lists(space_id):
            table.add_row(item.id, item.name)
        console.print(table)


@app.command()
def tasks(
    offset: int = typer.Option(0, "--offset", min=0, help="Index of the first task."),
    with_closed: bool = typer.Option(False, "--closed", help="Include closed tasks."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """List one page of tasks of the selected workspace and assignee."""
    with _open_repository(config_dir, verbose) as repository:
        if not repository.settings.workspace_id:
            console.print("[yellow]No workspace selected. Run: clickup-tasks configure[/yellow]")
            raise typer.Exit(code=1)

        found = repository.get_issues(offset=offset, with_closed=with_closed)
        if not found:
            console.print("[yellow]No tasks found.[/yellow]")
            return

        table = Table(title="Tasks")
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Status", style="magenta")
        table.add_column("Closed", style="yellow")
        for task in found:
            table.add_row(
                task.presentable_id,
                task.summary,
                task.status.status if task.status else "-",
                "yes" if task.is_closed else "",
            )
        console.print(table)


@app.command()
def task(
    task_id: str = typer.Argument(..., help="Task ID (or custom task ID)."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Show a single task."""
    with _open_repository(config_dir, verbose) as repository:
        found = repository.find_task(task_id)
        if found is None:
            console.print(f"[red]Task {task_id} could not be loaded.[/red]")
            raise typer.Exit(code=1)

        console.print(f"[bold cyan]{found.presentable_id}[/bold cyan] {found.summary}")
        console.print(f"  Type:    {found.task_type.value}")
        console.print(f"  Status:  {found.status.status if found.status else '-'}")
        console.print(f"  Created: {found.created or '-'}")
        console.print(f"  Updated: {found.updated or '-'}")
        console.print(f"  Closed:  {'yes' if found.is_closed else 'no'}")
        if found.issue_url:
            console.print(f"  URL:     {found.issue_url}")
        if found.description:
            console.print()
            console.print(found.description)


@app.command()
def statuses(
    task_id: str = typer.Argument(..., help="Task ID (or custom task ID)."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """List the statuses a task can be moved to."""
    with _open_repository(config_dir, verbose) as repository:
        table = Table(title=f"Statuses for {task_id}")
        table.add_column("ID", style="cyan")
        table.add_column("Status", style="magenta")
        table.add_column("Type")
        for state in repository.get_available_task_states(task_id):
            table.add_row(state.id or "-", state.status, state.type or "-")
        console.print(table)


@app.command(name="set-status")
def set_status(
    task_id: str = typer.Argument(..., help="Task ID (or custom task ID)."),
    status: str = typer.Argument(..., help="Status label, e.g. 'in progress'."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Move a task to another status."""
    with _open_repository(config_dir, verbose) as repository:
        available = repository.get_available_task_states(task_id)
        state = next((s for s in available if s.status.lower() == status.lower()), None)
        if state is None:
            console.print(f"[red]Unknown status '{status}'.[/red]")
            console.print("Available: " + ", ".join(s.status for s in available))
            raise typer.Exit(code=1)

        repository.set_task_state(task_id, state)
        console.print(f"[green]✓ Task {task_id} moved to '{state.status}'[/green]")


@app.command(name="log-time")
def log_time(
    task_id: str = typer.Argument(..., help="Task ID (or custom task ID)."),
    time_spent: str = typer.Argument(..., help="Time spent, e.g. '3h 15m'."),
    comment: str = typer.Option("", "--comment", help="Ignored; ClickUp does not store it."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Track time spent on a task."""
    with _open_repository(config_dir, verbose) as repository:
        repository.update_time_spent(task_id, time_spent, comment)
        console.print(f"[green]✓ Tracked {time_spent} on task {task_id}[/green]")


@app.command(name="test-connection")
def test_connection(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help=CONFIG_DIR_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """Check that the stored API token works."""
    with _open_repository(config_dir, verbose) as repository:
        repository.test_connection()
        console.print("[green]✓ Connected to ClickUp[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"ClickUp Tasks v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
