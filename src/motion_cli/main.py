"""Main entry point for motion CLI."""

from datetime import UTC, datetime

import typer

from motion_cli import __version__
from motion_cli.api.client import get_client
from motion_cli.api.tasks import TasksAPI
from motion_cli.api.users import UsersAPI
from motion_cli.api.workspaces import WorkspacesAPI
from motion_cli.commands import ai, config, projects, tasks, workspaces
from motion_cli.commands.decorators import command_wrapper
from motion_cli.models import Priority, TaskCreate
from motion_cli.utils.errors import DEFAULT_HINTS
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.console import get_console

app = typer.Typer(
    name="motion",
    cls=SuggestingGroup,
    help="Command-line interface and AI tools for the Motion task manager",
    no_args_is_help=True,
)

console = get_console()


app.add_typer(tasks.app, name="tasks", help="Task commands")
app.add_typer(projects.app, name="projects", help="Project commands")
app.add_typer(workspaces.app, name="workspaces", help="Workspace commands")
app.add_typer(ai.app, name="ai", help="Run the AI tools from the terminal")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]motion CLI[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper(action="run debug test", hints=DEFAULT_HINTS)
async def debug() -> None:
    """Check authentication, workspace access and task creation."""
    async with get_client() as client:
        console.print("[bold]1. Testing user authentication...[/bold]")
        user = await UsersAPI(client).get_me()
        console.print(f"[green]✓[/green] User authenticated: {user.name} {user.email or ''}")

        console.print("[bold]2. Testing workspace access...[/bold]")
        found = await WorkspacesAPI(client).list_workspaces()
        console.print(f"[green]✓[/green] Found {len(found)} workspaces")
        for index, workspace in enumerate(found, start=1):
            console.print(f"   {index}. {workspace.name} ({workspace.id}) - Type: {workspace.type}")

        console.print("[bold]3. Testing task creation...[/bold]")
        payload = TaskCreate(
            name=f"Debug Test Task - {datetime.now(UTC).isoformat()}",
            priority=Priority.LOW,
            workspace_id=found[0].id if found else None,
        )
        created = await TasksAPI(client).create_task(payload)
        console.print("[green]✓[/green] Test task created successfully!")
        console.print(f"   Task ID: {created.id}")
        console.print(f"   Task Name: {created.name}")
        if created.workspace:
            console.print(f"   Workspace: {created.workspace.name}")

    console.print()
    console.print("[bold green]All tests passed! Your Motion API integration is working.[/bold green]")


def main() -> None:
    """Run the CLI."""
    app()


if __name__ == "__main__":
    main()
