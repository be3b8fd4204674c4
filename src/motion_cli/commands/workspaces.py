"""Workspace commands."""

import typer
from rich.table import Table

from motion_cli.api.client import get_client
from motion_cli.services.workspace_service import WorkspaceProjects, load_workspaces_with_projects
from motion_cli.utils.errors import DEFAULT_HINTS
from motion_cli.utils.presentation import project_status_icon, sort_projects
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.console import get_console
from motion_cli.utils.ui.formatters import format_output, format_warning

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Workspace commands")
console = get_console()


def entry_to_dict(entry: WorkspaceProjects) -> dict:
    return {
        "id": entry.workspace.id,
        "name": entry.workspace.name,
        "type": entry.workspace.type,
        "team_id": entry.workspace.team_id,
        "projects": [{"id": p.id, "name": p.name} for p in sort_projects(entry.projects)],
        "error": entry.error,
    }


@app.command("list")
@command_wrapper(action="load workspaces", hints=DEFAULT_HINTS)
async def list_workspaces(
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List workspaces with their projects."""
    async with get_client() as client:
        entries = await load_workspaces_with_projects(client)

    if output != "pretty":
        format_output([entry_to_dict(entry) for entry in entries], output)
        return
    if not entries:
        console.print("[yellow]No workspaces found[/yellow]")
        return

    for entry in entries:
        kind = "Team" if entry.workspace.is_team else "Individual"
        console.print(
            f"🏢 [bold]{entry.workspace.name}[/bold] [dim]({kind}, {entry.workspace.id})[/dim]"
        )
        if entry.error:
            console.print(f"   [red]Could not load projects: {entry.error}[/red]")
        elif not entry.projects:
            console.print("   [dim]No projects[/dim]")
        else:
            table = Table(show_header=True, header_style="bold magenta")
            table.add_column("", width=2)
            table.add_column("Project")
            table.add_column("Status")
            table.add_column("ID", style="dim")
            for project in sort_projects(entry.projects):
                status = project.status.name if project.status else "No status"
                table.add_row(project_status_icon(project), project.name, status, project.id)
            console.print(table)
        console.print()

    failed = sum(1 for entry in entries if entry.error)
    if failed:
        format_warning(f"Projects of {failed} workspace(s) could not be loaded; see the log file")
