"""Project commands."""

import typer
from rich.table import Table

from motion_cli.api.client import get_client
from motion_cli.api.projects import ProjectsAPI
from motion_cli.api.workspaces import WorkspacesAPI
from motion_cli.models import Project, Workspace
from motion_cli.services.workspace_service import filter_projects, load_all_projects
from motion_cli.utils.errors import PROJECT_HINTS
from motion_cli.utils.presentation import (
    is_active_project,
    project_progress,
    project_sort_key,
    project_status_icon,
    sanitize_description,
)
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.console import get_console
from motion_cli.utils.ui.formatters import (
    format_date,
    format_output,
    format_relative_time,
    get_completion_color,
    get_progress_bar,
    print_markdown,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Project commands")
console = get_console()


def project_to_dict(workspace: Workspace | None, project: Project) -> dict:
    return {
        "id": project.id,
        "name": project.name,
        "workspace": workspace.name if workspace else None,
        "workspace_id": project.workspace_id,
        "status": project.status.name if project.status else None,
        "progress_estimate": round(project_progress(project), 2),
        "updated": project.updated_time.isoformat() if project.updated_time else None,
    }


def render_project_table(pairs: list[tuple[Workspace, Project]]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("", width=2)
    table.add_column("Project")
    table.add_column("Workspace")
    table.add_column("Status")
    table.add_column("Progress (est.)")
    table.add_column("Updated")

    for workspace, project in pairs:
        progress = project_progress(project)
        table.add_row(
            project_status_icon(project),
            project.name,
            workspace.name,
            project.status.name if project.status else "No status",
            f"[{get_completion_color(progress)}]{get_progress_bar(progress)}[/]",
            format_relative_time(project.updated_time) or "-",
        )
    console.print(table)


@app.command("search")
@command_wrapper(action="load projects", hints=PROJECT_HINTS)
async def search_projects(
    text: str | None = typer.Argument(
        None, help="Text to match in project name, description or workspace"
    ),
    active_only: bool = typer.Option(False, "--active-only", help="Hide finished projects"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Search projects across all workspaces."""
    async with get_client() as client:
        pairs = await load_all_projects(client)

    pairs = filter_projects(pairs, text)
    if active_only:
        pairs = [(w, p) for w, p in pairs if is_active_project(p)]
    pairs.sort(key=lambda pair: project_sort_key(pair[1]))

    if output != "pretty":
        format_output([project_to_dict(w, p) for w, p in pairs], output)
        return
    if not pairs:
        hint = "Try adjusting your search terms" if text else "No projects available"
        console.print(f"[yellow]No projects found.[/yellow] [dim]{hint}[/dim]")
        return
    render_project_table(pairs)


def project_detail_markdown(project: Project, workspace: Workspace | None) -> str:
    description = sanitize_description(project.description)
    return "\n".join(
        [
            f"# {project.name}",
            "",
            f"**Workspace:** {workspace.name if workspace else 'Unknown'}",
            "",
            f"**Status:** {project.status.name if project.status else 'No status'}",
            "",
            f"**Created:** {format_date(project.created_time) or '-'}",
            "",
            f"**Updated:** {format_date(project.updated_time) or '-'}",
            "",
            "## Description",
            "",
            description or "No description available",
            "",
            "---",
            "",
            f"**Project ID:** `{project.id}`",
            "",
            f"**Workspace ID:** `{project.workspace_id or '-'}`",
        ]
    )


@app.command("show")
@command_wrapper(action="load project", hints=PROJECT_HINTS)
async def show_project(
    project_id: str = typer.Argument(..., help="Project ID"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """Show project details."""
    async with get_client() as client:
        project = await ProjectsAPI(client).get_project(project_id)
        workspaces = await WorkspacesAPI(client).list_workspaces()

    workspace = next((w for w in workspaces if w.id == project.workspace_id), None)
    if output != "pretty":
        format_output(project_to_dict(workspace, project), output)
        return
    print_markdown(project_detail_markdown(project, workspace))
