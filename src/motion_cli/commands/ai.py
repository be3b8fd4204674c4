"""Run the AI tools from the terminal and render their markdown."""

import typer

from motion_cli.tools import (
    create_task,
    get_task_summary,
    search_projects,
    search_tasks,
    update_task_status,
)
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.formatters import print_markdown

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="AI tool commands")


@app.command("search-tasks")
@command_wrapper
async def search_tasks_command(
    query: str = typer.Argument(..., help='e.g. "urgent tasks assigned to alice"'),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum number of tasks"),
    workspace: str | None = typer.Option(None, "--workspace", "-w", help="Workspace ID"),
) -> None:
    """Search tasks with a natural language query."""
    if limit is None and workspace is None:
        result = await search_tasks(query)
    else:
        result = await search_tasks(
            {"searchQuery": query, "limit": limit, "workspaceId": workspace}
        )
    print_markdown(result)


@app.command("create-task")
@command_wrapper
async def create_task_command(
    name: str = typer.Argument(..., help="Task name"),
    description: str | None = typer.Option(None, "--description", "-d"),
    priority: str | None = typer.Option(None, "--priority", "-p", help='e.g. "urgent", "low"'),
    duration: int | None = typer.Option(None, "--duration", help="Duration in minutes"),
    due: str | None = typer.Option(None, "--due", help='e.g. "tomorrow", "next friday"'),
    project: str | None = typer.Option(None, "--project", help="Project name"),
) -> None:
    """Create a task from loosely specified fields."""
    result = await create_task(
        {
            "taskName": name,
            "taskDescription": description,
            "priority": priority,
            "durationMinutes": duration,
            "dueDate": due,
            "projectName": project,
        }
    )
    print_markdown(result)


@app.command("update-task")
@command_wrapper
async def update_task_command(
    task: str = typer.Argument(..., help="Task ID or name"),
    update: str = typer.Argument(..., help='e.g. "mark as done", "set urgent"'),
) -> None:
    """Update a task with a natural language phrase."""
    result = await update_task_status({"taskIdentifier": task, "updateQuery": update})
    print_markdown(result)


@app.command("summary")
@command_wrapper
async def summary_command(
    workspace: str | None = typer.Option(None, "--workspace", "-w", help="Workspace ID"),
    include_completed: bool = typer.Option(
        True, "--include-completed/--open-only", help="Count completed tasks"
    ),
) -> None:
    """Summarise your tasks with recommendations."""
    result = await get_task_summary(
        {"workspaceId": workspace, "includeCompleted": include_completed}
    )
    print_markdown(result)


@app.command("search-projects")
@command_wrapper
async def search_projects_command(
    query: str | None = typer.Argument(None, help="Text to look for"),
    workspace: str | None = typer.Option(None, "--workspace", "-w", help="Workspace ID"),
    active_only: bool = typer.Option(False, "--active-only", help="Hide finished projects"),
) -> None:
    """Search projects with task counts and progress estimates."""
    result = await search_projects(
        {"searchQuery": query, "workspaceId": workspace, "activeOnly": active_only}
    )
    print_markdown(result)
