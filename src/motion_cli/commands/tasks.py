"""Task commands: list, capture and test."""

from datetime import datetime

import typer
from rich.table import Table

from motion_cli.api.client import get_client
from motion_cli.api.tasks import TasksAPI
from motion_cli.api.workspaces import WorkspacesAPI
from motion_cli.models import DeadlineType, Priority, Task, TaskCreate
from motion_cli.services.config_service import get_config_service
from motion_cli.services.task_service import parse_duration
from motion_cli.utils.errors import CREATE_HINTS, SEARCH_HINTS
from motion_cli.utils.nlp_parser import parse_natural_date
from motion_cli.utils.presentation import sort_tasks, task_progress
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.console import get_console
from motion_cli.utils.ui.formatters import (
    PRIORITY_STYLES,
    format_date,
    format_output,
    format_success,
    get_completion_color,
    get_progress_bar,
)

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task commands")
console = get_console()

TASK_URL = "https://app.usemotion.com/tasks/{task_id}"
TEST_TASK_NAME = "Test Task from motion-cli"


def task_to_dict(task: Task) -> dict:
    """Plain representation used by ``--output json|yaml``."""
    return {
        "id": task.id,
        "name": task.name,
        "priority": task.priority.value if task.priority else None,
        "completed": task.completed,
        "status": task.status.name if task.status else None,
        "project": task.project_name,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "assignees": [assignee.name for assignee in task.assignees],
        "scheduling_issue": task.scheduling_issue,
        "url": TASK_URL.format(task_id=task.id),
    }


def render_task_table(tasks: list[Task]) -> None:
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("", width=2)
    table.add_column("Task")
    table.add_column("Priority")
    table.add_column("Project")
    table.add_column("Status")
    table.add_column("Due")
    table.add_column("Assignees")
    table.add_column("Urgency")

    for task in tasks:
        marker = "✓" if task.completed else ("⚠" if task.scheduling_issue else "")
        priority = task.priority.value if task.priority else "-"
        style = PRIORITY_STYLES.get(priority, "")
        due = format_date(task.due_date) or "-"
        if task.is_overdue():
            due = f"[red]{due}[/red]"
        progress = task_progress(task)
        table.add_row(
            marker,
            task.name,
            f"[{style}]{priority}[/{style}]" if style else priority,
            task.project_name or "-",
            task.status.name if task.status else "-",
            due,
            ", ".join(assignee.name for assignee in task.assignees) or "-",
            f"[{get_completion_color(1 - progress)}]{get_progress_bar(progress)}[/]",
        )

    console.print(table)
    console.print(f"[dim]{len(tasks)} tasks[/dim]")


@app.command("list")
@command_wrapper(action="load tasks", hints=SEARCH_HINTS)
async def list_tasks(
    workspace: str | None = typer.Option(None, "--workspace", "-w", help="Workspace ID"),
    query: str | None = typer.Option(None, "--query", "-q", help="Filter by task name"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """List tasks, open and most urgent first."""
    async with get_client() as client:
        response = await TasksAPI(client).list_tasks(workspace_id=workspace, name=query)

    tasks = sort_tasks(response.tasks)
    if output == "pretty":
        render_task_table(tasks)
    else:
        format_output([task_to_dict(task) for task in tasks], output)


def _parse_due(value: str | None) -> datetime | None:
    if not value:
        return None
    due = parse_natural_date(value)
    if due is None:
        raise ValueError(f"Could not understand due date: {value}")
    return due


async def _create(payload: TaskCreate) -> Task:
    defaults = get_config_service().config.defaults
    async with get_client() as client:
        if payload.workspace_id is None:
            workspace_id = defaults.workspace_id
            if not workspace_id:
                workspace_id = await WorkspacesAPI(client).get_default_workspace_id()
            payload = payload.model_copy(update={"workspace_id": workspace_id})
        return await TasksAPI(client).create_task(payload)


@app.command("capture")
@command_wrapper(action="create task", hints=CREATE_HINTS)
async def capture_task(
    name: str = typer.Argument(..., help="Task name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Markdown description"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority", "-p", help="Task priority"),
    due: str | None = typer.Option(None, "--due", help="Due date (e.g. 'tomorrow', '2024-01-15')"),
    deadline_type: DeadlineType = typer.Option(
        DeadlineType.SOFT, "--deadline-type", help="How strict the deadline is"
    ),
    duration: str | None = typer.Option(
        None, "--duration", help="Minutes, or NONE / REMINDER"
    ),
    project: str | None = typer.Option(None, "--project", help="Project ID"),
    workspace: str | None = typer.Option(None, "--workspace", "-w", help="Workspace ID"),
) -> None:
    """Create a task in Motion."""
    due_date = _parse_due(due)
    payload = TaskCreate(
        name=name,
        description=description.strip() if description and description.strip() else None,
        priority=priority,
        due_date=due_date,
        # SOFT is the API default and is left implicit
        deadline_type=deadline_type if deadline_type is not DeadlineType.SOFT else None,
        duration=parse_duration(duration),
        project_id=project,
        workspace_id=workspace,
    )
    task = await _create(payload)
    format_success(f'"{task.name}" has been added to Motion')
    console.print(f"[dim]ID:[/dim] {task.id}")


@app.command("test")
@command_wrapper(action="create test task", hints=CREATE_HINTS)
async def create_test_task() -> None:
    """Create a minimal test task to check the API connection."""
    task = await _create(TaskCreate(name=TEST_TASK_NAME, priority=Priority.MEDIUM))
    format_success(f'Test task "{task.name}" has been added to Motion')
    console.print(f"[dim]ID:[/dim] {task.id}")
