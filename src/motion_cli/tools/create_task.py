"""AI tool: create a Motion task from loosely specified fields."""

from __future__ import annotations

import logging
from typing import Any

from motion_cli.api.client import get_client
from motion_cli.api.projects import ProjectsAPI
from motion_cli.api.tasks import TasksAPI
from motion_cli.api.workspaces import WorkspacesAPI
from motion_cli.models import DeadlineType, Priority, Task, TaskCreate
from motion_cli.services.config_service import get_config_service
from motion_cli.services.task_service import match_project, parse_duration
from motion_cli.tools.base import ToolParams, motion_tool, validate_params
from motion_cli.utils.errors import CREATE_HINTS
from motion_cli.utils.nlp_parser import parse_natural_date, parse_priority_field
from motion_cli.utils.presentation import priority_emoji
from motion_cli.utils.ui.formatters import format_date

logger = logging.getLogger(__name__)


class CreateTaskParams(ToolParams):
    """Parameters of the task creation tool.

    Attributes:
        task_name: Title of the task (required)
        task_description: Optional description
        priority: Free-text priority ("urgent", "low")
        duration_minutes: Estimated duration, ignored when not positive
        due_date: Free-text due date ("tomorrow", "next friday", "2024-01-15")
        project_name: Name (or part of it) of the project to file under
    """

    task_name: str = ""
    task_description: str | None = None
    priority: str | None = None
    duration_minutes: int | None = None
    due_date: str | None = None
    project_name: str | None = None


def resolve_priority(text: str | None, default: Priority | None) -> Priority:
    """Parsed priority, else the configured default, else MEDIUM."""
    if text:
        parsed = parse_priority_field(text)
        if parsed is not None:
            return parsed
    return default or Priority.MEDIUM


def format_created_task(task: Task, notes: list[str]) -> str:
    lines = [f'✅ Successfully created task: "{task.name}"']
    if task.project_name:
        lines.append(f"📁 Project: {task.project_name}")
    if task.priority:
        lines.append(f"{priority_emoji(task.priority)} Priority: {task.priority.value}")
    if isinstance(task.duration, int) and task.duration > 0:
        lines.append(f"⏱️ Duration: {task.duration} minutes")
    elif task.duration == "REMINDER":
        lines.append("⏱️ Duration: reminder only")
    if task.due_date:
        lines.append(f"📅 Due: {format_date(task.due_date)}")
    if task.workspace:
        lines.append(f"🏢 Workspace: {task.workspace.name}")
    lines.append(f"🔗 Task ID: {task.id}")
    if notes:
        lines.append("")
        lines.extend(f"⚠️ {note}" for note in notes)
    return "\n".join(lines)


@motion_tool("create Motion task", hints=CREATE_HINTS)
async def create_task(params: dict[str, Any] | CreateTaskParams) -> str:
    """Create a task; unparseable due dates and unknown projects are noted, not fatal."""
    params = validate_params(CreateTaskParams, params)
    if not params.task_name:
        raise ValueError("Task name is required")
    logger.info("Creating task: %s", params.model_dump(exclude_none=True))

    defaults = get_config_service().config.defaults
    notes: list[str] = []

    priority = resolve_priority(params.priority, defaults.priority)

    if params.duration_minutes is not None and params.duration_minutes > 0:
        duration = params.duration_minutes
    else:
        duration = parse_duration(defaults.duration)

    due_date = None
    deadline_type = None
    if params.due_date:
        due_date = parse_natural_date(params.due_date)
        if due_date is None:
            logger.warning("Could not parse due date: %s", params.due_date)
            notes.append(f'Could not understand the due date "{params.due_date}"; it was not set.')
        else:
            deadline_type = DeadlineType.HARD if priority is Priority.ASAP else DeadlineType.SOFT

    async with get_client() as client:
        workspace_id = defaults.workspace_id
        if not workspace_id:
            workspace_id = await WorkspacesAPI(client).get_default_workspace_id()

        project_id = None
        if params.project_name:
            projects = await ProjectsAPI(client).list_projects(workspace_id)
            project = match_project(projects, params.project_name)
            if project is not None:
                logger.info("Found matching project: %s (%s)", project.name, project.id)
                project_id = project.id
            else:
                logger.warning(
                    "No matching project for %r; available: %s",
                    params.project_name,
                    ", ".join(p.name for p in projects),
                )
                notes.append(f'No project matching "{params.project_name}" was found.')
        elif defaults.project_id:
            project_id = defaults.project_id

        payload = TaskCreate(
            name=params.task_name,
            description=params.task_description or None,
            duration=duration,
            due_date=due_date,
            deadline_type=deadline_type,
            priority=priority,
            project_id=project_id,
            workspace_id=workspace_id,
        )
        created = await TasksAPI(client).create_task(payload)

    logger.info("Task created: %s", created.id)
    return format_created_task(created, notes)
