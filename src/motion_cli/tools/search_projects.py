"""AI tool: search Motion projects and report task progress per project."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from motion_cli.api.client import APIClient, get_client
from motion_cli.api.projects import ProjectsAPI
from motion_cli.api.tasks import TasksAPI
from motion_cli.models import Priority, Project, Workspace
from motion_cli.services.workspace_service import filter_projects, load_all_projects
from motion_cli.tools.base import ToolParams, motion_tool, plural, truncate, validate_params
from motion_cli.utils.errors import PROJECT_HINTS
from motion_cli.utils.presentation import (
    is_active_project,
    priority_emoji,
    project_progress,
    project_sort_key,
    sanitize_description,
)
from motion_cli.utils.ui.formatters import format_date, get_progress_bar

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW = 150


class SearchProjectsParams(ToolParams):
    """Parameters of the project search tool.

    Attributes:
        search_query: Text to look for in project names and descriptions
        workspace_id: Restrict to one workspace; all workspaces otherwise
        active_only: Drop finished, cancelled and archived projects
    """

    search_query: str | None = None
    workspace_id: str | None = None
    active_only: bool = False


async def task_count_line(tasks_api: TasksAPI, project: Project) -> list[str]:
    """Task totals and priority mix for *project*, or a notice if they can't be loaded."""
    try:
        response = await tasks_api.list_tasks(project_id=project.id)
    except Exception as e:
        logger.warning("Could not get task count for project %s: %s", project.id, e)
        return ["   📋 Tasks: Unable to fetch task count"]

    tasks = response.tasks
    completed = sum(1 for task in tasks if task.completed)
    line = f"   📋 Tasks: {len(tasks)} total, {completed} completed"
    if tasks:
        line += f" ({round(completed / len(tasks) * 100)}%)"
    lines = [line]

    counts = Counter(task.priority for task in tasks if task.priority is not None)
    breakdown = [
        f"{priority_emoji(priority)} {counts[priority]} {priority.value}"
        for priority in Priority
        if counts[priority]
    ]
    if breakdown:
        lines.append(f"   🎯 Priority: {', '.join(breakdown)}")
    return lines


async def format_project_results(
    client: APIClient, pairs: list[tuple[Workspace | None, Project]]
) -> str:
    if not pairs:
        return "No projects found matching your search criteria."

    tasks_api = TasksAPI(client)
    lines = [f"Found {plural(len(pairs), 'project')}:", ""]
    for index, (workspace, project) in enumerate(pairs, start=1):
        lines.append(f"{index}. **{project.name}**")
        if workspace is not None:
            lines.append(f"   🏢 Workspace: {workspace.name}")
        description = sanitize_description(project.description)
        if description:
            lines.append(f"   📝 Description: {truncate(description, DESCRIPTION_PREVIEW)}")
        if project.status and project.status.name:
            lines.append(f"   📊 Status: {project.status.name}")
        progress = project_progress(project)
        lines.append(f"   📈 Progress (estimate): {get_progress_bar(progress)} {round(progress * 100)}%")
        lines.extend(await task_count_line(tasks_api, project))
        if project.created_time:
            lines.append(f"   🕐 Created: {format_date(project.created_time)}")
        if project.updated_time:
            lines.append(f"   🔄 Updated: {format_date(project.updated_time)}")
        lines.append(f"   🔗 ID: {project.id}")
        lines.append("")
    return "\n".join(lines)


@motion_tool("search Motion projects", hints=PROJECT_HINTS)
async def search_projects(params: dict[str, Any] | SearchProjectsParams | None = None) -> str:
    """Find projects by text, in one workspace or across all of them."""
    params = validate_params(SearchProjectsParams, params)
    logger.info(
        "Searching projects: query=%r workspace=%s active_only=%s",
        params.search_query,
        params.workspace_id,
        params.active_only,
    )

    async with get_client() as client:
        if params.workspace_id:
            projects = await ProjectsAPI(client).list_projects(params.workspace_id)
            pairs: list[tuple[Workspace | None, Project]] = [(None, p) for p in projects]
        else:
            pairs = list(await load_all_projects(client))

        if not pairs:
            if params.workspace_id:
                return "No projects found in the specified workspace."
            return "No projects found. Create your first project in Motion to get started!"

        pairs = filter_projects(pairs, params.search_query)
        if params.active_only:
            pairs = [(w, p) for w, p in pairs if is_active_project(p)]
        pairs.sort(key=lambda pair: project_sort_key(pair[1]))

        result = await format_project_results(client, pairs)

    if params.search_query:
        result += f'\n🔍 Searched for projects containing: "{params.search_query}"'
    return result
