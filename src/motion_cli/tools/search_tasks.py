"""AI tool: search Motion tasks with a natural language query."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Union

from pydantic import (
    Discriminator,
    RootModel,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from motion_cli.api.client import get_client
from motion_cli.api.tasks import TasksAPI
from motion_cli.models import Task
from motion_cli.tools.base import (
    ToolParams,
    motion_tool,
    plural,
    truncate,
    validation_message,
)
from motion_cli.utils.errors import SEARCH_HINTS
from motion_cli.utils.nlp_parser import SearchQuery, parse_search_query
from motion_cli.utils.presentation import priority_emoji, sort_tasks
from motion_cli.utils.ui.formatters import format_date

logger = logging.getLogger(__name__)

DESCRIPTION_PREVIEW = 100


class SearchTasksParams(ToolParams):
    """Parameters of the task search tool.

    Attributes:
        search_query: Free text such as "urgent tasks assigned to alice"
        limit: Maximum number of tasks to return, ignored when not positive
        workspace_id: Restrict the search to one workspace
    """

    search_query: str
    limit: int | None = None
    workspace_id: str | None = None

    @field_validator("search_query")
    @classmethod
    def _query_not_blank(cls, value: str) -> str:
        if not value:
            raise ValueError("Search query is required")
        return value


class QueryText(RootModel[str]):
    """Shorthand input: the bare search query."""


def _input_kind(value: Any) -> str:
    if isinstance(value, (str, QueryText)):
        return "query"
    return "params"


SearchTasksInput = Annotated[
    Union[
        Annotated[QueryText, Tag("query")],
        Annotated[SearchTasksParams, Tag("params")],
    ],
    Discriminator(_input_kind),
]

_input_adapter: TypeAdapter[QueryText | SearchTasksParams] = TypeAdapter(SearchTasksInput)


def normalize_search_input(value: str | dict | QueryText | SearchTasksParams) -> SearchTasksParams:
    """Turn either accepted input shape into ``SearchTasksParams``.

    Raises:
        ValueError: The query is missing or blank.
    """
    try:
        parsed = _input_adapter.validate_python(value)
        if isinstance(parsed, QueryText):
            parsed = SearchTasksParams(search_query=parsed.root)
    except ValidationError as e:
        raise ValueError(validation_message(e)) from e
    return parsed


def filter_tasks(tasks: list[Task], query: SearchQuery) -> list[Task]:
    """Apply the filters the tasks endpoint cannot apply itself."""
    if query.priority is not None:
        tasks = [task for task in tasks if task.priority is query.priority]
    if query.completed is not None:
        tasks = [task for task in tasks if task.completed is query.completed]
    if query.assignee_search:
        needle = query.assignee_search.lower()
        tasks = [
            task
            for task in tasks
            if any(needle in assignee.name.lower() for assignee in task.assignees)
        ]
    if query.project_search:
        needle = query.project_search.lower()
        tasks = [
            task for task in tasks if task.project_name and needle in task.project_name.lower()
        ]
    return tasks


def format_task_results(tasks: list[Task], query: SearchQuery) -> str:
    """Markdown listing of *tasks* followed by a summary of the applied filters."""
    if not tasks:
        return "No tasks found matching your search criteria."

    lines = [f"Found {plural(len(tasks), 'task')}:", ""]
    for index, task in enumerate(tasks, start=1):
        status_emoji = "✅" if task.completed else "⏳"
        priority = task.priority.value if task.priority else "UNKNOWN"
        lines.append(f"{index}. {status_emoji} **{task.name}**")
        lines.append(f"   {priority_emoji(task.priority)} Priority: {priority}")
        if task.project_name:
            lines.append(f"   📁 Project: {task.project_name}")
        if task.status and task.status.name:
            lines.append(f"   📊 Status: {task.status.name}")
        if task.due_date:
            overdue = " (⚠️ OVERDUE)" if task.is_overdue() else ""
            lines.append(f"   📅 Due: {format_date(task.due_date)}{overdue}")
        if task.assignees:
            names = ", ".join(assignee.name for assignee in task.assignees)
            lines.append(f"   👤 Assigned to: {names}")
        if task.description:
            lines.append(f"   📝 Description: {truncate(task.description, DESCRIPTION_PREVIEW)}")
        if task.scheduling_issue:
            lines.append("   ⚠️ Has scheduling issues")
        lines.append(f"   🔗 ID: {task.id}")
        lines.append("")

    if query.name:
        lines.append(f'🔍 Searched for tasks containing: "{query.name}"')
    if query.priority:
        lines.append(f"🎯 Filtered by priority: {query.priority.value}")
    if query.completed is not None:
        lines.append(f"📊 Filtered by status: {'Completed' if query.completed else 'Pending'}")
    return "\n".join(lines).rstrip("\n") + "\n"


@motion_tool("search Motion tasks", hints=SEARCH_HINTS)
async def search_tasks(params: str | dict | SearchTasksParams) -> str:
    """Search tasks; *params* is a bare query string or a parameter object."""
    params = normalize_search_input(params)
    logger.info(
        "Searching tasks: query=%r limit=%s workspace=%s",
        params.search_query,
        params.limit,
        params.workspace_id,
    )

    query = parse_search_query(params.search_query)
    logger.debug("Parsed search parameters: %s", query.as_dict())

    async with get_client() as client:
        response = await TasksAPI(client).list_tasks(
            name=query.name or None,
            workspace_id=params.workspace_id,
        )

    tasks = sort_tasks(filter_tasks(response.tasks, query))
    if params.limit and params.limit > 0:
        tasks = tasks[: params.limit]
    return format_task_results(tasks, query)
