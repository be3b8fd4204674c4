"""AI tool: update a task's priority or completion from a short phrase."""

from __future__ import annotations

import logging
from typing import Any

from motion_cli.api.client import get_client
from motion_cli.api.tasks import TasksAPI
from motion_cli.models import Task
from motion_cli.services.task_service import find_tasks
from motion_cli.tools.base import ToolParams, motion_tool, validate_params
from motion_cli.utils.errors import UPDATE_HINTS
from motion_cli.utils.nlp_parser import UpdateQuery, parse_update_query
from motion_cli.utils.presentation import priority_emoji

logger = logging.getLogger(__name__)

UPDATE_EXAMPLES = (
    "'mark as complete' or 'done'",
    "'set priority to high'",
    "'mark as in progress'",
    "'set as urgent'",
)


class UpdateTaskParams(ToolParams):
    """Parameters of the task update tool.

    Attributes:
        task_identifier: Task ID or (part of) its name
        update_query: Phrase such as "mark as done" or "set urgent"
    """

    task_identifier: str = ""
    update_query: str = ""


def no_match_message(identifier: str) -> str:
    return f'❌ No tasks found matching: "{identifier}"'


def ambiguous_match_message(identifier: str, tasks: list[Task]) -> str:
    lines = [f'⚠️ Found {len(tasks)} tasks matching "{identifier}". Please be more specific:', ""]
    lines.extend(f"{i}. {task.name} (ID: {task.id})" for i, task in enumerate(tasks, start=1))
    return "\n".join(lines)


def not_understood_message(update_query: str) -> str:
    lines = [f'❌ Could not understand the update: "{update_query}"', "", "Try phrases like:"]
    lines.extend(f"• {example}" for example in UPDATE_EXAMPLES)
    return "\n".join(lines)


def format_update_result(task: Task, before: Task, updates: UpdateQuery) -> str:
    """Describe what changed between *before* and the updated *task*."""
    changes = []
    if updates.priority is not None:
        old = before.priority.value if before.priority else "UNKNOWN"
        changes.append(
            f"{priority_emoji(updates.priority)} Priority: {old} → {updates.priority.value}"
        )
    if updates.completed is not None:
        old = "✅ Complete" if before.completed else "⏳ Incomplete"
        new = "✅ Complete" if updates.completed else "⏳ Incomplete"
        changes.append(f"Status: {old} → {new}")

    lines = [f'✅ Successfully updated task: "{task.name}"', ""]
    if changes:
        lines.append("**Changes made:**")
        lines.extend(changes)
        lines.append("")
    if updates.status:
        lines.append(
            f'ℹ️ Status change to "{updates.status}" was not applied: '
            "workspace statuses cannot be set from a phrase yet."
        )
        lines.append("")
    lines.append(f"🔗 Task ID: {task.id}")
    return "\n".join(lines)


@motion_tool("update task status", hints=UPDATE_HINTS)
async def update_task_status(params: dict[str, Any] | UpdateTaskParams) -> str:
    """Apply a natural-language update to a single task.

    Expected outcomes (no match, several matches, a phrase with no known
    keywords) are returned as guidance text rather than raised.
    """
    params = validate_params(UpdateTaskParams, params)
    if not params.task_identifier:
        raise ValueError("Task identifier (name or ID) is required")
    if not params.update_query:
        raise ValueError("Update query is required")
    logger.info("Updating task %r with %r", params.task_identifier, params.update_query)

    async with get_client() as client:
        tasks_api = TasksAPI(client)
        tasks = await find_tasks(tasks_api, params.task_identifier)
        if not tasks:
            return no_match_message(params.task_identifier)
        if len(tasks) > 1:
            return ambiguous_match_message(params.task_identifier, tasks)

        task = tasks[0]
        updates = parse_update_query(params.update_query)
        if updates.is_empty:
            return not_understood_message(params.update_query)
        logger.debug("Parsed updates: %s", updates)

        if updates.status:
            logger.info(
                "Status update to %r requested but not applied (needs workspace status mapping)",
                updates.status,
            )

        patch = updates.to_task_update()
        if patch.is_empty:
            updated = task
        else:
            updated = await tasks_api.update_task(task.id, patch)

    return format_update_result(updated, task, updates)
