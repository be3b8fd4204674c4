"""Task service - lookups and statistics shared by commands and AI tools."""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from motion_cli.api.tasks import TasksAPI
from motion_cli.models import Priority, Project, Task

logger = logging.getLogger(__name__)

_TASK_ID = re.compile(r"^[a-f0-9-]{36}$", re.IGNORECASE)

DURATION_KEYWORDS = ("NONE", "REMINDER")


async def find_tasks(tasks_api: TasksAPI, identifier: str) -> list[Task]:
    """Find tasks by ID or by name.

    UUID-shaped identifiers are matched against task IDs; anything else is
    passed to the API's ``name`` filter.

    Args:
        tasks_api: Tasks endpoint wrapper
        identifier: Task ID or (part of) a task name

    Returns:
        Matching tasks, possibly empty
    """
    identifier = identifier.strip()
    if _TASK_ID.match(identifier):
        response = await tasks_api.list_tasks()
        return [task for task in response.tasks if task.id == identifier]

    response = await tasks_api.list_tasks(name=identifier)
    return response.tasks


def match_project(projects: list[Project], name: str) -> Project | None:
    """Pick the project a user meant by *name*.

    Exact case-insensitive match first, then the first project whose name
    contains *name* or is contained in it.
    """
    wanted = name.strip().lower()
    if not wanted:
        return None
    for project in projects:
        if project.name.lower() == wanted:
            return project
    for project in projects:
        candidate = project.name.lower()
        if wanted in candidate or (candidate and candidate in wanted):
            return project
    return None


def parse_duration(value: str | int | None) -> int | str | None:
    """Normalise a duration setting: minutes, ``NONE``, ``REMINDER`` or None."""
    if value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    value = value.strip()
    if value.upper() in DURATION_KEYWORDS:
        return value.upper()
    try:
        minutes = int(value)
    except ValueError:
        logger.warning("Ignoring invalid duration: %r", value)
        return None
    return minutes if minutes > 0 else None


@dataclass
class TaskAnalysis:
    """Aggregate statistics over a list of tasks."""

    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    overdue_tasks: int = 0
    scheduling_issues: int = 0
    todays_tasks: list[Task] = field(default_factory=list)
    urgent_tasks: list[Task] = field(default_factory=list)
    priority_breakdown: Counter = field(default_factory=Counter)
    project_breakdown: Counter = field(default_factory=Counter)

    @property
    def completion_rate(self) -> float:
        if not self.total_tasks:
            return 0.0
        return self.completed_tasks / self.total_tasks


def analyze_tasks(tasks: list[Task], now: datetime | None = None) -> TaskAnalysis:
    """Compute the statistics shown by the task summary.

    "Today" is the calendar day of *now* in its own timezone (local time by
    default).
    """
    now = now or datetime.now().astimezone()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)

    analysis = TaskAnalysis(total_tasks=len(tasks))
    for task in tasks:
        if task.completed:
            analysis.completed_tasks += 1
        else:
            analysis.pending_tasks += 1
        if task.is_overdue(now):
            analysis.overdue_tasks += 1
        if task.scheduling_issue:
            analysis.scheduling_issues += 1
        if task.created_time is not None and task.created_time >= start_of_day:
            analysis.todays_tasks.append(task)
        if task.priority is Priority.ASAP and not task.completed:
            analysis.urgent_tasks.append(task)
        if task.priority is not None:
            analysis.priority_breakdown[task.priority] += 1
        analysis.project_breakdown[task.project_name or "No Project"] += 1
    return analysis
