"""Display heuristics for Motion projects and tasks.

Everything here derives secondary, non-authoritative attributes (bucket,
order, progress estimate, cleaned text) from an entity snapshot. Nothing
here calls the API or modifies the entity.

Progress values are heuristic display signals in ``[0.0, 1.0]``, inferred
from status names, update recency and due dates. They are not completion
percentages and must not be presented as such.

Status names are free text defined per workspace. Only the English keywords
below are recognised; any other name (custom or non-English) falls into the
lowest-confidence bucket.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from motion_cli.models import Priority, Project, Status, Task

INACTIVE_STATUS_KEYWORDS = (
    "completed",
    "complete",
    "done",
    "finished",
    "cancelled",
    "canceled",
    "archived",
    "closed",
    "resolved",
    "ended",
)

IN_PROGRESS_KEYWORDS = ("progress", "active", "current")
PLANNED_KEYWORDS = ("todo", "planned", "ready", "next")
BACKLOG_KEYWORDS = ("backlog", "future", "someday")
COMPLETED_KEYWORDS = ("completed", "complete", "done", "finished")

# Ordered: first matching group wins.
STATUS_BUCKETS: tuple[tuple[tuple[str, ...], int], ...] = (
    (IN_PROGRESS_KEYWORDS, 1),
    (PLANNED_KEYWORDS, 2),
    (BACKLOG_KEYWORDS, 3),
)
DEFAULT_STATUS_BUCKET = 2
UNKNOWN_STATUS_BUCKET = 4
NO_STATUS_BUCKET = 3

PRIORITY_ORDER = {
    Priority.ASAP: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}
UNKNOWN_PRIORITY_ORDER = 4

TASK_PRIORITY_PROGRESS = {
    Priority.ASAP: 0.8,
    Priority.HIGH: 0.6,
    Priority.MEDIUM: 0.4,
    Priority.LOW: 0.2,
}
DEFAULT_TASK_PROGRESS = 0.3

PRIORITY_EMOJI = {
    Priority.ASAP: "🔴",
    Priority.HIGH: "🟠",
    Priority.MEDIUM: "🟡",
    Priority.LOW: "🔵",
}

_TAG = re.compile(r"<[^>]*>")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def _now(now: datetime | None) -> datetime:
    return now or datetime.now(UTC)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def sanitize_description(description: str | None) -> str:
    """Strip HTML tags and decode the five common entities.

    >>> sanitize_description("<p>Hello&nbsp;<b>World</b></p>")
    'Hello World'
    """
    if not description:
        return ""
    text = _TAG.sub("", description)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text.strip()


def is_active_project(project: Project) -> bool:
    """A project is active unless its status is resolved or reads as finished."""
    status = project.status
    if status is None:
        return True
    name = status.name.lower()
    return not _contains_any(name, INACTIVE_STATUS_KEYWORDS) and not status.is_resolved_status


def status_sort_priority(status: Status | None, default: int = NO_STATUS_BUCKET) -> int:
    """Ordinal bucket of a status name: 1 in progress ... 4 unrecognised.

    Args:
        status: Status of the project or task
        default: Bucket for entities without a status

    Returns:
        Bucket number, lower sorts first
    """
    if status is None:
        return default
    name = status.name.lower()
    for keywords, bucket in STATUS_BUCKETS:
        if _contains_any(name, keywords):
            return bucket
    if status.is_default_status:
        return DEFAULT_STATUS_BUCKET
    return UNKNOWN_STATUS_BUCKET


def project_sort_key(project: Project) -> tuple:
    """Status bucket ascending, then most recently updated first."""
    updated = project.updated_time.timestamp() if project.updated_time else float("-inf")
    return (status_sort_priority(project.status), -updated)


def sort_projects(projects: Iterable[Project]) -> list[Project]:
    return sorted(projects, key=project_sort_key)


def priority_order(priority: Priority | None) -> int:
    return PRIORITY_ORDER.get(priority, UNKNOWN_PRIORITY_ORDER)


def task_sort_key(task: Task) -> tuple:
    """Open before completed, then priority, then dated before undated, then newest."""
    due = task.due_date.timestamp() if task.due_date else 0.0
    created = task.created_time.timestamp() if task.created_time else float("-inf")
    return (
        task.completed,
        priority_order(task.priority),
        task.due_date is None,
        due,
        -created,
    )


def sort_tasks(tasks: Iterable[Task]) -> list[Task]:
    """Return *tasks* in display order (see ``task_sort_key``)."""
    return sorted(tasks, key=task_sort_key)


def project_progress(project: Project, now: datetime | None = None) -> float:
    """Heuristic progress estimate for a project, between 0.0 and 1.0."""
    status = project.status
    if status is None:
        return 0.2
    name = status.name.lower()

    if status.is_resolved_status or _contains_any(name, COMPLETED_KEYWORDS):
        return 1.0

    if _contains_any(name, IN_PROGRESS_KEYWORDS):
        now = _now(now)
        progress = 0.3
        if project.updated_time is not None:
            since_update = now - project.updated_time
            if since_update < timedelta(days=1):
                progress = max(progress, 0.8)
            elif since_update < timedelta(days=3):
                progress = max(progress, 0.6)
            elif since_update < timedelta(days=7):
                progress = max(progress, 0.5)
        if project.created_time is not None and now - project.created_time > timedelta(days=30):
            progress = min(progress + 0.2, 0.9)
        return progress

    if _contains_any(name, PLANNED_KEYWORDS) or status.is_default_status:
        return 0.1
    if _contains_any(name, BACKLOG_KEYWORDS):
        return 0.05
    return 0.2


def task_progress(task: Task, now: datetime | None = None) -> float:
    """Heuristic progress/urgency signal for a task, between 0.0 and 1.0.

    Completed tasks are full; open tasks with a near or past due date score
    high so they stand out; otherwise the priority decides.
    """
    if task.completed or (task.status is not None and task.status.is_resolved_status):
        return 1.0

    if task.due_date is not None:
        now = _now(now)
        if task.is_overdue(now):
            return 0.9
        remaining = task.due_date - now
        if remaining < timedelta(days=1):
            return 0.8
        if remaining < timedelta(days=3):
            return 0.6

    return TASK_PRIORITY_PROGRESS.get(task.priority, DEFAULT_TASK_PROGRESS)


def priority_emoji(priority: Priority | str | None) -> str:
    try:
        return PRIORITY_EMOJI[Priority(priority)]
    except ValueError:
        return "⚪"


def project_status_icon(project: Project) -> str:
    if project.status is None:
        return "📋"
    if project.status.is_resolved_status:
        return "✅"
    if project.status.is_default_status:
        return "🔄"
    return "📋"

