"""AI-callable tools. Each takes a parameter object and returns markdown."""

from motion_cli.tools.create_task import CreateTaskParams, create_task
from motion_cli.tools.search_projects import SearchProjectsParams, search_projects
from motion_cli.tools.search_tasks import (
    SearchTasksParams,
    normalize_search_input,
    search_tasks,
)
from motion_cli.tools.task_summary import TaskSummaryParams, get_task_summary
from motion_cli.tools.update_task import UpdateTaskParams, update_task_status

__all__ = [
    "CreateTaskParams",
    "SearchProjectsParams",
    "SearchTasksParams",
    "TaskSummaryParams",
    "UpdateTaskParams",
    "create_task",
    "get_task_summary",
    "normalize_search_input",
    "search_projects",
    "search_tasks",
    "update_task_status",
]
