"""AI tool: statistics and recommendations over the user's tasks."""

from __future__ import annotations

import logging
from typing import Any

from motion_cli.api.client import get_client
from motion_cli.api.tasks import TasksAPI
from motion_cli.models import Priority
from motion_cli.services.task_service import TaskAnalysis, analyze_tasks
from motion_cli.tools.base import ToolParams, motion_tool, plural, validate_params
from motion_cli.utils.errors import SEARCH_HINTS
from motion_cli.utils.presentation import priority_emoji
from motion_cli.utils.ui.formatters import format_date

logger = logging.getLogger(__name__)

PREVIEW_COUNT = 5
TOP_PROJECTS = 5
URGENT_WARNING_THRESHOLD = 3
HIGH_COMPLETION = 0.8
LOW_COMPLETION = 0.3


class TaskSummaryParams(ToolParams):
    workspace_id: str | None = None
    include_completed: bool = True


def _percent(fraction: float) -> int:
    return round(fraction * 100)


def format_task_summary(analysis: TaskAnalysis) -> str:
    """Render *analysis* as the markdown summary report."""
    lines = ["# 📊 Motion Task Summary", "", "## 📈 Overall Statistics"]
    lines.append(f"• **Total Tasks:** {analysis.total_tasks}")
    lines.append(
        f"• **Completed:** {analysis.completed_tasks} ({_percent(analysis.completion_rate)}%)"
    )
    lines.append(f"• **Pending:** {analysis.pending_tasks}")
    if analysis.overdue_tasks:
        lines.append(f"• **⚠️ Overdue:** {analysis.overdue_tasks}")
    if analysis.scheduling_issues:
        lines.append(f"• **🚨 Scheduling Issues:** {analysis.scheduling_issues}")
    lines.append("")

    if analysis.todays_tasks:
        lines.append("## 🆕 Today's New Tasks")
        lines.append(f"Created {plural(len(analysis.todays_tasks), 'task')} today:")
        lines.append("")
        for index, task in enumerate(analysis.todays_tasks[:PREVIEW_COUNT], start=1):
            lines.append(f"{index}. {priority_emoji(task.priority)} **{task.name}**")
            if task.project_name:
                lines.append(f"   📁 {task.project_name}")
        if len(analysis.todays_tasks) > PREVIEW_COUNT:
            lines.append("")
            lines.append(f"... and {len(analysis.todays_tasks) - PREVIEW_COUNT} more")
        lines.append("")

    if analysis.urgent_tasks:
        lines.append("## 🚨 Urgent Tasks Requiring Attention")
        lines.append(f"You have {plural(len(analysis.urgent_tasks), 'urgent task')}:")
        lines.append("")
        for index, task in enumerate(analysis.urgent_tasks[:PREVIEW_COUNT], start=1):
            lines.append(f"{index}. 🔴 **{task.name}**")
            if task.due_date:
                overdue = " (OVERDUE)" if task.is_overdue() else ""
                lines.append(f"   📅 Due: {format_date(task.due_date)}{overdue}")
            if task.project_name:
                lines.append(f"   📁 {task.project_name}")
        if len(analysis.urgent_tasks) > PREVIEW_COUNT:
            lines.append("")
            lines.append(f"... and {len(analysis.urgent_tasks) - PREVIEW_COUNT} more")
        lines.append("")

    lines.append("## 🎯 Priority Breakdown")
    for priority in Priority:
        count = analysis.priority_breakdown.get(priority, 0)
        if count:
            lines.append(f"• {priority_emoji(priority)} **{priority.value}:** {count}")
    lines.append("")

    if analysis.project_breakdown:
        lines.append("## 📁 Top Projects by Task Count")
        for project, count in analysis.project_breakdown.most_common(TOP_PROJECTS):
            lines.append(f"• **{project}:** {plural(count, 'task')}")
        lines.append("")

    lines.append("## 💡 Recommendations")
    lines.extend(recommendations(analysis))
    return "\n".join(lines) + "\n"


def recommendations(analysis: TaskAnalysis) -> list[str]:
    tips = []
    if analysis.overdue_tasks:
        tips.append(
            f"• ⚠️ You have {plural(analysis.overdue_tasks, 'overdue task')}. "
            "Consider prioritizing these."
        )
    if len(analysis.urgent_tasks) > URGENT_WARNING_THRESHOLD:
        tips.append(
            f"• 🚨 You have {len(analysis.urgent_tasks)} urgent tasks. "
            "Consider if some can be reprioritized."
        )
    if analysis.scheduling_issues:
        verb = "task has" if analysis.scheduling_issues == 1 else "tasks have"
        tips.append(
            f"• 🗓️ {analysis.scheduling_issues} {verb} scheduling issues. "
            "Check Motion for conflicts."
        )
    rate = analysis.completion_rate
    if rate > HIGH_COMPLETION:
        tips.append(f"• 🎉 Great work! You've completed {_percent(rate)}% of your tasks.")
    elif rate < LOW_COMPLETION:
        tips.append(
            f"• 📈 Focus on completing more tasks. Current completion rate: {_percent(rate)}%"
        )
    return tips


@motion_tool("get task summary", hints=SEARCH_HINTS)
async def get_task_summary(params: dict[str, Any] | TaskSummaryParams | None = None) -> str:
    """Summarise tasks, optionally limited to one workspace and to open tasks."""
    params = validate_params(TaskSummaryParams, params)
    logger.info(
        "Building task summary: workspace=%s include_completed=%s",
        params.workspace_id,
        params.include_completed,
    )

    async with get_client() as client:
        response = await TasksAPI(client).list_tasks(
            workspace_id=params.workspace_id,
            include_all_statuses=None if params.include_completed else False,
        )

    tasks = response.tasks
    if not params.include_completed:
        tasks = [task for task in tasks if not task.completed]
    if not tasks:
        return "📭 No tasks found. Time to create some new ones!"

    return format_task_summary(analyze_tasks(tasks))
