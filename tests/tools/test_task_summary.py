"""Tests for the task summary tool."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from conftest import make_task
from motion_cli.models import Task
from motion_cli.services.task_service import analyze_tasks
from motion_cli.tools.task_summary import format_task_summary, get_task_summary, recommendations

NOW = datetime(2024, 6, 1, 15, 0, tzinfo=UTC)


def task(**kw):
    kw.setdefault("id", "t")
    kw.setdefault("name", "Task")
    return Task(**kw)


class TestRecommendations:
    def test_low_completion(self):
        tips = recommendations(analyze_tasks([task()], NOW))
        assert tips == ["• 📈 Focus on completing more tasks. Current completion rate: 0%"]

    def test_high_completion(self):
        tips = recommendations(analyze_tasks([task(completed=True)] * 9 + [task()], NOW))
        assert tips == ["• 🎉 Great work! You've completed 90% of your tasks."]

    def test_middle_completion_has_no_rate_tip(self):
        assert recommendations(analyze_tasks([task(completed=True), task()], NOW)) == []

    def test_overdue_urgent_and_scheduling(self):
        tasks = [task(priority="ASAP", due_date=NOW - timedelta(days=1))] + [
            task(priority="ASAP", scheduling_issue=True) for _ in range(3)
        ]
        tips = recommendations(analyze_tasks(tasks, NOW))
        assert tips[0] == "• ⚠️ You have 1 overdue task. Consider prioritizing these."
        assert tips[1].startswith("• 🚨 You have 4 urgent tasks.")
        assert tips[2] == "• 🗓️ 3 tasks have scheduling issues. Check Motion for conflicts."

    def test_three_urgent_is_not_a_warning(self):
        tasks = [task(priority="ASAP") for _ in range(3)] + [task(completed=True)] * 2
        assert not any("urgent" in tip for tip in recommendations(analyze_tasks(tasks, NOW)))


class TestFormatTaskSummary:
    def test_sections(self):
        tasks = [
            task(name=f"New {i}", created_time=NOW - timedelta(minutes=i), priority="LOW")
            for i in range(7)
        ]
        text = format_task_summary(analyze_tasks(tasks, NOW))

        assert text.startswith("# 📊 Motion Task Summary\n\n## 📈 Overall Statistics")
        assert "• **Total Tasks:** 7" in text
        assert "• **Completed:** 0 (0%)" in text
        assert "Created 7 tasks today:" in text
        assert "5. 🔵 **New 4**" in text
        assert "**New 5**" not in text
        assert "... and 2 more" in text
        assert "• 🔵 **LOW:** 7" in text
        assert "• **No Project:** 7 tasks" in text
        assert "## 💡 Recommendations" in text
        assert "Overdue" not in text

    def test_top_projects_limited(self):
        tasks = [
            task(project={"id": f"p{i}", "name": f"Project {i}"}) for i in range(7) for _ in range(i + 1)
        ]
        text = format_task_summary(analyze_tasks(tasks, NOW))
        assert "• **Project 6:** 7 tasks" in text
        assert "Project 1:" not in text


@pytest.mark.asyncio
async def test_summary_end_to_end(fake_motion):
    fake_motion.tasks = [
        make_task("t1", "Open", priority="ASAP"),
        make_task("t2", "Done", completed=True),
    ]

    text = await get_task_summary()

    assert "• **Total Tasks:** 2" in text
    assert "• **Completed:** 1 (50%)" in text
    assert "## 🚨 Urgent Tasks Requiring Attention" in text
    assert "1. 🔴 **Open**" in text
    assert "includeAllStatuses" not in fake_motion.requests_to("GET", "/tasks")[0].url.params


@pytest.mark.asyncio
async def test_open_only(fake_motion):
    fake_motion.tasks = [make_task("t1", "Open"), make_task("t2", "Done", completed=True)]

    text = await get_task_summary({"includeCompleted": False, "workspaceId": "ws-1"})

    params = fake_motion.requests_to("GET", "/tasks")[0].url.params
    assert params["includeAllStatuses"] == "false"
    assert params["workspaceId"] == "ws-1"
    assert "• **Total Tasks:** 1" in text


@pytest.mark.asyncio
async def test_no_tasks(fake_motion):
    assert await get_task_summary({}) == "📭 No tasks found. Time to create some new ones!"
