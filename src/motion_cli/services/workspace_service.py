"""Workspace service - aggregate projects across workspaces."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from motion_cli.api.client import APIClient
from motion_cli.api.projects import ProjectsAPI
from motion_cli.api.workspaces import WorkspacesAPI
from motion_cli.models import Project, Workspace

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceProjects:
    """A workspace and the projects that could be loaded for it.

    ``error`` holds the failure message when the project fetch failed, in
    which case ``projects`` is empty.
    """

    workspace: Workspace
    projects: list[Project] = field(default_factory=list)
    error: str | None = None


async def load_workspaces_with_projects(client: APIClient) -> list[WorkspaceProjects]:
    """Fetch every workspace and its projects, one workspace at a time.

    A failing workspace list aborts the whole load. A failing project list
    only empties that workspace: the error is logged and recorded on the
    entry, and the remaining workspaces are still loaded.
    """
    workspaces = await WorkspacesAPI(client).list_workspaces()
    projects_api = ProjectsAPI(client)

    results: list[WorkspaceProjects] = []
    for workspace in workspaces:
        try:
            projects = await projects_api.list_projects(workspace.id)
        except Exception as e:
            logger.error("Failed to load projects for workspace %s: %s", workspace.name, e)
            results.append(WorkspaceProjects(workspace, [], error=str(e)))
            continue
        results.append(WorkspaceProjects(workspace, projects))

    logger.info(
        "Loaded %d projects from %d workspaces",
        sum(len(entry.projects) for entry in results),
        len(results),
    )
    return results


async def load_all_projects(client: APIClient) -> list[tuple[Workspace, Project]]:
    """Flatten all workspaces into ``(workspace, project)`` pairs."""
    entries = await load_workspaces_with_projects(client)
    return [(entry.workspace, project) for entry in entries for project in entry.projects]


def filter_projects(
    pairs: list[tuple[Workspace | None, Project]], search_text: str | None
) -> list[tuple[Workspace | None, Project]]:
    """Keep pairs whose project name, description or workspace name contains *search_text*."""
    if not search_text or not search_text.strip():
        return list(pairs)
    needle = search_text.strip().lower()
    return [
        (workspace, project)
        for workspace, project in pairs
        if needle in project.name.lower()
        or needle in project.description.lower()
        or (workspace is not None and needle in workspace.name.lower())
    ]
