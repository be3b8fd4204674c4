"""Motion domain models.

Pydantic snapshots of the entities returned by the Motion API, plus the
request bodies used to create and patch tasks.
"""

from .core import (
    Assignee,
    DeadlineType,
    Label,
    ListMeta,
    Priority,
    Project,
    Status,
    Task,
    TaskCreate,
    TaskList,
    TaskProject,
    TaskUpdate,
    User,
    Workspace,
)
from .config_models import APIConfig, AppConfig, DefaultsConfig

__all__ = [
    # Entities
    "Assignee",
    "Label",
    "Project",
    "Status",
    "Task",
    "TaskProject",
    "User",
    "Workspace",
    # Enums
    "DeadlineType",
    "Priority",
    # API envelopes and payloads
    "ListMeta",
    "TaskCreate",
    "TaskList",
    "TaskUpdate",
    # Configuration
    "APIConfig",
    "AppConfig",
    "DefaultsConfig",
]
