"""Motion entity models.

All entities are immutable snapshots of remote state: they are parsed from a
single API response, rendered, and thrown away. Field names are snake_case in
Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def _as_utc(value: datetime) -> datetime:
    # The API occasionally omits the offset; those instants are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


UTCDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class Priority(str, Enum):
    """Task priority, most urgent first."""

    ASAP = "ASAP"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class DeadlineType(str, Enum):
    """How firm a due date is."""

    HARD = "HARD"
    SOFT = "SOFT"
    NONE = "NONE"


class MotionModel(BaseModel):
    """Base for read-only snapshots coming from the API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class Status(MotionModel):
    """Workflow status attached to a task or project.

    Attributes:
        name: Display name, free text defined per workspace
        is_default_status: Whether new items start in this status
        is_resolved_status: Whether this status is terminal
    """

    name: str
    is_default_status: bool = False
    is_resolved_status: bool = False


class User(MotionModel):
    """Motion user (also used for task creators and assignees)."""

    id: str
    name: str = ""
    email: str | None = None


Assignee = User


class Label(MotionModel):
    name: str


class TaskProject(MotionModel):
    """Project reference embedded in a task payload.

    Some API responses capitalise these keys (``Name``, ``WorkspaceId``),
    so both spellings are accepted.
    """

    id: str
    name: str = Field(default="", validation_alias=AliasChoices("name", "Name"))
    description: str = Field(
        default="", validation_alias=AliasChoices("description", "Description")
    )
    workspace_id: str | None = Field(
        default=None, validation_alias=AliasChoices("workspaceId", "WorkspaceId")
    )


class Workspace(MotionModel):
    """Top-level container owned by a team or an individual.

    Attributes:
        id: Workspace identifier
        name: Display name
        team_id: Owning team identifier
        type: ``TEAM`` or ``INDIVIDUAL``
    """

    id: str
    name: str
    team_id: str | None = None
    type: str = "INDIVIDUAL"

    @property
    def is_team(self) -> bool:
        return self.type.upper() == "TEAM"


class Task(MotionModel):
    """Task snapshot as returned by ``GET /tasks``."""

    id: str
    name: str
    description: str = ""
    duration: int | str | None = None
    due_date: UTCDatetime | None = None
    deadline_type: DeadlineType | None = None
    completed: bool = False
    creator: User | None = None
    project: TaskProject | None = None
    status: Status | None = None
    workspace: Workspace | None = None
    labels: list[Label] = Field(default_factory=list)
    statuses: list[Status] = Field(default_factory=list)
    priority: Priority | None = None
    assignees: list[Assignee] = Field(default_factory=list)
    scheduled_start: UTCDatetime | None = None
    scheduled_end: UTCDatetime | None = None
    created_time: UTCDatetime | None = None
    scheduling_issue: bool = False

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return value or ""

    @property
    def project_name(self) -> str | None:
        if self.project and self.project.name:
            return self.project.name
        return None

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True when a due date exists, has passed, and the task is open."""
        if self.due_date is None or self.completed:
            return False
        now = now or datetime.now(UTC)
        return self.due_date < now


class Project(MotionModel):
    """Project snapshot as returned by ``GET /projects``."""

    id: str
    name: str
    description: str = ""
    workspace_id: str | None = None
    status: Status | None = None
    created_time: UTCDatetime | None = None
    updated_time: UTCDatetime | None = None

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return value or ""


class ListMeta(MotionModel):
    next_cursor: str | None = None
    page_size: int = 0


class TaskList(MotionModel):
    """Paginated response of ``GET /tasks``."""

    tasks: list[Task] = Field(default_factory=list)
    meta: ListMeta = Field(default_factory=ListMeta)


class PayloadModel(BaseModel):
    """Base for request bodies; dumped camelCase without unset fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class TaskCreate(PayloadModel):
    """Body of ``POST /tasks``.

    Attributes:
        name: Task title (required, non-blank)
        description: Markdown description
        duration: Minutes, or ``NONE`` / ``REMINDER``
        due_date: Absolute due instant
        deadline_type: Deadline strictness
        priority: Task priority
        assignee_id: User to assign
        project_id: Project to file the task under
        workspace_id: Workspace to create the task in
        labels: Label names
    """

    name: str
    description: str | None = None
    duration: int | str | None = None
    due_date: UTCDatetime | None = None
    deadline_type: DeadlineType | None = None
    priority: Priority | None = None
    assignee_id: str | None = None
    project_id: str | None = None
    workspace_id: str | None = None
    labels: list[str] | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Task name is required")
        return value


class TaskUpdate(PayloadModel):
    """Partial patch for ``PATCH /tasks/{id}``; only set fields are sent."""

    name: str | None = None
    description: str | None = None
    priority: Priority | None = None
    completed: bool | None = None
    due_date: UTCDatetime | None = None
    deadline_type: DeadlineType | None = None
    status: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()
