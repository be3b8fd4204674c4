"""Local natural language parsing for Motion queries.

Turns free text ("urgent tasks assigned to alice", "mark as done",
"next friday") into structured filters and updates. Matching is plain
case-insensitive substring search over small ordered keyword tables: the
first group that matches decides the field, later groups are not consulted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TypeVar

import dateparser

from motion_cli.models import Priority, TaskUpdate

T = TypeVar("T")

KeywordTable = tuple[tuple[tuple[str, ...], T], ...]

PRIORITY_KEYWORDS: KeywordTable[Priority] = (
    (("urgent", "asap", "critical"), Priority.ASAP),
    (("high priority", "important"), Priority.HIGH),
    (("low priority", "minor"), Priority.LOW),
    (("medium priority", "normal"), Priority.MEDIUM),
)

# Used when the whole string is a priority value ("high", "low").
PRIORITY_FIELD_KEYWORDS: KeywordTable[Priority] = (
    (("urgent", "asap", "critical"), Priority.ASAP),
    (("high", "important"), Priority.HIGH),
    (("low", "minor"), Priority.LOW),
    (("medium", "normal"), Priority.MEDIUM),
)

SEARCH_COMPLETION_KEYWORDS: KeywordTable[bool] = (
    (("completed", "done", "finished"), True),
    (("pending", "incomplete", "todo"), False),
)

# The negation group is checked before the completion group, so "incomplete"
# and "not done" never match the "complete"/"done" keywords they contain.
UPDATE_COMPLETION_KEYWORDS: KeywordTable[bool] = (
    (("incomplete", "reopen", "not done"), False),
    (("complete", "done", "finished"), True),
)

STATUS_LABEL_KEYWORDS: KeywordTable[str] = (
    (("in progress", "working on"), "In Progress"),
    (("todo", "to do"), "Todo"),
    (("review", "reviewing"), "Review"),
    (("blocked", "waiting"), "Blocked"),
)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

_IN_DAYS = re.compile(r"in (\d+) days?")
_NEXT_WEEKDAY = re.compile(rf"next ({'|'.join(WEEKDAYS)})")
_ASSIGNEE = re.compile(r"assigned to (\w+)", re.IGNORECASE)
_PROJECT = re.compile(r"in project (\w+)", re.IGNORECASE)
_FILLER = re.compile(r"\btasks?\b", re.IGNORECASE)
_ISO_DATE_ONLY = re.compile(r"\d{4}-\d{2}-\d{2}$")


def match_keywords(text: str, table: KeywordTable[T]) -> T | None:
    """Return the result of the first group with a keyword contained in *text*."""
    lowered = text.lower()
    for keywords, result in table:
        if any(keyword in lowered for keyword in keywords):
            return result
    return None


def _strip_keywords(text: str, table: KeywordTable) -> str:
    keywords = sorted({k for group, _ in table for k in group}, key=len, reverse=True)
    pattern = "|".join(re.escape(k) for k in keywords)
    return re.sub(pattern, "", text, flags=re.IGNORECASE)


def parse_priority(text: str, table: KeywordTable[Priority] = PRIORITY_KEYWORDS) -> Priority | None:
    """Priority mentioned in free text, or None when nothing matches."""
    return match_keywords(text, table)


def parse_priority_field(text: str) -> Priority | None:
    """Priority from a value that is only a priority ("high", "urgent")."""
    return match_keywords(text.strip(), PRIORITY_FIELD_KEYWORDS)


def parse_completion(text: str) -> bool | None:
    """Completion filter for searches: True, False or None (not mentioned)."""
    return match_keywords(text, SEARCH_COMPLETION_KEYWORDS)


def parse_completion_update(text: str) -> bool | None:
    """Completion change requested by an update phrase."""
    return match_keywords(text, UPDATE_COMPLETION_KEYWORDS)


def parse_status_label(text: str) -> str | None:
    """Coarse status label ("In Progress", "Todo", "Review", "Blocked")."""
    return match_keywords(text, STATUS_LABEL_KEYWORDS)


def parse_natural_date(text: str, now: datetime | None = None) -> datetime | None:
    """Parse a due date phrase into an absolute UTC instant.

    Handles "today", "tomorrow", "in N days", "next <weekday>" and anything
    ISO-8601 or dateparser understands ("2024-01-15", "March 3 5pm").
    Phrases are read in the timezone of *now*: "next <weekday>" counts from
    the local day of the week and never returns today (on a Monday, "next
    monday" is seven days away), and "March 3 5pm" is 5pm local time.
    A bare ISO date ("2024-01-15") is midnight UTC.

    Args:
        text: Date phrase
        now: Reference instant, defaults to the current local time. A naive
            value is taken as local time.

    Returns:
        Timezone-aware UTC datetime, or None if the phrase is not a date
    """
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    lowered = text.lower().strip()
    if not lowered:
        return None

    if lowered == "today":
        return _to_utc(now)
    if lowered == "tomorrow":
        return _to_utc(now + timedelta(days=1))

    match = _IN_DAYS.search(lowered)
    if match:
        return _to_utc(now + timedelta(days=int(match.group(1))))

    match = _NEXT_WEEKDAY.search(lowered)
    if match:
        target = WEEKDAYS.index(match.group(1))
        days_ahead = (target - now.weekday()) % 7 or 7
        return _to_utc(now + timedelta(days=days_ahead))

    return _parse_absolute(text.strip(), now)


def _parse_absolute(text: str, now: datetime) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        # Naive wall-clock result, placed in now's zone below
        parsed = dateparser.parse(
            text,
            settings={
                "RETURN_AS_TIMEZONE_AWARE": False,
                "PREFER_DATES_FROM": "future",
                "RELATIVE_BASE": now.replace(tzinfo=None),
            },
        )
    else:
        if parsed.tzinfo is None and _ISO_DATE_ONLY.match(text):
            parsed = parsed.replace(tzinfo=UTC)
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=now.tzinfo)
    return _to_utc(parsed)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso(value: datetime) -> str:
    """Format an instant as UTC ISO-8601 with milliseconds ("...T09:30:00.000Z")."""
    return _to_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class SearchQuery:
    """Structured form of a free-text task search.

    Attributes:
        name: Remaining text used as a name filter ("" means no filter)
        priority: Requested priority, if any
        completed: Completion filter, None when not mentioned
        assignee_search: Lower-cased token after "assigned to"
        project_search: Lower-cased token after "in project"
    """

    name: str = ""
    priority: Priority | None = None
    completed: bool | None = None
    assignee_search: str | None = None
    project_search: str | None = None

    def as_dict(self) -> dict:
        """Only the recognised fields, keyed the way the API tools log them."""
        fields = {
            "name": self.name,
            "priority": self.priority.value if self.priority else None,
            "completed": self.completed,
            "assigneeSearch": self.assignee_search,
            "projectSearch": self.project_search,
        }
        return {key: value for key, value in fields.items() if value is not None}


def parse_search_query(query: str) -> SearchQuery:
    """Parse a natural language search into filters.

    Example:
        >>> parse_search_query("urgent tasks assigned to Alice in project Launch")
        SearchQuery(name='', priority=<Priority.ASAP: 'ASAP'>, completed=None,
                    assignee_search='alice', project_search='launch')
    """
    priority = parse_priority(query)
    completed = parse_completion(query)
    assignee_match = _ASSIGNEE.search(query)
    project_match = _PROJECT.search(query)

    name = query
    if priority is not None:
        name = _strip_keywords(name, PRIORITY_KEYWORDS)
    if completed is not None:
        name = _strip_keywords(name, SEARCH_COMPLETION_KEYWORDS)
    if assignee_match:
        name = _ASSIGNEE.sub("", name)
    if project_match:
        name = _PROJECT.sub("", name)
    name = _FILLER.sub("", name)

    return SearchQuery(
        name=" ".join(name.split()),
        priority=priority,
        completed=completed,
        assignee_search=assignee_match.group(1).lower() if assignee_match else None,
        project_search=project_match.group(1).lower() if project_match else None,
    )


@dataclass(frozen=True)
class UpdateQuery:
    """Changes requested by a free-text update ("mark as done", "set urgent").

    ``status`` is a human-readable label only; it is never mapped to a
    workspace status and so is never sent to the API.
    """

    priority: Priority | None = None
    completed: bool | None = None
    status: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.priority is None and self.completed is None and self.status is None

    def to_task_update(self) -> TaskUpdate:
        return TaskUpdate(priority=self.priority, completed=self.completed)


def parse_update_query(query: str) -> UpdateQuery:
    """Parse a natural language update phrase."""
    return UpdateQuery(
        priority=parse_priority(query),
        completed=parse_completion_update(query),
        status=parse_status_label(query),
    )

