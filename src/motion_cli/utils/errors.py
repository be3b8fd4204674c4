"""Error types and user-facing troubleshooting hints.

Commands and tools report failures as ``"<prefix>: <original message>"`` and
append at most one hint. Hints are chosen by looking for substrings in the
original message (``"401"``, ``"400"``, ``"workspaceId"``...), so the
``MotionAPIError`` message format is part of the contract.
"""

from __future__ import annotations

from collections.abc import Sequence


class MotionAPIError(Exception):
    """Non-2xx response from the Motion API.

    The message is always ``"Motion API error: <status> <reason>"``.
    """

    def __init__(self, status_code: int, reason: str, body: str = ""):
        super().__init__(f"Motion API error: {status_code} {reason}")
        self.status_code = status_code
        self.reason = reason
        self.body = body


class ConfigError(Exception):
    """Missing or invalid local configuration (API key, workspace access)."""


class ToolError(Exception):
    """Failure raised by an AI tool, already formatted for the caller."""


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


Hint = tuple[tuple[str, ...], str]

AUTH_HINT: Hint = (("401", "403"), "Check your Motion API key (motion config set api.api_key).")
BAD_REQUEST_HINT: Hint = (
    ("400",),
    "Check that the task name is valid and all parameters are correct.",
)
WORKSPACE_HINT: Hint = (
    ("workspaceId",),
    "Make sure your Motion API key has access to at least one workspace.",
)
WORKSPACE_ID_HINT: Hint = (
    ("workspaceId",),
    "Make sure the workspace ID is valid and you have access to it.",
)
NOT_FOUND_HINT: Hint = (
    ("404",),
    "Make sure the task ID is correct and you have access to it.",
)

DEFAULT_HINTS: tuple[Hint, ...] = (AUTH_HINT, BAD_REQUEST_HINT, WORKSPACE_HINT)
CREATE_HINTS: tuple[Hint, ...] = (WORKSPACE_HINT, AUTH_HINT, BAD_REQUEST_HINT)
SEARCH_HINTS: tuple[Hint, ...] = (AUTH_HINT,)
PROJECT_HINTS: tuple[Hint, ...] = (AUTH_HINT, WORKSPACE_ID_HINT)
UPDATE_HINTS: tuple[Hint, ...] = (AUTH_HINT, NOT_FOUND_HINT)


def troubleshooting_hint(message: str, hints: Sequence[Hint] = DEFAULT_HINTS) -> str | None:
    """Return the hint of the first table entry whose substrings occur in *message*."""
    for needles, hint in hints:
        if any(needle in message for needle in needles):
            return hint
    return None


def describe_error(
    prefix: str, exc: BaseException, hints: Sequence[Hint] = DEFAULT_HINTS
) -> str:
    """Wrap *exc* as ``"<prefix>: <message>"`` plus the matching hint, if any."""
    message = str(exc) or exc.__class__.__name__
    text = f"{prefix}: {message}"
    hint = troubleshooting_hint(message, hints)
    if hint:
        text += f"\n\n💡 Tip: {hint}"
    return text
