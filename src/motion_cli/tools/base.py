"""Shared plumbing for the AI-callable tools.

Each tool is an async function taking a loosely-typed parameter object
(camelCase keys, as sent by the assistant) and returning markdown. Any
failure leaves the tool as a ``ToolError`` whose message reads
``"Failed to <action>: <reason>"`` plus a troubleshooting tip.
"""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, ParamSpec, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from motion_cli.utils.errors import DEFAULT_HINTS, Hint, ToolError, describe_error
from motion_cli.utils.logger import get_logger

P = ParamSpec("P")
M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


class ToolParams(BaseModel):
    """Base for tool parameters; accepts camelCase or snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


def motion_tool(
    action: str, hints: Sequence[Hint] = DEFAULT_HINTS
) -> Callable[[Callable[P, Awaitable[str]]], Callable[P, Awaitable[str]]]:
    """Decorate a tool so every failure surfaces as a descriptive ToolError.

    Args:
        action: Verb phrase used in the error prefix ("search Motion tasks")
        hints: Ordered troubleshooting table, first match wins
    """

    def decorator(func: Callable[P, Awaitable[str]]) -> Callable[P, Awaitable[str]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
            get_logger()
            start = time.monotonic()
            logger.info("AI tool started: %s", func.__name__)
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "AI tool failed: %s (%.3fs) - %s",
                    func.__name__,
                    time.monotonic() - start,
                    e,
                )
                raise ToolError(describe_error(f"Failed to {action}", e, hints)) from e
            logger.info(
                "AI tool completed: %s (%.3fs)", func.__name__, time.monotonic() - start
            )
            return result

        return wrapper

    return decorator


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def validation_message(exc: ValidationError) -> str:
    """Readable one-line form of the first validation error."""
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    if cause is not None:
        return str(cause)
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}" if field else error["msg"]


def validate_params(model: type[M], data: Any) -> M:
    """Validate raw tool input against *model*.

    Raises:
        ValueError: The input is missing a required field or has a bad value.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data or {})
    except ValidationError as e:
        raise ValueError(validation_message(e)) from e
