"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable, Sequence

import typer

from motion_cli.services.config_service import get_config_service
from motion_cli.utils.errors import DEFAULT_HINTS, AppError, Hint, ToolError, describe_error
from motion_cli.utils.exit_codes import ERROR_AUTH_FAILURE, exit_code_for, get_exit_code_name
from motion_cli.utils.logger import get_logger
from motion_cli.utils.ui.formatters import format_error


def _require_api_key() -> None:
    """Fail fast when no API key is configured."""
    if not get_config_service().has_api_key():
        raise AppError(
            "Motion API key is not configured. "
            "Run 'motion config set api.api_key <key>' or set MOTION_API_KEY.",
            exit_code=ERROR_AUTH_FAILURE,
        )


def command_wrapper(
    _func: Callable | None = None,
    *,
    action: str | None = None,
    hints: Sequence[Hint] = DEFAULT_HINTS,
    auth_required: bool = True,
):
    """Decorator to wrap command functions with common functionality.

    Runs coroutine commands with ``asyncio.run``, logs start, completion and
    failure with the elapsed time, and turns every error into a single
    ``"<prefix>: <message>"`` line (plus a troubleshooting tip) and a
    semantic exit code.

    Args:
        action: Verb phrase for the error prefix ("load tasks"); errors are
            printed without a prefix when omitted
        hints: Ordered troubleshooting table, first match wins
        auth_required: Check for an API key before running
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_api_key()

                if asyncio.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except AppError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except ToolError as e:
                # Already described by the tool; the exit code follows the root cause
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=exit_code_for(e.__cause__ or e)) from e

            except Exception as e:
                elapsed = time.monotonic() - start
                code = exit_code_for(e)
                logger.error(
                    "command failed: %s (%.3fs) [%s] - %s\n%s",
                    cmd,
                    elapsed,
                    get_exit_code_name(code),
                    str(e),
                    traceback.format_exc(),
                )
                if action:
                    format_error(describe_error(f"Failed to {action}", e, hints))
                else:
                    format_error(str(e))
                raise typer.Exit(code=code) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
