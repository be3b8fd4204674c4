"""
Exit codes for the motion CLI.

Semantic exit codes so scripts and agents can tell an auth problem from a
network problem without parsing the error text.
"""

import httpx

from motion_cli.utils.errors import AppError, ConfigError, MotionAPIError

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (missing or rejected API key)
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, 5xx, etc.)
ERROR_NETWORK = 4

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(exc: BaseException) -> int:
    """Map an exception raised by a command to its exit code."""
    if isinstance(exc, AppError):
        return exc.exit_code
    if isinstance(exc, ConfigError):
        return ERROR_AUTH_FAILURE if "API key" in str(exc) else ERROR_GENERAL
    if isinstance(exc, MotionAPIError):
        if exc.status_code in (401, 403):
            return ERROR_AUTH_FAILURE
        if exc.status_code == 404:
            return ERROR_NOT_FOUND
        if 400 <= exc.status_code < 500:
            return ERROR_INVALID_ARGS
        return ERROR_NETWORK
    if isinstance(exc, httpx.RequestError):
        return ERROR_NETWORK
    if isinstance(exc, ValueError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL
