"""Configuration management commands."""

import typer

from motion_cli.services.config_service import API_KEY_ENV, get_config_service
from motion_cli.utils.logger import log_file_path
from motion_cli.utils.typer_helpers import SuggestingGroup
from motion_cli.utils.ui.console import get_console
from motion_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def mask_secret(value: str | None) -> str | None:
    """Show only the last four characters of a secret."""
    if not value:
        return value
    return "****" + value[-4:] if len(value) > 4 else "****"


@app.command("show")
@command_wrapper(auth_required=False)
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration (the API key is masked)."""
    config_service = get_config_service()
    config_dict = config_service.config.model_dump(mode="json")
    config_dict["api"]["api_key"] = mask_secret(config_dict["api"]["api_key"])
    format_output(config_dict, output)
    console.print(f"[dim]Config file: {config_service.config_path}[/dim]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")
    if config_service.has_api_key() and not config_service.config.api.api_key:
        format_info(f"Using the API key from {API_KEY_ENV}")


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g. defaults.priority)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    get_config_service().set(key, value)
    shown = mask_secret(value) if key == "api.api_key" else value
    format_success(f"Configuration '{key}' set to '{shown}'")


@app.command("unset")
@command_wrapper(auth_required=False)
def unset_config(
    key: str = typer.Argument(..., help="Configuration key to reset"),
) -> None:
    """Reset a configuration value to its default."""
    get_config_service().unset(key)
    format_success(f"Configuration '{key}' reset")
