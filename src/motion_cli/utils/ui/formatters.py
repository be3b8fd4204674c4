"""Output formatters for different formats."""

import json
from datetime import UTC, datetime
from typing import Any

import yaml
from rich.markdown import Markdown
from rich.table import Table

from motion_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

PRIORITY_STYLES = {
    "ASAP": "bold red",
    "HIGH": "dark_orange",
    "MEDIUM": "yellow",
    "LOW": "blue",
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Print plain data as JSON, YAML or a generic table."""
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(
            f"Unknown output format: {output_format} (choose from {', '.join(OUTPUT_FORMATS)})"
        )
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif isinstance(data, list):
        format_dict_table(data)
    else:
        format_single_item(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        row = []
        for col in columns:
            value = item.get(col, "")
            if isinstance(value, bool):
                value = "✓" if value else "✗"
            elif isinstance(value, list):
                value = ", ".join(str(v) for v in value)
            elif value is None:
                value = "-"
            else:
                value = str(value)
            row.append(value)
        table.add_row(*row)

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key/value lines."""
    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        console.print(f"[cyan]{formatted_key}:[/cyan] {value}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}", highlight=False)


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}", highlight=False)


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}", highlight=False)


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}", highlight=False)


def print_markdown(text: str) -> None:
    """Render markdown produced by the AI tools."""
    console.print(Markdown(text))


# ============================================================================
# Helper Functions
# ============================================================================


def format_date(value: datetime | None) -> str:
    """Calendar date in local time, e.g. ``2024-03-05``."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone().strftime("%Y-%m-%d")


def format_relative_time(value: datetime | None, now: datetime | None = None) -> str:
    """Format timestamp as relative time."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    seconds = (now - value).total_seconds()

    if seconds < 60:
        return "just now"
    if seconds < 3600:
        minutes = int(seconds / 60)
        return f"{minutes}m ago" if minutes > 1 else "1m ago"
    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"{hours}h ago" if hours > 1 else "1h ago"
    days = int(seconds / 86400)
    return f"{days}d ago" if days > 1 else "1d ago"


def get_progress_bar(fraction: float, width: int = 10) -> str:
    """Get a progress bar representation of a 0..1 value."""
    fraction = min(max(fraction, 0.0), 1.0)
    filled = round(fraction * width)
    return "▓" * filled + "░" * (width - filled)


def get_completion_color(fraction: float) -> str:
    """Get color based on a 0..1 progress value."""
    if fraction >= 0.8:
        return "green"
    if fraction >= 0.4:
        return "yellow"
    return "red"
