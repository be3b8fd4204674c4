"""Typer group that answers mistyped commands with close matches."""

from collections.abc import Iterable
from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from motion_cli.utils.ui.console import get_console

MAX_SUGGESTIONS = 3
SUGGESTION_CUTOFF = 0.6


def suggest_commands(attempted: str, names: Iterable[str]) -> list[str]:
    """Closest command names to *attempted*, best first."""
    return get_close_matches(
        attempted, sorted(names), n=MAX_SUGGESTIONS, cutoff=SUGGESTION_CUTOFF
    )


class SuggestingGroup(TyperGroup):
    """Command group with "Did you mean this?" hints on typos.

    A typo with close matches prints them and exits with 1. Anything else
    falls through to the usual usage error (exit 2).
    """

    def resolve_command(self, ctx, args):
        if args and not ctx.resilient_parsing and self._is_unknown(ctx, args[0]):
            suggestions = suggest_commands(args[0], self.list_commands(ctx))
            if suggestions:
                self._print_suggestions(ctx, args[0], suggestions)
                raise typer.Exit(1)
        return super().resolve_command(ctx, args)

    def _is_unknown(self, ctx, name: str) -> bool:
        if name.startswith("-"):
            return False
        if self.get_command(ctx, name) is not None:
            return False
        if ctx.token_normalize_func is not None:
            return self.get_command(ctx, ctx.token_normalize_func(name)) is None
        return True

    def _print_suggestions(self, ctx, attempted: str, suggestions: list[str]) -> None:
        console = get_console()
        console.print(
            f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.command_path}"',
            highlight=False,
        )
        console.print()
        if len(suggestions) == 1:
            console.print("[yellow]Did you mean this?[/yellow]")
        else:
            console.print("[yellow]Did you mean one of these?[/yellow]")
        for suggestion in suggestions:
            console.print(f"        {suggestion}")
        console.print()
        console.print(f"[dim]Run '{ctx.command_path} --help' for usage.[/dim]")
