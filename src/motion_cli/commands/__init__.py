"""Typer command groups for the motion CLI."""
