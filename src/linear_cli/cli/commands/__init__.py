"""Typer sub-applications and commands."""
