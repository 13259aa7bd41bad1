"""Command-line key-value store backed by a single SQLite table."""

from .cli import cli

__all__ = ["cli", "main"]


def main() -> None:
    """Entry point for the dsr CLI."""
    cli()
