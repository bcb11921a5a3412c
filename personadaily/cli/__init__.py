"""CLI commands for Persona Daily.

This package provides the command-line interface: the home and stats
views, adding entries, the calendar and data export/import.
"""

from personadaily.cli.main import cli, main

__all__ = ["cli", "main"]
