"""Data models for Persona Daily."""

from personadaily.models.stats import ATTRIBUTES, STAT_NAMES, Gains, PlayerStats
from personadaily.models.entry import Entry
from personadaily.models.export import ExportDocument

__all__ = [
    "ATTRIBUTES",
    "STAT_NAMES",
    "Gains",
    "PlayerStats",
    "Entry",
    "ExportDocument",
]
