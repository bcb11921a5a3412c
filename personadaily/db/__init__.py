"""Persistence layer for Persona Daily."""

from personadaily.db.cell import LoadResult, PersistentCell
from personadaily.db.store import KeyValueStore

__all__ = ["KeyValueStore", "LoadResult", "PersistentCell"]
