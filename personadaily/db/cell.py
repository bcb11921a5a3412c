"""Persistent value cell mirroring one store key.

A cell holds a single in-memory value and writes it through to the
key-value store on mount and on every change. The in-memory value stays
authoritative for the session even when the store cannot be written.
"""

import json
import logging
import sqlite3
from typing import Any, Generic, NamedTuple, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from personadaily.db.store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadResult(NamedTuple):
    """Outcome of reading a cell's key from the store.

    ``error`` is set when the stored text could not be read or parsed;
    ``value`` is then the cell's default.
    """

    value: Any
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PersistentCell(Generic[T]):
    """One persisted value bound to a single store key."""

    def __init__(self, store: KeyValueStore, key: str, default: T, value_type: Any):
        """Load the cell and write its value back to the store.

        Args:
            store: Backing key-value store.
            key: Key the value lives under.
            default: Value used when the key is absent or unreadable.
            value_type: Type used to validate and serialize the value
                (e.g. ``list[Entry]``).
        """
        self._store = store
        self.key = key
        self._default = default
        self._adapter = TypeAdapter(value_type)

        result = self.load_result()
        if not result.ok:
            logger.warning(
                "Could not load %r, using default: %s", key, result.error
            )
        self._value: T = result.value
        self._persist()

    def load_result(self) -> LoadResult:
        """Read and parse the stored value without raising."""
        try:
            raw = self._store.get(self.key)
        except (sqlite3.Error, OSError) as e:
            return LoadResult(self._default, e)

        if raw is None:
            return LoadResult(self._default)

        try:
            return LoadResult(self._adapter.validate_python(json.loads(raw)))
        except (json.JSONDecodeError, ValidationError) as e:
            return LoadResult(self._default, e)

    def get(self) -> T:
        """Current in-memory value."""
        return self._value

    def set(self, value: T) -> bool:
        """Replace the value and write it through.

        Returns:
            True if the store write succeeded.
        """
        self._value = value
        return self._persist()

    def serialize(self) -> str:
        """JSON text of the current value as written to the store."""
        data = self._adapter.dump_python(self._value, mode="json", by_alias=True)
        return json.dumps(data, ensure_ascii=False)

    def _persist(self) -> bool:
        try:
            self._store.set(self.key, self.serialize())
        except (sqlite3.Error, OSError) as e:
            logger.error("Could not save %r: %s", self.key, e)
            return False
        logger.debug("Saved %r", self.key)
        return True
