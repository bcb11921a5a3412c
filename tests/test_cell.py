"""Tests for the persistent value cell.

**Feature: persona-daily**
"""

import json
import logging
import sqlite3
import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from personadaily.db.cell import PersistentCell
from personadaily.db.store import KeyValueStore
from personadaily.models import Entry, PlayerStats


@pytest.fixture
def temp_store():
    """Create a temporary store for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield KeyValueStore(Path(tmpdir) / "test.db")


class TestLoadFallback:
    """
    **Feature: persona-daily, Property 3: Load Falls Back To Default**

    An absent or unparsable stored value yields the default without raising,
    and the parse error is kept for inspection.
    """

    def test_absent_key_uses_default_without_error(self, temp_store: KeyValueStore):
        cell = PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)

        assert cell.get() == PlayerStats()
        result = cell.load_result()
        assert result.ok

    def test_corrupt_json_uses_default_and_reports_error(
        self, temp_store: KeyValueStore, caplog
    ):
        temp_store.set("personaDailyEntries", "{not json")

        with caplog.at_level(logging.WARNING, logger="personadaily"):
            cell = PersistentCell(temp_store, "personaDailyEntries", [], list[Entry])

        assert cell.get() == []
        assert "personaDailyEntries" in caplog.text

    def test_wrong_shape_reports_validation_error(self, temp_store: KeyValueStore):
        cell = PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)
        temp_store.set("personaDailyStats", json.dumps({"courage": -4}))

        result = cell.load_result()

        assert not result.ok
        assert result.value == PlayerStats()

    def test_store_read_failure_uses_default(self):
        store = MagicMock()
        store.get.side_effect = sqlite3.OperationalError("database is locked")

        cell = PersistentCell(store, "personaDailyStats", PlayerStats(), PlayerStats)

        assert cell.get() == PlayerStats()

    def test_valid_value_is_loaded(self, temp_store: KeyValueStore):
        temp_store.set("personaDailyStats", json.dumps({"knowledge": 7, "courage": 2}))

        cell = PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)

        assert cell.get() == PlayerStats(knowledge=7, courage=2)


class TestWriteThrough:
    """
    **Feature: persona-daily, Property 4: Write-Through Persistence**

    The value is written on mount and after every change.
    """

    def test_default_written_on_mount(self, temp_store: KeyValueStore):
        PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)

        stored = json.loads(temp_store.get("personaDailyStats"))
        assert stored == PlayerStats().model_dump()

    def test_set_persists_immediately(self, temp_store: KeyValueStore):
        cell = PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)

        assert cell.set(PlayerStats(expression=5)) is True

        reloaded = PersistentCell(temp_store, "personaDailyStats", PlayerStats(), PlayerStats)
        assert reloaded.get() == PlayerStats(expression=5)

    def test_each_set_writes_once(self):
        store = MagicMock()
        store.get.return_value = None
        cell = PersistentCell(store, "k", PlayerStats(), PlayerStats)
        store.set.reset_mock()

        cell.set(PlayerStats(courage=1))
        cell.set(PlayerStats(courage=2))

        assert store.set.call_count == 2

    def test_write_failure_keeps_in_memory_value(self, caplog):
        store = MagicMock()
        store.get.return_value = None
        store.set.side_effect = sqlite3.OperationalError("disk I/O error")

        with caplog.at_level(logging.ERROR, logger="personadaily"):
            cell = PersistentCell(store, "personaDailyStats", PlayerStats(), PlayerStats)
            saved = cell.set(PlayerStats(diligence=3))

        assert saved is False
        assert cell.get() == PlayerStats(diligence=3)
        assert "disk I/O error" in caplog.text

    def test_entries_serialize_with_camel_case_timestamp(self, temp_store: KeyValueStore):
        cell = PersistentCell(temp_store, "personaDailyEntries", [], list[Entry])
        entry = Entry(
            id="2024-05-01T09:00:00-abc",
            date="2024-05-01",
            activity="ran 5k",
            feeling="tired but proud",
            created_at="2024-05-01T09:00:00",
        )

        cell.set([entry])

        stored = json.loads(temp_store.get("personaDailyEntries"))
        assert stored[0]["createdAt"] == "2024-05-01T09:00:00"
        assert stored[0]["date"] == "2024-05-01"
