"""Application state controller for Persona Daily.

``PersonaApp`` owns the two persisted pieces of state, the entry list and
the attribute totals, and is the only place that mutates them.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from pydantic import BaseModel

from personadaily.ai.estimator import GainEstimator
from personadaily.core.aggregator import add_entry
from personadaily.core.codec import build_document, parse_import, write_export
from personadaily.db.cell import PersistentCell
from personadaily.db.store import KeyValueStore
from personadaily.errors import InputValidationError
from personadaily.models import Entry, ExportDocument, PlayerStats

logger = logging.getLogger(__name__)

ENTRIES_KEY = "personaDailyEntries"
STATS_KEY = "personaDailyStats"


class StateDraft(BaseModel):
    """Working copy of the state inside a transaction."""

    entries: list[Entry]
    stats: PlayerStats


def new_entry_id(now: datetime) -> str:
    """Unique entry id prefixed with its creation time."""
    return f"{now.isoformat()}-{uuid.uuid4().hex[:8]}"


class PersonaApp:
    """Owns the journal state and exposes its mutation entry points."""

    def __init__(self, store: KeyValueStore, estimator: GainEstimator):
        """Load state from the store.

        Args:
            store: Backing key-value store.
            estimator: Gain estimator used when saving entries.
        """
        self._estimator = estimator
        self._entries: PersistentCell[list[Entry]] = PersistentCell(
            store, ENTRIES_KEY, [], list[Entry]
        )
        self._stats: PersistentCell[PlayerStats] = PersistentCell(
            store, STATS_KEY, PlayerStats(), PlayerStats
        )

    @property
    def entries(self) -> list[Entry]:
        return list(self._entries.get())

    @property
    def stats(self) -> PlayerStats:
        return self._stats.get()

    @contextmanager
    def transaction(self) -> Iterator[StateDraft]:
        """Stage changes to both values and commit them together.

        The draft is written to the cells, and through them to the store,
        only when the block exits normally.
        """
        draft = StateDraft(entries=self.entries, stats=self.stats)
        yield draft
        self._entries.set(list(draft.entries))
        self._stats.set(draft.stats)

    def save_entry(
        self, activity: str, feeling: str, now: Optional[datetime] = None
    ) -> Entry:
        """Estimate gains for an activity, record it and update the totals.

        AI failures never block the save; the entry then carries zero gains.

        Args:
            activity: What the user did.
            feeling: How they felt about it.
            now: Creation time (defaults to the current time).

        Returns:
            The saved entry.

        Raises:
            InputValidationError: If either text is blank.
        """
        activity = activity.strip()
        feeling = feeling.strip()
        if not activity or not feeling:
            raise InputValidationError("Activity and feeling must both be filled in.")

        gains = self._estimator.estimate_or_zero(activity, feeling)

        now = now or datetime.now()
        entry = Entry(
            id=new_entry_id(now),
            date=now.date(),
            activity=activity,
            feeling=feeling,
            gains=gains,
            created_at=now,
        )

        with self.transaction() as draft:
            draft.entries, draft.stats = add_entry(draft.entries, draft.stats, entry)

        logger.info("Saved entry %s (+%d points)", entry.id, gains.total())
        return entry

    def export_data(self, directory: Path, now: Optional[datetime] = None) -> Path:
        """Write the full state to an export file in ``directory``."""
        document = build_document(self.entries, self.stats, now)
        path = write_export(document, directory)
        logger.info("Exported %d entries to %s", len(document.all_entries), path)
        return path

    def import_data(self, raw: str) -> ExportDocument:
        """Replace the full state with the content of an export file.

        Raises:
            ImportFormatError: If the content is invalid; state is untouched.
        """
        document = parse_import(raw)
        with self.transaction() as draft:
            draft.entries = list(document.all_entries)
            draft.stats = document.player_stats
        logger.info("Imported %d entries", len(document.all_entries))
        return document
