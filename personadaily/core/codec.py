"""Export and import of the full journal state as JSON."""

import json
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from personadaily.errors import ExportError, ExportPermissionError, ImportFormatError
from personadaily.models import ATTRIBUTES, Entry, ExportDocument, PlayerStats
from personadaily.models.stats import MAX_GAIN, round_points

EXPORT_PREFIX = "persona_data_"
REQUIRED_KEYS = ("allEntries", "playerStats")


def build_document(
    entries: list[Entry], stats: PlayerStats, now: Optional[datetime] = None
) -> ExportDocument:
    """Snapshot the journal state into an export document."""
    return ExportDocument(
        all_entries=list(entries),
        player_stats=stats,
        export_date=now or datetime.now(),
    )


def export_filename(day: date) -> str:
    """Export file name for a given day, e.g. ``persona_data_2024-05-01.json``."""
    return f"{EXPORT_PREFIX}{day.isoformat()}.json"


def dumps_document(document: ExportDocument) -> str:
    """Serialize a document as indented JSON."""
    data = document.model_dump(mode="json", by_alias=True)
    return json.dumps(data, ensure_ascii=False, indent=2)


def write_export(document: ExportDocument, directory: Path) -> Path:
    """Write a document to the export directory.

    Args:
        document: Document to write.
        directory: Destination directory (created if missing).

    Returns:
        Path of the written file.

    Raises:
        ExportPermissionError: If the filesystem denies the write.
        ExportError: If the write fails for any other reason.
    """
    path = directory / export_filename(document.export_date.date())
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(dumps_document(document))
    except PermissionError as e:
        raise ExportPermissionError(f"Permission denied writing {path}") from e
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e
    return path


def _lenient_points(value: Any, upper: Optional[int] = None) -> int:
    # Older exports store raw AI numbers, which may be fractional or out of range
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return round_points(value, upper)


def _lenient_attributes(values: Any, upper: Optional[int] = None) -> Any:
    if not isinstance(values, dict):
        return values
    return {name: _lenient_points(values.get(name, 0), upper) for name in ATTRIBUTES}


def _normalize_numbers(data: dict) -> dict:
    entries = data["allEntries"]
    if isinstance(entries, list):
        entries = [
            {**item, "gains": _lenient_attributes(item["gains"], MAX_GAIN)}
            if isinstance(item, dict) and "gains" in item
            else item
            for item in entries
        ]
    return {
        **data,
        "allEntries": entries,
        "playerStats": _lenient_attributes(data["playerStats"]),
    }


def parse_import(raw: str) -> ExportDocument:
    """Parse the content of an import file.

    Only the presence of ``allEntries`` and ``playerStats`` is checked
    strictly. Gain and total values are coerced the way AI responses are:
    numbers are rounded and clamped, anything else counts as zero. Entries
    still need the fields the journal relies on (id, date, activity and
    feeling).

    Args:
        raw: File content.

    Returns:
        The parsed document.

    Raises:
        ImportFormatError: If the content is not JSON, lacks ``allEntries``
            or ``playerStats``, or holds entries without the fields above.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ImportFormatError(f"File is not valid JSON: {e}") from e

    if not isinstance(data, dict) or any(key not in data for key in REQUIRED_KEYS):
        raise ImportFormatError("Invalid file format: missing allEntries or playerStats")

    try:
        return ExportDocument.model_validate(_normalize_numbers(data))
    except ValidationError as e:
        raise ImportFormatError(f"Invalid file contents: {e.error_count()} problem(s) found") from e
