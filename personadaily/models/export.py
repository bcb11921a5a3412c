"""ExportDocument data model."""

from datetime import datetime

from pydantic import BaseModel, Field

from personadaily.models.entry import Entry
from personadaily.models.stats import PlayerStats


class ExportDocument(BaseModel):
    """Full application state as written to an export file."""

    all_entries: list[Entry] = Field(
        default_factory=list, alias="allEntries", description="Every logged entry"
    )
    player_stats: PlayerStats = Field(
        default_factory=PlayerStats, alias="playerStats", description="Attribute totals"
    )
    export_date: datetime = Field(
        default_factory=datetime.now, alias="exportDate", description="Export timestamp"
    )

    model_config = {"frozen": True, "populate_by_name": True}
