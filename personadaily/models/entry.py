"""Entry data model."""

from datetime import date as date_type, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from personadaily.models.stats import Gains


class Entry(BaseModel):
    """One logged activity with its reflection and estimated gains."""

    id: str = Field(..., min_length=1, description="Unique, time-prefixed entry identifier")
    date: date_type = Field(..., description="Day the entry was created")
    activity: str = Field(..., description="What the user did")
    feeling: str = Field(..., description="How the user felt about it")
    gains: Gains = Field(default_factory=Gains, description="Estimated attribute gains")
    created_at: Optional[datetime] = Field(
        default=None,
        alias="createdAt",
        description="Creation timestamp in naive local time (absent on entries from older exports)",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("created_at")
    @classmethod
    def to_local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Timestamps such as "2024-05-01T08:00:00.000Z" carry an offset
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
