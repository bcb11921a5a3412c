"""Attribute totals and per-entry gain models."""

from typing import Optional

from pydantic import BaseModel, Field


# Display order of the five tracked attributes
ATTRIBUTES = ("diligence", "knowledge", "courage", "understanding", "expression")

STAT_NAMES = {
    "diligence": "Diligence",
    "knowledge": "Knowledge",
    "courage": "Courage",
    "understanding": "Understanding",
    "expression": "Expression",
}

# Inclusive range of a single gain value
MIN_GAIN = 0
MAX_GAIN = 5


def round_points(value: float, upper: Optional[int] = None) -> int:
    """Round a finite number to whole points, clamped to [0, upper]."""
    points = max(MIN_GAIN, int(round(value)))
    return points if upper is None else min(upper, points)


class Gains(BaseModel):
    """Estimated attribute increase contributed by one activity."""

    diligence: int = Field(default=0, ge=MIN_GAIN, le=MAX_GAIN, description="Diligence gain")
    knowledge: int = Field(default=0, ge=MIN_GAIN, le=MAX_GAIN, description="Knowledge gain")
    courage: int = Field(default=0, ge=MIN_GAIN, le=MAX_GAIN, description="Courage gain")
    understanding: int = Field(
        default=0, ge=MIN_GAIN, le=MAX_GAIN, description="Understanding gain"
    )
    expression: int = Field(default=0, ge=MIN_GAIN, le=MAX_GAIN, description="Expression gain")

    model_config = {"frozen": True}

    @classmethod
    def zero(cls) -> "Gains":
        """Gains used when no estimate could be obtained."""
        return cls()

    def items(self) -> list[tuple[str, int]]:
        """Return (attribute, gain) pairs in display order."""
        return [(name, getattr(self, name)) for name in ATTRIBUTES]

    def total(self) -> int:
        """Sum of all five gains."""
        return sum(value for _, value in self.items())


class PlayerStats(BaseModel):
    """Running per-attribute totals across all entries."""

    diligence: int = Field(default=0, ge=0, description="Total diligence points")
    knowledge: int = Field(default=0, ge=0, description="Total knowledge points")
    courage: int = Field(default=0, ge=0, description="Total courage points")
    understanding: int = Field(default=0, ge=0, description="Total understanding points")
    expression: int = Field(default=0, ge=0, description="Total expression points")

    model_config = {"frozen": True}

    def items(self) -> list[tuple[str, int]]:
        """Return (attribute, total) pairs in display order."""
        return [(name, getattr(self, name)) for name in ATTRIBUTES]
