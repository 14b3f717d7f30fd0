from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Mood(StrEnum):
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    TIRED = "Tired"
    STRESSED = "Stressed"


class UserStats(BaseModel):
    """Daily aggregate snapshot. Replaced, never mutated in place."""

    model_config = ConfigDict(frozen=True)

    steps: int = Field(0, ge=0)
    steps_target: int = Field(10000, ge=0)
    water_current: int = Field(0, ge=0)  # ml
    water_target: int = Field(2500, ge=0)  # ml
    calories_in: int = Field(0, ge=0)
    calories_target: int = Field(2400, ge=0)
    gym_minutes: int = Field(0, ge=0)
    mood: Mood = Mood.NEUTRAL

    def fingerprint(self) -> tuple:
        """Hashable identity of every field, used to key advisories."""
        return tuple(self.model_dump(mode="json").items())


class TargetUpdate(BaseModel):
    """Wholesale target overwrite. Fields left as None are not touched."""

    calories_target: int | None = None
    water_target: int | None = None
    steps_target: int | None = None
