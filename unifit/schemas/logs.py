"""Append-only history records: committed workouts and logged meals."""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from unifit.schemas.activity import ActivityKind, Effort


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutLogEntry(BaseModel):
    """A finished activity session. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    activity_kind: ActivityKind
    duration_seconds: int = Field(..., ge=0)
    timestamp: datetime = Field(default_factory=_utcnow)
    effort: Effort
    notes: str = ""
    ai_insight: str
    distance_km: float | None = Field(None, ge=0)
    pace_min_per_km: float | None = Field(None, gt=0)
    injury_reported: bool = False


class MealData(BaseModel):
    """Nutrition facts of one meal as produced by the meal scanner."""

    food_name: str
    calories: int = Field(..., ge=0)
    protein: int = Field(0, ge=0)
    carbs: int = Field(0, ge=0)
    fat: int = Field(0, ge=0)
    health_rating: int = Field(5, ge=1, le=10)
    fat_loss_suitability: bool = False
    portion_change_recommendation: str = ""
    alternative: str = ""
    advice: str = ""
    is_uncertain: bool = False


class MealLogEntry(MealData):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    timestamp: datetime = Field(default_factory=_utcnow)
