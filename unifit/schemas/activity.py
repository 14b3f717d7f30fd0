from enum import StrEnum

from pydantic import BaseModel, Field


class ActivityKind(StrEnum):
    RUNNING = "Running"
    CYCLING = "Cycling"
    GYM = "Gym"
    WALKING = "Walking"
    YOGA = "Yoga"
    SWIMMING = "Swimming"
    HIIT = "HIIT"
    SPORTS = "Sports"
    PILATES = "Pilates"

    @property
    def speed_kmh(self) -> float | None:
        """Assumed average speed, or None when the kind has no distance metric."""
        return _CARDIO_SPEEDS_KMH.get(self)

    @property
    def has_distance_metric(self) -> bool:
        return self in _CARDIO_SPEEDS_KMH


_CARDIO_SPEEDS_KMH: dict[ActivityKind, float] = {
    ActivityKind.RUNNING: 10.0,
    ActivityKind.CYCLING: 20.0,
    ActivityKind.WALKING: 5.0,
    ActivityKind.SWIMMING: 3.0,
    ActivityKind.SPORTS: 6.0,
}


class Effort(StrEnum):
    EASY = "Easy"
    MODERATE = "Moderate"
    HARD = "Hard"
    EXTREME = "Extreme"


class SessionState(StrEnum):
    SELECT_ACTIVITY = "SELECT_ACTIVITY"
    PREPARING = "PREPARING"
    ACTIVE = "ACTIVE"
    STOPPING_CONFIRM = "STOPPING_CONFIRM"
    SUMMARY = "SUMMARY"
    COMMITTED = "COMMITTED"
    CANCELLED = "CANCELLED"


class PlanExercise(BaseModel):
    name: str
    sets: str
    reps: str


class WorkoutPlan(BaseModel):
    """Structured plan for today's session."""

    title: str = Field(..., description="Catchy workout title e.g. 'Flash Cardio' or 'Heavy Push Day'")
    exercises: list[PlanExercise]
    duration_min: int = Field(..., ge=0)
    focus: str = Field(..., description="Main focus e.g. 'Endurance', 'Hypertrophy'")


class SessionMetrics(BaseModel):
    distance_km: float | None = None
    pace_min_per_km: float | None = None
