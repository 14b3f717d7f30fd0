from dataclasses import dataclass

from unifit.schemas.activity import ActivityKind, Effort, SessionState, WorkoutPlan


@dataclass
class ActivitySession:
    """Live state of one tracked activity, owned by its SessionController.

    Attributes:
        activity_kind: Selected activity
        state: Current FSM state
        elapsed_seconds: Logical seconds counted by the tick
        paused: Whether the tick is suspended within ACTIVE
        distance_km: Derived distance, None for kinds without a distance metric
        pace_min_per_km: Derived pace, None until distance is positive
        plan: Optional generated plan attached while PREPARING
        effort: Perceived effort captured at save time
        notes: Free text captured at save time
        injury_flag: Whether the user reported an injury at save time
    """

    activity_kind: ActivityKind
    state: SessionState = SessionState.PREPARING
    elapsed_seconds: int = 0
    paused: bool = False
    distance_km: float | None = None
    pace_min_per_km: float | None = None
    plan: WorkoutPlan | None = None
    effort: Effort = Effort.MODERATE
    notes: str = ""
    injury_flag: bool = False

    @property
    def finished(self) -> bool:
        return self.state in (SessionState.COMMITTED, SessionState.CANCELLED)
