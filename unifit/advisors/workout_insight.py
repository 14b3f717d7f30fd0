from loguru import logger

from unifit.advisors.agent import run_agent
from unifit.core.errors import AdvisorError
from unifit.schemas.activity import ActivityKind, Effort

SYSTEM_PROMPT = "You are an upbeat coach. Be cool and student-friendly."

EMPTY_INSIGHT = "Great workout! Drink some water and rest up."
FALLBACK_INSIGHT = "Awesome job! Keep crushing your goals."


def build_insight_prompt(
    activity_kind: ActivityKind,
    duration_seconds: int,
    effort: Effort,
    notes: str,
    distance_km: float | None = None,
) -> str:
    stats_line = f"Distance: {distance_km}km" if distance_km else ""
    return f"""The user just finished a workout.
Type: {activity_kind.value}
Duration: {duration_seconds // 60} minutes
Effort: {effort.value}
Notes: {notes}
Stats: {stats_line}

Give a short, 1-sentence motivating insight or recovery tip.
"""


async def generate_workout_insight(
    activity_kind: ActivityKind,
    duration_seconds: int,
    effort: Effort,
    notes: str,
    distance_km: float | None = None,
) -> str:
    """One-sentence insight for a finished workout. Never raises."""
    prompt = build_insight_prompt(activity_kind, duration_seconds, effort, notes, distance_km)
    try:
        insight = await run_agent("workout_insight", SYSTEM_PROMPT, prompt, str)
    except AdvisorError:
        logger.warning("advisor: Using fallback workout insight", activity_kind=activity_kind.value)
        return FALLBACK_INSIGHT

    return insight.strip() or EMPTY_INSIGHT
