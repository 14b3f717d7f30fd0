from loguru import logger

from unifit.advisors.agent import run_agent
from unifit.core.errors import AdvisorError
from unifit.schemas.activity import ActivityKind, PlanExercise, WorkoutPlan
from unifit.schemas.profile import UserProfile

SYSTEM_PROMPT = """You are a friendly personal trainer for university students.

Design ONE workout for today. Output ONLY valid JSON matching the schema.
If the activity is running or other cardio, suggest intervals or steady state.
If the activity is gym work, list specific exercises with sets and reps.
"""


def build_workout_plan_prompt(profile: UserProfile, activity_kind: ActivityKind) -> str:
    return f"""Create a detailed workout plan for today.
User Goal: {profile.goal}
Activity Type: {activity_kind.value}
User Experience: {profile.activity_level}
"""


def fallback_workout_plan(activity_kind: ActivityKind) -> WorkoutPlan:
    return WorkoutPlan(
        title="Freestyle Session",
        exercises=[
            PlanExercise(name="Warmup", sets="1", reps="5 mins"),
            PlanExercise(name=activity_kind.value, sets="1", reps="30 mins"),
        ],
        duration_min=35,
        focus="General Fitness",
    )


async def generate_workout_plan(profile: UserProfile, activity_kind: ActivityKind) -> WorkoutPlan:
    """Generate today's plan for activity_kind, or the fixed fallback plan on failure."""
    try:
        return await run_agent(
            "workout_plan",
            SYSTEM_PROMPT,
            build_workout_plan_prompt(profile, activity_kind),
            WorkoutPlan,
        )
    except AdvisorError:
        logger.warning("advisor: Using fallback workout plan", activity_kind=activity_kind.value)
        return fallback_workout_plan(activity_kind)
