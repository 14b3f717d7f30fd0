from unifit.advisors.agent import run_agent
from unifit.schemas.advisory import HydrationAdvice
from unifit.schemas.stats import UserStats

SYSTEM_PROMPT = "You are a hydration coach. Recommend a daily water intake in ml with one short tip."


def build_hydration_prompt(stats: UserStats, weather_condition: str) -> str:
    return f"""Calculate daily hydration goal.
User Stats: {stats.model_dump_json()}
Weather: {weather_condition}
"""


def fallback_hydration_advice() -> HydrationAdvice:
    return HydrationAdvice(target=2500, advice="Stay hydrated! Drink water regularly.")


async def calculate_hydration_goal(stats: UserStats, weather_condition: str) -> HydrationAdvice:
    """Recommend a water target for today's activity and weather.

    Raises:
        AdvisorError: If the call fails; the advisory cache supplies the fallback
    """
    return await run_agent(
        "hydration",
        SYSTEM_PROMPT,
        build_hydration_prompt(stats, weather_condition),
        HydrationAdvice,
    )
