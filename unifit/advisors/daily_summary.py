from unifit.advisors.agent import run_agent
from unifit.schemas.advisory import DailySummary
from unifit.schemas.stats import UserStats

SYSTEM_PROMPT = """You are a supportive health coach.
Score the day from 0 to 100, summarise it in 3-5 sentences (praise,
improvements, suggestions) and name one focus area.
"""


def build_summary_prompt(stats: UserStats) -> str:
    return f"""Generate a daily health summary.
Stats: {stats.model_dump_json()}
"""


def fallback_daily_summary() -> DailySummary:
    return DailySummary(
        score=50,
        summary="Keep logging your meals, water and workouts to unlock a personalised daily summary.",
        focus_area="Consistency",
    )


async def generate_daily_summary(stats: UserStats) -> DailySummary:
    """Summarise today's stats.

    Raises:
        AdvisorError: If the call fails; the advisory cache supplies the fallback
    """
    return await run_agent("daily_summary", SYSTEM_PROMPT, build_summary_prompt(stats), DailySummary)
