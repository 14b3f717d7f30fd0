"""Onboarding profile analysis.

Unlike the other advisors, a fallback here is reported to the caller: the
onboarding flow cannot hand out targets it did not compute and must offer a
retry instead.
"""

from dataclasses import dataclass

from loguru import logger

from unifit.advisors.agent import run_agent
from unifit.core.errors import AdvisorError
from unifit.schemas.profile import ProfileAnalysis, UserProfile

SYSTEM_PROMPT = """You are a nutrition and fitness planner for students.
Return numeric daily targets and specific, practical advice as JSON.
"""


@dataclass(frozen=True)
class ProfileAnalysisOutcome:
    analysis: ProfileAnalysis
    used_fallback: bool = False


def build_profile_prompt(profile: UserProfile) -> str:
    return f"""Analyze this student profile and create a health plan.
Profile: {profile.model_dump_json()}
Return numeric targets and specific advice.
"""


def fallback_profile_analysis() -> ProfileAnalysis:
    return ProfileAnalysis(
        daily_calories=2200,
        daily_water_ml=2500,
        daily_protein_g=100,
        daily_steps=8000,
        timeline_prediction="3 months to see significant change",
        hydration_warnings=["Drink water before coffee"],
        personalized_tips=["Focus on consistency"],
        workout_intensity="Moderate",
    )


async def analyze_user_profile(profile: UserProfile) -> ProfileAnalysisOutcome:
    try:
        analysis = await run_agent(
            "profile_analysis",
            SYSTEM_PROMPT,
            build_profile_prompt(profile),
            ProfileAnalysis,
        )
    except AdvisorError:
        logger.warning("advisor: Using fallback profile analysis", goal=profile.goal)
        return ProfileAnalysisOutcome(analysis=fallback_profile_analysis(), used_fallback=True)

    logger.info(
        "advisor: Profile analysed",
        daily_calories=analysis.daily_calories,
        daily_water_ml=analysis.daily_water_ml,
        daily_steps=analysis.daily_steps,
    )
    return ProfileAnalysisOutcome(analysis=analysis)
