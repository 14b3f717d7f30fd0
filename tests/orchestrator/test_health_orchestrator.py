from unittest.mock import AsyncMock

import pytest

from unifit.advisors.daily_summary import fallback_daily_summary
from unifit.advisors.profile_analysis import ProfileAnalysisOutcome, fallback_profile_analysis
from unifit.core.errors import AdvisorError, OnboardingIncompleteError
from unifit.orchestrator.health_orchestrator import Advisors, HealthOrchestrator
from unifit.schemas.activity import ActivityKind, Effort, SessionState
from unifit.schemas.advisory import DailySummary, HydrationAdvice
from unifit.schemas.logs import MealData
from unifit.schemas.profile import ProfileAnalysis, UserProfile
from unifit.schemas.stats import TargetUpdate

ANALYSIS = ProfileAnalysis(
    daily_calories=2100,
    daily_water_ml=3000,
    daily_protein_g=130,
    daily_steps=9000,
    timeline_prediction="12 weeks",
    hydration_warnings=["Drink water before coffee"],
    personalized_tips=["Prep lunches on Sunday"],
    workout_intensity="Moderate",
)
SUMMARY = DailySummary(score=70, summary="Solid day.", focus_area="Protein")
ADVICE = HydrationAdvice(target=3200, advice="Warm out, drink an extra bottle.")


@pytest.fixture
def advisors(plan_generator, insight_generator) -> Advisors:
    return Advisors(
        analyze_profile=AsyncMock(return_value=ProfileAnalysisOutcome(analysis=ANALYSIS)),
        daily_summary=AsyncMock(return_value=SUMMARY),
        hydration=AsyncMock(return_value=ADVICE),
        workout_plan=plan_generator,
        workout_insight=insight_generator,
    )


@pytest.fixture
def orchestrator(store, advisors, ticker_factory):
    orchestrator = HealthOrchestrator(
        store=store,
        advisors=advisors,
        weather_condition=lambda: "Sunny 25°C",
        ticker_factory=ticker_factory,
    )
    yield orchestrator
    orchestrator.shutdown()


@pytest.mark.asyncio
async def test_onboarding_then_accept_applies_targets(orchestrator, advisors):
    profile = UserProfile(goal="Gain Muscle", weight=80)

    result = await orchestrator.complete_onboarding(profile)

    assert not result.retry_required
    assert result.analysis == ANALYSIS
    assert orchestrator.profile == profile
    assert not orchestrator.onboarding_complete

    stats = orchestrator.accept_plan()

    assert (stats.calories_target, stats.water_target, stats.steps_target) == (2100, 3000, 9000)
    assert orchestrator.onboarding_complete
    assert orchestrator.pending_analysis is None
    advisors.analyze_profile.assert_awaited_once_with(profile)


@pytest.mark.asyncio
async def test_missing_step_recommendation_defaults_to_8000(orchestrator, advisors):
    advisors.analyze_profile.return_value = ProfileAnalysisOutcome(
        analysis=ANALYSIS.model_copy(update={"daily_steps": 0})
    )

    await orchestrator.complete_onboarding(UserProfile())
    stats = orchestrator.accept_plan()

    assert stats.steps_target == 8000


@pytest.mark.asyncio
async def test_failed_onboarding_analysis_requires_retry(orchestrator, advisors, store):
    advisors.analyze_profile.return_value = ProfileAnalysisOutcome(
        analysis=fallback_profile_analysis(), used_fallback=True
    )
    before = store.stats

    result = await orchestrator.complete_onboarding(UserProfile())

    assert result.retry_required
    assert result.analysis.daily_calories == 2200
    assert orchestrator.pending_analysis is None
    assert store.stats is before
    with pytest.raises(OnboardingIncompleteError):
        orchestrator.accept_plan()


def test_accept_without_onboarding_raises(orchestrator):
    with pytest.raises(OnboardingIncompleteError):
        orchestrator.accept_plan()


@pytest.mark.asyncio
async def test_accepting_plan_invalidates_advisories(orchestrator, advisors):
    await orchestrator.refresh_daily_summary()
    await orchestrator.refresh_hydration_advice()
    await orchestrator.complete_onboarding(UserProfile())

    orchestrator.accept_plan()

    assert orchestrator.daily_summary is None
    assert orchestrator.hydration_advice is None


@pytest.mark.asyncio
async def test_update_profile_invalidates_even_without_target_change(orchestrator, advisors):
    await orchestrator.refresh_daily_summary()
    await orchestrator.refresh_hydration_advice()

    orchestrator.update_profile(UserProfile(sleep_hours=9))

    assert orchestrator.profile.sleep_hours == 9
    assert orchestrator.daily_summary is None
    assert orchestrator.hydration_advice is None
    await orchestrator.refresh_daily_summary()
    assert advisors.daily_summary.await_count == 2


def test_update_profile_applies_explicit_targets(orchestrator, store):
    orchestrator.update_profile(UserProfile(), TargetUpdate(water_target=2800))

    assert store.stats.water_target == 2800


@pytest.mark.asyncio
async def test_unchanged_stats_reuse_cached_advisories(orchestrator, advisors):
    first = await orchestrator.refresh_daily_summary()
    second = await orchestrator.refresh_daily_summary()
    await orchestrator.refresh_hydration_advice()
    await orchestrator.refresh_hydration_advice()

    assert first == second == SUMMARY
    assert advisors.daily_summary.await_count == 1
    assert advisors.hydration.await_count == 1
    advisors.hydration.assert_awaited_once_with(orchestrator.store.stats, "Sunny 25°C")


@pytest.mark.asyncio
async def test_logging_makes_advisories_stale(orchestrator, advisors):
    await orchestrator.refresh_daily_summary()

    orchestrator.log_meal(MealData(food_name="Burrito Bowl", calories=650, protein=35, carbs=70, fat=20))

    assert orchestrator.store.stats.calories_in == 650
    assert orchestrator.daily_summary is None
    await orchestrator.refresh_daily_summary()
    assert advisors.daily_summary.await_count == 2


@pytest.mark.asyncio
async def test_summary_failure_serves_fallback(orchestrator, advisors):
    advisors.daily_summary.side_effect = AdvisorError("daily_summary", RuntimeError("quota"))

    summary = await orchestrator.refresh_daily_summary()

    assert summary == fallback_daily_summary()
    assert orchestrator.daily_summary == fallback_daily_summary()


@pytest.mark.asyncio
async def test_adopt_hydration_target(orchestrator, store):
    assert orchestrator.adopt_hydration_target() is None

    await orchestrator.refresh_hydration_advice()
    stats = orchestrator.adopt_hydration_target()

    assert stats.water_target == 3200
    assert store.stats.water_target == 3200
    assert orchestrator.hydration_advice is None


def test_water_and_steps(orchestrator):
    orchestrator.add_water(250)
    orchestrator.add_water(500)
    stats = orchestrator.add_steps(1200)

    assert stats.water_current == 750
    assert stats.steps == 1200


def test_session_controller_is_created_once(orchestrator):
    assert orchestrator.session_controller() is orchestrator.session_controller()


@pytest.mark.asyncio
async def test_committed_session_updates_store_and_invalidates_summary(orchestrator, tickers):
    await orchestrator.refresh_daily_summary()
    controller = orchestrator.session_controller()

    controller.select_activity(ActivityKind.RUNNING)
    controller.start()
    tickers[-1].fire(1800)
    controller.request_stop()
    controller.confirm_stop()
    entry = await controller.save(Effort.MODERATE, notes="Canal loop")

    assert controller.state == SessionState.SELECT_ACTIVITY
    assert orchestrator.store.workouts == (entry,)
    assert orchestrator.store.stats.gym_minutes == 30
    assert entry.distance_km == 5.0
    assert orchestrator.daily_summary is None


def test_shutdown_cancels_live_session(orchestrator, tickers):
    controller = orchestrator.session_controller()
    controller.select_activity(ActivityKind.GYM)
    controller.start()
    session = controller.session

    orchestrator.shutdown()

    assert session.state == SessionState.CANCELLED
    assert session.finished
    assert tickers[-1].closed
    assert orchestrator.store.workouts == ()
