"""Thin wiring between the screens and the core.

The orchestrator serializes every command into the stats store and the
advisory cache, which makes it the single writer of both. It holds no
numeric state of its own.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from unifit.advisors.daily_summary import fallback_daily_summary, generate_daily_summary
from unifit.advisors.hydration import calculate_hydration_goal, fallback_hydration_advice
from unifit.advisors.profile_analysis import ProfileAnalysisOutcome, analyze_user_profile
from unifit.advisors.workout_insight import generate_workout_insight
from unifit.advisors.workout_plan import generate_workout_plan
from unifit.advisory.cache import AdvisoryCache, AdvisorySource
from unifit.config.settings import settings
from unifit.core.errors import OnboardingIncompleteError
from unifit.core.logger import setup_logger
from unifit.schemas.advisory import AdvisoryKind, DailySummary, HydrationAdvice
from unifit.schemas.logs import MealData, MealLogEntry
from unifit.schemas.profile import ProfileAnalysis, UserProfile
from unifit.schemas.stats import TargetUpdate, UserStats
from unifit.stats.aggregator import StatsAggregator
from unifit.tracking.controller import InsightGenerator, PlanGenerator, SessionController, TickerFactory, default_ticker

DEFAULT_STEPS_WHEN_MISSING = 8000


@dataclass(frozen=True)
class Advisors:
    """The collaborator coroutines the orchestrator calls. Swappable in tests."""

    analyze_profile: Callable[[UserProfile], Awaitable[ProfileAnalysisOutcome]] = analyze_user_profile
    daily_summary: Callable[[UserStats], Awaitable[DailySummary]] = generate_daily_summary
    hydration: Callable[[UserStats, str], Awaitable[HydrationAdvice]] = calculate_hydration_goal
    workout_plan: PlanGenerator = generate_workout_plan
    workout_insight: InsightGenerator = generate_workout_insight


@dataclass(frozen=True)
class OnboardingResult:
    analysis: ProfileAnalysis
    retry_required: bool = False


class HealthOrchestrator:
    def __init__(
        self,
        store: StatsAggregator | None = None,
        profile: UserProfile | None = None,
        advisors: Advisors | None = None,
        weather_condition: Callable[[], str] | None = None,
        ticker_factory: TickerFactory = default_ticker,
    ) -> None:
        self.store = store or StatsAggregator(
            UserStats(
                steps_target=settings.default_steps_target,
                water_target=settings.default_water_target_ml,
                calories_target=settings.default_calories_target,
            )
        )
        self.profile = profile or UserProfile()
        self.advisors = advisors or Advisors()
        self._weather_condition = weather_condition or (lambda: settings.weather_condition)
        self._ticker_factory = ticker_factory
        self._pending_analysis: ProfileAnalysis | None = None
        self._onboarding_complete = False
        self._controller: SessionController | None = None
        self.cache = AdvisoryCache(self._advisory_sources())

    def _advisory_sources(self) -> dict[AdvisoryKind, AdvisorySource]:
        return {
            AdvisoryKind.DAILY_SUMMARY: AdvisorySource(
                inputs=lambda: self.store.stats,
                fingerprint=lambda stats: stats.fingerprint(),
                fetch=self.advisors.daily_summary,
                fallback=fallback_daily_summary,
            ),
            AdvisoryKind.HYDRATION_ADVICE: AdvisorySource(
                inputs=lambda: (self.store.stats, self._weather_condition()),
                fingerprint=lambda inputs: (inputs[0].fingerprint(), inputs[1]),
                fetch=lambda inputs: self.advisors.hydration(*inputs),
                fallback=fallback_hydration_advice,
            ),
        }

    @property
    def onboarding_complete(self) -> bool:
        return self._onboarding_complete

    @property
    def pending_analysis(self) -> ProfileAnalysis | None:
        return self._pending_analysis

    # Onboarding and profile

    async def complete_onboarding(self, profile: UserProfile) -> OnboardingResult:
        """Analyse the onboarding profile.

        A fallback analysis blocks onboarding: nothing is applied and the
        result asks the caller to offer a retry.
        """
        outcome = await self.advisors.analyze_profile(profile)
        if outcome.used_fallback:
            logger.warning("orchestrator: Profile analysis failed during onboarding, retry required")
            return OnboardingResult(analysis=outcome.analysis, retry_required=True)

        self.profile = profile
        self._pending_analysis = outcome.analysis
        logger.info("orchestrator: Onboarding analysed, plan ready for review")
        return OnboardingResult(analysis=outcome.analysis)

    def accept_plan(self) -> UserStats:
        """Adopt the pending plan's targets."""
        analysis = self._pending_analysis
        if analysis is None:
            raise OnboardingIncompleteError()

        stats = self.store.set_targets(
            TargetUpdate(
                calories_target=analysis.daily_calories,
                water_target=analysis.daily_water_ml,
                steps_target=analysis.daily_steps or DEFAULT_STEPS_WHEN_MISSING,
            )
        )
        self.cache.invalidate_all()
        self._pending_analysis = None
        self._onboarding_complete = True
        logger.info("orchestrator: Plan accepted")
        return stats

    def update_profile(self, profile: UserProfile, targets: TargetUpdate | None = None) -> None:
        self.profile = profile
        if targets is not None:
            self.store.set_targets(targets)
        self.cache.invalidate_all()
        logger.info("orchestrator: Profile updated", targets_changed=targets is not None)

    # Logging

    def log_meal(self, meal: MealData) -> MealLogEntry:
        return self.store.log_meal(meal)

    def add_water(self, amount_ml: int) -> UserStats:
        return self.store.update_water(amount_ml)

    def add_steps(self, count: int) -> UserStats:
        return self.store.add_steps(count)

    # Advisories

    @property
    def daily_summary(self) -> DailySummary | None:
        return self.cache.get(AdvisoryKind.DAILY_SUMMARY)

    @property
    def hydration_advice(self) -> HydrationAdvice | None:
        return self.cache.get(AdvisoryKind.HYDRATION_ADVICE)

    async def refresh_daily_summary(self) -> DailySummary:
        return await self.cache.refresh(AdvisoryKind.DAILY_SUMMARY)

    async def refresh_hydration_advice(self) -> HydrationAdvice:
        return await self.cache.refresh(AdvisoryKind.HYDRATION_ADVICE)

    def adopt_hydration_target(self) -> UserStats | None:
        """Use the cached hydration recommendation as the water target."""
        advice = self.hydration_advice
        if advice is None:
            return None
        stats = self.store.set_targets(TargetUpdate(water_target=advice.target))
        self.cache.invalidate_all()
        return stats

    # Sessions

    def session_controller(self) -> SessionController:
        """Return the session controller, creating it on first use."""
        if self._controller is None:
            self._controller = SessionController(
                self.store,
                plan_generator=self.advisors.workout_plan,
                insight_generator=self.advisors.workout_insight,
                ticker_factory=self._ticker_factory,
            )
        return self._controller

    def shutdown(self) -> None:
        if self._controller is not None:
            self._controller.close()
            self._controller = None
        logger.info("orchestrator: Shut down")


def build_orchestrator(profile: UserProfile | None = None, log_file: str | None = None) -> HealthOrchestrator:
    """Configure logging from settings and build an orchestrator with the real advisors."""
    setup_logger(log_file=log_file)
    return HealthOrchestrator(profile=profile)
