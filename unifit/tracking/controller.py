"""Activity session state machine.

SELECT_ACTIVITY -> PREPARING -> ACTIVE <-> STOPPING_CONFIRM -> SUMMARY -> COMMITTED
                                  |              |                |
                                  +--------------+----------------+--> CANCELLED

ACTIVE carries a paused flag instead of a separate state. Once a session
reaches COMMITTED or CANCELLED it is dropped and the controller is back in
SELECT_ACTIVITY.

The controller owns exactly one Ticker per session. The tick runs only while
the session is ACTIVE and not paused; it is stopped on pause and stop request,
and closed on confirm_stop, discard and close.
"""

from collections.abc import Awaitable, Callable

from loguru import logger

from unifit.advisors.workout_insight import generate_workout_insight
from unifit.advisors.workout_plan import generate_workout_plan
from unifit.config.settings import settings
from unifit.core.errors import InvalidTransitionError
from unifit.schemas.activity import ActivityKind, Effort, SessionState, WorkoutPlan
from unifit.schemas.logs import WorkoutLogEntry
from unifit.schemas.profile import UserProfile
from unifit.stats.aggregator import StatsAggregator
from unifit.tracking.metrics import estimate
from unifit.tracking.session import ActivitySession
from unifit.tracking.ticker import Ticker

PlanGenerator = Callable[[UserProfile, ActivityKind], Awaitable[WorkoutPlan]]
InsightGenerator = Callable[..., Awaitable[str]]
TickerFactory = Callable[[Callable[[], None]], Ticker]

INJURY_NOTE_PREFIX = "Injury Reported. "


def default_ticker(callback: Callable[[], None]) -> Ticker:
    return Ticker(callback, interval=settings.tick_interval_seconds)


class SessionController:
    """Drives one activity session at a time from selection to commit or discard."""

    def __init__(
        self,
        store: StatsAggregator,
        plan_generator: PlanGenerator = generate_workout_plan,
        insight_generator: InsightGenerator = generate_workout_insight,
        ticker_factory: TickerFactory = default_ticker,
    ) -> None:
        self._store = store
        self._plan_generator = plan_generator
        self._insight_generator = insight_generator
        self._ticker_factory = ticker_factory
        self._session: ActivitySession | None = None
        self._ticker: Ticker | None = None
        self._saving = False

    def __enter__(self) -> "SessionController":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # Queries

    @property
    def state(self) -> SessionState:
        if self._session is None:
            return SessionState.SELECT_ACTIVITY
        return self._session.state

    @property
    def session(self) -> ActivitySession | None:
        return self._session

    @property
    def elapsed_seconds(self) -> int:
        return self._session.elapsed_seconds if self._session else 0

    @property
    def distance_km(self) -> float | None:
        return self._session.distance_km if self._session else None

    @property
    def pace_min_per_km(self) -> float | None:
        return self._session.pace_min_per_km if self._session else None

    @property
    def ticking(self) -> bool:
        return self._ticker is not None and self._ticker.running

    def _require(self, operation: str, *allowed: SessionState) -> ActivitySession:
        session = self._session
        if session is None or session.state not in allowed:
            raise InvalidTransitionError(operation, self.state.value)
        return session

    def _transition(self, session: ActivitySession, new_state: SessionState) -> None:
        logger.debug(
            "session: Transition",
            activity_kind=session.activity_kind.value,
            from_state=session.state.value,
            to_state=new_state.value,
            elapsed_seconds=session.elapsed_seconds,
        )
        session.state = new_state

    # Tick resource

    def _on_tick(self) -> None:
        session = self._session
        if session is None or session.state != SessionState.ACTIVE or session.paused:
            return
        session.elapsed_seconds += 1
        metrics = estimate(session.activity_kind, session.elapsed_seconds)
        session.distance_km = metrics.distance_km
        session.pace_min_per_km = metrics.pace_min_per_km

    def _require_ticker(self, operation: str) -> Ticker:
        if self._ticker is None:
            raise InvalidTransitionError(operation, f"{self.state.value} without a tick resource")
        return self._ticker

    def _release_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.close()
            self._ticker = None

    # Transitions

    def select_activity(self, activity_kind: ActivityKind) -> ActivitySession:
        if self._session is not None:
            raise InvalidTransitionError("select an activity", self.state.value)
        self._session = ActivitySession(activity_kind=activity_kind)
        logger.info("session: Activity selected", activity_kind=activity_kind.value)
        return self._session

    def deselect(self) -> None:
        """Go back to activity selection before the session has started."""
        session = self._require("go back to selection", SessionState.PREPARING)
        self._transition(session, SessionState.CANCELLED)
        self._session = None

    async def request_plan(self, profile: UserProfile) -> WorkoutPlan | None:
        """Generate a plan for the selected activity.

        The plan attaches only if the same session is still PREPARING when the
        generator resolves. Otherwise it is discarded and None is returned.
        """
        session = self._require("request a plan", SessionState.PREPARING)
        plan = await self._plan_generator(profile, session.activity_kind)

        if self._session is not session or session.state != SessionState.PREPARING:
            logger.info(
                "session: Discarding plan, session left PREPARING",
                activity_kind=session.activity_kind.value,
                state=session.state.value,
            )
            return None

        session.plan = plan
        logger.info("session: Plan attached", title=plan.title, exercises=len(plan.exercises))
        return plan

    def start(self) -> None:
        session = self._require("start", SessionState.PREPARING)
        session.elapsed_seconds = 0
        session.paused = False
        metrics = estimate(session.activity_kind, 0)
        session.distance_km = metrics.distance_km
        session.pace_min_per_km = metrics.pace_min_per_km
        self._transition(session, SessionState.ACTIVE)

        self._release_ticker()
        self._ticker = self._ticker_factory(self._on_tick)
        self._ticker.start()

    def pause(self) -> None:
        session = self._require("pause", SessionState.ACTIVE)
        if session.paused:
            return
        ticker = self._require_ticker("pause")
        session.paused = True
        ticker.stop()
        logger.debug("session: Paused", elapsed_seconds=session.elapsed_seconds)

    def resume(self) -> None:
        session = self._require("resume", SessionState.ACTIVE)
        if not session.paused:
            return
        ticker = self._require_ticker("resume")
        session.paused = False
        ticker.start()
        logger.debug("session: Resumed", elapsed_seconds=session.elapsed_seconds)

    def request_stop(self) -> None:
        session = self._require("request stop", SessionState.ACTIVE)
        self._require_ticker("request stop").stop()
        self._transition(session, SessionState.STOPPING_CONFIRM)

    def cancel_stop(self) -> None:
        session = self._require("cancel stop", SessionState.STOPPING_CONFIRM)
        ticker = self._require_ticker("cancel stop")
        self._transition(session, SessionState.ACTIVE)
        if not session.paused:
            ticker.start()

    def confirm_stop(self) -> None:
        session = self._require("confirm stop", SessionState.STOPPING_CONFIRM)
        self._release_ticker()
        self._transition(session, SessionState.SUMMARY)

    async def save(self, effort: Effort, notes: str = "", injury_flag: bool = False) -> WorkoutLogEntry | None:
        """Commit the session to history.

        Awaits the insight generator, then appends the entry and applies its
        stats delta in a single store call before entering COMMITTED.

        Returns:
            The committed entry, or None if the session was discarded while the
            insight was pending
        """
        session = self._require("save", SessionState.SUMMARY)
        if self._saving:
            raise InvalidTransitionError("save", "already saving")

        session.effort = effort
        session.notes = notes
        session.injury_flag = injury_flag
        insight_notes = f"{INJURY_NOTE_PREFIX}{notes}" if injury_flag else notes
        has_distance = bool(session.distance_km)

        self._saving = True
        try:
            insight = await self._insight_generator(
                session.activity_kind,
                session.elapsed_seconds,
                effort,
                insight_notes,
                session.distance_km if has_distance else None,
            )
        finally:
            self._saving = False

        if self._session is not session or session.state != SessionState.SUMMARY:
            logger.info("session: Session discarded before insight resolved, not committing")
            return None

        entry = WorkoutLogEntry(
            activity_kind=session.activity_kind,
            duration_seconds=session.elapsed_seconds,
            effort=effort,
            notes=notes,
            ai_insight=insight,
            distance_km=session.distance_km if has_distance else None,
            pace_min_per_km=session.pace_min_per_km if has_distance else None,
            injury_reported=injury_flag,
        )
        self._store.commit_workout(entry)
        self._transition(session, SessionState.COMMITTED)
        self._session = None
        return entry

    def discard(self) -> ActivitySession:
        session = self._require(
            "discard",
            SessionState.ACTIVE,
            SessionState.STOPPING_CONFIRM,
            SessionState.SUMMARY,
        )
        self._release_ticker()
        self._transition(session, SessionState.CANCELLED)
        self._session = None
        logger.info(
            "session: Discarded",
            activity_kind=session.activity_kind.value,
            elapsed_seconds=session.elapsed_seconds,
        )
        return session

    def close(self) -> None:
        """Release the tick resource on teardown, cancelling any live session."""
        self._release_ticker()
        session = self._session
        if session is None:
            return
        self._transition(session, SessionState.CANCELLED)
        self._session = None
        logger.warning(
            "session: Closed with a live session, nothing committed",
            activity_kind=session.activity_kind.value,
            elapsed_seconds=session.elapsed_seconds,
        )
