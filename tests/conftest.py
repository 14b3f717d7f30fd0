"""Root conftest for all tests.

Shared fixtures: a stats store, a manually driven ticker and a session
controller wired to fake advisors.
"""

from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock

import pytest

from unifit.schemas.activity import PlanExercise, WorkoutPlan
from unifit.schemas.stats import UserStats
from unifit.stats.aggregator import StatsAggregator
from unifit.tracking.controller import SessionController


class ManualTicker:
    """Ticker stand-in whose ticks are fired by the test."""

    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self.running = False
        self.closed = False
        self.starts = 0

    def start(self) -> None:
        if self.closed:
            raise RuntimeError("Ticker is closed")
        if not self.running:
            self.starts += 1
        self.running = True

    def stop(self) -> None:
        self.running = False

    def close(self) -> None:
        self.running = False
        self.closed = True

    def fire(self, times: int = 1) -> None:
        """Fire the callback, but only while running, like the real cadence."""
        for _ in range(times):
            if self.running:
                self._callback()


@pytest.fixture
def tickers() -> list[ManualTicker]:
    return []


@pytest.fixture
def ticker_factory(tickers: list[ManualTicker]) -> Callable[[Callable[[], None]], ManualTicker]:
    def factory(callback: Callable[[], None]) -> ManualTicker:
        ticker = ManualTicker(callback)
        tickers.append(ticker)
        return ticker

    return factory


@pytest.fixture
def store() -> StatsAggregator:
    return StatsAggregator(UserStats(steps_target=10000, water_target=2500, calories_target=2400))


@pytest.fixture
def sample_plan() -> WorkoutPlan:
    return WorkoutPlan(
        title="Tempo Builder",
        exercises=[
            PlanExercise(name="Easy jog", sets="1", reps="10 mins"),
            PlanExercise(name="Tempo", sets="3", reps="8 mins"),
        ],
        duration_min=45,
        focus="Endurance",
    )


@pytest.fixture
def plan_generator(sample_plan: WorkoutPlan) -> AsyncMock:
    return AsyncMock(return_value=sample_plan)


@pytest.fixture
def insight_generator() -> AsyncMock:
    return AsyncMock(return_value="Nice steady effort, stretch those calves.")


@pytest.fixture
def controller(store, plan_generator, insight_generator, ticker_factory) -> Iterator[SessionController]:
    controller = SessionController(
        store,
        plan_generator=plan_generator,
        insight_generator=insight_generator,
        ticker_factory=ticker_factory,
    )
    yield controller
    controller.close()
