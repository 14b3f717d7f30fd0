"""Authoritative daily stats store.

StatsAggregator is the only writer of UserStats and of the workout and meal
logs. Every mutation goes through one of its command methods, and each command
is applied exactly once per call: repeated calls are repeated deltas.
"""

from loguru import logger

from unifit.schemas.logs import MealData, MealLogEntry, WorkoutLogEntry
from unifit.schemas.stats import Mood, TargetUpdate, UserStats
from unifit.stats.bounds import (
    CALORIES_TARGET,
    MEAL_CALORIES,
    STEPS_ADD,
    STEPS_TARGET,
    WATER_ADD_ML,
    WATER_TARGET_ML,
)


class StatsAggregator:
    def __init__(self, initial: UserStats | None = None) -> None:
        self._stats = initial or UserStats()
        self._workouts: list[WorkoutLogEntry] = []
        self._meals: list[MealLogEntry] = []

    @property
    def stats(self) -> UserStats:
        return self._stats

    @property
    def workouts(self) -> tuple[WorkoutLogEntry, ...]:
        """Committed workouts, newest first."""
        return tuple(self._workouts)

    @property
    def meals(self) -> tuple[MealLogEntry, ...]:
        """Logged meals, newest first."""
        return tuple(self._meals)

    def _update(self, reason: str, **changes: object) -> UserStats:
        self._stats = self._stats.model_copy(update=changes)
        logger.debug(f"stats: {reason}", **changes)
        return self._stats

    # Deltas

    def apply_meal_delta(self, calories: int) -> UserStats:
        calories = MEAL_CALORIES.clamp(calories)
        return self._update("Meal delta applied", calories_in=self._stats.calories_in + calories)

    def apply_session_delta(self, duration_seconds: int) -> UserStats:
        minutes = max(duration_seconds, 0) // 60
        return self._update("Session delta applied", gym_minutes=self._stats.gym_minutes + minutes)

    def update_water(self, amount_ml: int) -> UserStats:
        amount_ml = WATER_ADD_ML.clamp(amount_ml)
        return self._update("Water added", water_current=self._stats.water_current + amount_ml)

    def add_steps(self, count: int) -> UserStats:
        count = STEPS_ADD.clamp(count)
        return self._update("Steps added", steps=self._stats.steps + count)

    def set_mood(self, mood: Mood) -> UserStats:
        return self._update("Mood set", mood=mood)

    # Overwrites

    def set_targets(self, targets: TargetUpdate) -> UserStats:
        """Overwrite every target present in targets; absent ones are kept."""
        changes: dict[str, int] = {}
        if targets.calories_target is not None:
            changes["calories_target"] = CALORIES_TARGET.clamp(targets.calories_target)
        if targets.water_target is not None:
            changes["water_target"] = WATER_TARGET_ML.clamp(targets.water_target)
        if targets.steps_target is not None:
            changes["steps_target"] = STEPS_TARGET.clamp(targets.steps_target)
        if not changes:
            return self._stats
        logger.info("stats: Targets overwritten", **changes)
        return self._update("Targets set", **changes)

    # Log + delta units

    def log_meal(self, meal: MealData) -> MealLogEntry:
        """Append a meal and add its calories in one step."""
        entry = MealLogEntry(**meal.model_dump())
        self._meals.insert(0, entry)
        self.apply_meal_delta(entry.calories)
        logger.info("stats: Meal logged", food_name=entry.food_name, calories=entry.calories)
        return entry

    def commit_workout(self, entry: WorkoutLogEntry) -> WorkoutLogEntry:
        """Append a finished workout and add its minutes in one step."""
        self._workouts.insert(0, entry)
        self.apply_session_delta(entry.duration_seconds)
        logger.info(
            "stats: Workout committed",
            workout_id=entry.id,
            activity_kind=entry.activity_kind.value,
            duration_seconds=entry.duration_seconds,
        )
        return entry
