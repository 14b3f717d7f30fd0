from datetime import timezone

import pytest
from pydantic import ValidationError

from unifit.schemas.activity import ActivityKind, Effort
from unifit.schemas.logs import MealData, WorkoutLogEntry
from unifit.schemas.stats import Mood, TargetUpdate, UserStats
from unifit.stats.aggregator import StatsAggregator


def _workout(duration_seconds: int) -> WorkoutLogEntry:
    return WorkoutLogEntry(
        activity_kind=ActivityKind.GYM,
        duration_seconds=duration_seconds,
        effort=Effort.HARD,
        ai_insight="Solid volume!",
    )


def test_default_store_starts_at_zero():
    stats = StatsAggregator().stats

    assert stats.steps == 0
    assert stats.water_current == 0
    assert stats.calories_in == 0
    assert stats.gym_minutes == 0
    assert stats.mood == Mood.NEUTRAL


def test_meal_delta_adds_calories(store):
    store.apply_meal_delta(450)
    store.apply_meal_delta(350)

    assert store.stats.calories_in == 800


def test_repeated_calls_are_not_deduplicated(store):
    store.update_water(250)
    store.update_water(250)

    assert store.stats.water_current == 500


def test_session_delta_adds_whole_minutes(store):
    store.apply_session_delta(2700)
    store.apply_session_delta(59)

    assert store.stats.gym_minutes == 45


def test_negative_inputs_are_clamped_not_raised(store):
    store.apply_meal_delta(-300)
    store.update_water(-100)
    store.apply_session_delta(-60)
    store.add_steps(-5)

    stats = store.stats
    assert (stats.calories_in, stats.water_current, stats.gym_minutes, stats.steps) == (0, 0, 0, 0)


def test_oversized_water_amount_is_clamped(store):
    store.update_water(999999)

    assert store.stats.water_current == 5000


def test_set_targets_overwrites_only_provided_fields(store):
    store.set_targets(TargetUpdate(calories_target=2200))

    assert store.stats.calories_target == 2200
    assert store.stats.water_target == 2500
    assert store.stats.steps_target == 10000


def test_set_targets_overwrites_wholesale_not_additively(store):
    store.set_targets(TargetUpdate(calories_target=2200, water_target=3000, steps_target=8000))
    store.set_targets(TargetUpdate(calories_target=2100))

    assert store.stats.calories_target == 2100
    assert store.stats.water_target == 3000
    assert store.stats.steps_target == 8000


def test_set_targets_clamps_to_target_bounds(store):
    store.set_targets(TargetUpdate(calories_target=50, water_target=100000))

    assert store.stats.calories_target == 1000
    assert store.stats.water_target == 8000


def test_empty_target_update_keeps_snapshot(store):
    before = store.stats

    assert store.set_targets(TargetUpdate()) is before


def test_set_targets_leaves_current_values_alone(store):
    store.apply_meal_delta(1450)

    store.set_targets(TargetUpdate(calories_target=1200))

    assert store.stats.calories_in == 1450


def test_mutations_replace_the_snapshot(store):
    before = store.stats

    store.add_steps(1000)

    assert before.steps == 0
    assert store.stats.steps == 1000
    assert store.stats is not before


def test_set_mood(store):
    store.set_mood(Mood.TIRED)

    assert store.stats.mood == Mood.TIRED


def test_log_meal_appends_entry_and_calories_together(store):
    salad = MealData(food_name="Grilled Chicken Salad", calories=450, protein=40, carbs=12, fat=15, health_rating=9)
    oats = MealData(food_name="Oatmeal with Berries", calories=350, protein=10, carbs=55, fat=6, health_rating=10)

    first = store.log_meal(oats)
    second = store.log_meal(salad)

    assert store.meals == (second, first)
    assert store.stats.calories_in == 800
    assert first.id != second.id
    assert first.timestamp.tzinfo == timezone.utc


def test_commit_workout_appends_entry_and_minutes_together(store):
    entry = _workout(1800)

    store.commit_workout(entry)

    assert store.workouts == (entry,)
    assert store.stats.gym_minutes == 30


def test_initial_snapshot_is_kept():
    initial = UserStats(steps=8432, water_current=1250, calories_in=1450, gym_minutes=45, mood=Mood.HAPPY)

    store = StatsAggregator(initial)

    assert store.stats == initial


def test_workout_entry_is_immutable():
    entry = _workout(60)

    with pytest.raises(ValidationError):
        entry.notes = "edited"

    assert entry.notes == ""
