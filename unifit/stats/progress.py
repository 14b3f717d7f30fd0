"""Presentation-time progress queries. Nothing here is stored."""

from unifit.schemas.stats import UserStats


def progress_ratio(current: float, target: float) -> float:
    """current / target clamped to [0, 1]; 0 when there is no positive target."""
    if target <= 0:
        return 0.0
    return min(max(current / target, 0.0), 1.0)


def progress_percent(current: float, target: float) -> int:
    return round(progress_ratio(current, target) * 100)


def steps_progress(stats: UserStats) -> float:
    return progress_ratio(stats.steps, stats.steps_target)


def water_progress(stats: UserStats) -> float:
    return progress_ratio(stats.water_current, stats.water_target)


def calories_progress(stats: UserStats) -> float:
    return progress_ratio(stats.calories_in, stats.calories_target)


def calories_remaining(stats: UserStats) -> int:
    return max(stats.calories_target - stats.calories_in, 0)
