"""Synthetic cardio metrics for an activity session.

Distance is derived from elapsed time and a fixed per-activity speed, not from
any sensor.
"""

from unifit.schemas.activity import ActivityKind, SessionMetrics

SECONDS_PER_HOUR = 3600


def estimate(activity_kind: ActivityKind, elapsed_seconds: int) -> SessionMetrics:
    """Estimate distance and pace after elapsed_seconds of activity_kind.

    Args:
        activity_kind: Activity being tracked
        elapsed_seconds: Logical session time (ticks)

    Returns:
        SessionMetrics; both fields are None for kinds without a distance metric,
        pace is None until distance is positive
    """
    if elapsed_seconds < 0:
        raise ValueError(f"elapsed_seconds must be non-negative, got {elapsed_seconds}")

    speed_kmh = activity_kind.speed_kmh
    if speed_kmh is None:
        return SessionMetrics()

    distance_km = round(speed_kmh * (elapsed_seconds / SECONDS_PER_HOUR), 2)
    pace_min_per_km = None
    if distance_km > 0:
        pace_min_per_km = round((elapsed_seconds / 60) / distance_km, 2)

    return SessionMetrics(distance_km=distance_km, pace_min_per_km=pace_min_per_km)


def format_elapsed(seconds: int) -> str:
    """Render elapsed seconds as m:ss."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"
