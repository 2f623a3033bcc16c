"""Tenure-based level model for the dashboard.

The nominal level rotates every LEVEL_PERIOD_DAYS since the user's first
workout: Principiante, Intermedio, Avanzado, then the cycle restarts. This is
a display notion only; the generator derives its own target level from recent
history (see workout_generator.derive_training_level) and the two are never
reconciled.
"""

from __future__ import annotations

from datetime import date

from wodtracker.core.constants import DEFAULT_LEVEL, LEVEL_CYCLE, LEVEL_PERIOD_DAYS


def default_level_progress() -> dict:
    """Level info for a user with no workouts yet."""
    return {
        "current_level": DEFAULT_LEVEL.value,
        "next_level": DEFAULT_LEVEL.successor.value,
        "progress_percentage": 0,
        "weeks_into_period": 0,
        "days_until_next_level": LEVEL_PERIOD_DAYS,
    }


def level_progress_for_days(days_since_first: int) -> dict:
    """Level info after days_since_first whole days of tenure."""
    days = max(0, int(days_since_first))
    period_in_cycle = (days // LEVEL_PERIOD_DAYS) % len(LEVEL_CYCLE)
    days_into_period = days % LEVEL_PERIOD_DAYS
    current = LEVEL_CYCLE[period_in_cycle]
    progress = min(100.0, max(0.0, days_into_period / LEVEL_PERIOD_DAYS * 100))
    return {
        "current_level": current.value,
        "next_level": current.successor.value,
        "progress_percentage": round(progress),
        "weeks_into_period": days_into_period // 7,
        "days_until_next_level": LEVEL_PERIOD_DAYS - days_into_period,
    }


def compute_level_progress(first_workout: date | None, today: date) -> dict:
    if first_workout is None:
        return default_level_progress()
    return level_progress_for_days((today - first_workout).days)
