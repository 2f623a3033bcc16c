"""Tests for the tenure-based level model."""
from datetime import date, timedelta

import pytest

from wodtracker.services.level_progress import compute_level_progress, level_progress_for_days


class TestLevelProgressForDays:
    def test_first_day_starts_principiante(self):
        assert level_progress_for_days(0) == {
            "current_level": "Principiante",
            "next_level": "Intermedio",
            "progress_percentage": 0,
            "weeks_into_period": 0,
            "days_until_next_level": 14,
        }

    def test_day_27_is_last_day_of_intermedio(self):
        assert level_progress_for_days(27) == {
            "current_level": "Intermedio",
            "next_level": "Avanzado",
            "progress_percentage": 93,
            "weeks_into_period": 1,
            "days_until_next_level": 1,
        }

    def test_avanzado_is_followed_by_intermedio(self):
        info = level_progress_for_days(30)
        assert info["current_level"] == "Avanzado"
        assert info["next_level"] == "Intermedio"

    @pytest.mark.parametrize("days,level", [(42, "Principiante"), (56, "Intermedio"), (70, "Avanzado")])
    def test_cycle_restarts_every_six_weeks(self, days, level):
        assert level_progress_for_days(days)["current_level"] == level

    def test_half_period_rounds_to_50(self):
        assert level_progress_for_days(7)["progress_percentage"] == 50


class TestComputeLevelProgress:
    def test_no_workouts_uses_defaults(self):
        assert compute_level_progress(None, date(2026, 10, 19)) == {
            "current_level": "Intermedio",
            "next_level": "Avanzado",
            "progress_percentage": 0,
            "weeks_into_period": 0,
            "days_until_next_level": 14,
        }

    def test_counts_days_since_first_workout(self):
        today = date(2026, 10, 19)
        info = compute_level_progress(today - timedelta(days=15), today)
        assert info["current_level"] == "Intermedio"
        assert info["days_until_next_level"] == 13

    def test_first_workout_in_future_is_clamped(self):
        today = date(2026, 10, 19)
        info = compute_level_progress(today + timedelta(days=3), today)
        assert info["current_level"] == "Principiante"
        assert info["progress_percentage"] == 0
