"""Tests for weight and WOD time aggregation."""
from datetime import date
from types import SimpleNamespace

import pytest

from wodtracker.services.comparisons import round_half_up, summarize_weight_history, summarize_wod_times


def weight_row(name, weight, day, workout_id, reps=5, sets=3):
    return SimpleNamespace(exercise_name=name, weight=weight, reps=reps, sets=sets, date=day, workout_id=workout_id)


def wod_row(wod_id, name, duration, day, workout_id):
    return SimpleNamespace(
        wod_id=wod_id, wod_name=name, wod_type="For Time", duration=duration, date=day, workout_id=workout_id
    )


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,ndigits,expected",
        [(2.5, 0, 3), (3.5, 0, 4), (276.666, 0, 277), (0.125, 2, 0.13), (46.666666, 2, 46.67)],
    )
    def test_rounds_half_away_from_zero(self, value, ndigits, expected):
        assert round_half_up(value, ndigits) == pytest.approx(expected)


class TestSummarizeWeightHistory:
    def test_stats_for_one_exercise(self):
        rows = [
            weight_row("Snatch", 40, date(2026, 9, 1), 1),
            weight_row("Snatch", 50, date(2026, 9, 8), 2),
            weight_row("Snatch", 60, date(2026, 9, 15), 3),
        ]
        [snatch] = summarize_weight_history(rows)
        assert snatch["exercise_name"] == "Snatch"
        assert snatch["stats"] == {
            "count": 3,
            "max_weight": 60,
            "min_weight": 40,
            "avg_weight": 50,
            "improvement": 20,
            "first_date": date(2026, 9, 1),
            "last_date": date(2026, 9, 15),
        }
        assert [r["workout_id"] for r in snatch["records"]] == [1, 2, 3]

    def test_single_entry_has_zero_improvement(self):
        [only] = summarize_weight_history([weight_row("Clean", 70, date(2026, 9, 1), 1)])
        assert only["stats"]["improvement"] == 0

    def test_average_rounds_to_two_decimals(self):
        rows = [weight_row("Clean", w, date(2026, 9, d), d) for d, w in ((1, 40), (2, 50), (3, 50))]
        [clean] = summarize_weight_history(rows)
        assert clean["stats"]["avg_weight"] == pytest.approx(46.67)

    def test_groups_by_exercise_and_drops_empty_groups(self):
        rows = [
            weight_row("Clean", 70, date(2026, 9, 1), 1),
            weight_row("Deadlift", 0, date(2026, 9, 1), 1),
            weight_row("Snatch", 45, date(2026, 9, 1), 1),
        ]
        assert [c["exercise_name"] for c in summarize_weight_history(rows)] == ["Clean", "Snatch"]

    def test_decimal_weights_become_floats(self):
        from decimal import Decimal

        [row] = summarize_weight_history([weight_row("Snatch", Decimal("42.50"), date(2026, 9, 1), 1)])
        assert row["records"][0]["weight"] == 42.5
        assert isinstance(row["stats"]["max_weight"], float)


class TestSummarizeWodTimes:
    def test_lower_time_is_improvement(self):
        rows = [
            wod_row(2, "Fran", 300, date(2026, 9, 1), 1),
            wod_row(2, "Fran", 280, date(2026, 9, 8), 2),
            wod_row(2, "Fran", 250, date(2026, 9, 15), 3),
        ]
        [fran] = summarize_wod_times(rows)
        assert fran["stats"] == {"count": 3, "best": 250, "worst": 300, "average": 277, "improvement": 50}
        assert fran["wod_name"] == "Fran"
        assert [t["duration"] for t in fran["times"]] == [300, 280, 250]

    def test_slower_time_gives_negative_improvement(self):
        rows = [wod_row(1, "Murph", 2400, date(2026, 9, 1), 1), wod_row(1, "Murph", 2500, date(2026, 9, 8), 2)]
        [murph] = summarize_wod_times(rows)
        assert murph["stats"]["improvement"] == -100

    def test_wod_without_positive_times_is_dropped(self):
        rows = [
            wod_row(1, "Murph", 0, date(2026, 9, 1), 1),
            wod_row(3, "Cindy", 1200, date(2026, 9, 1), 1),
        ]
        assert [w["wod_id"] for w in summarize_wod_times(rows)] == [3]
