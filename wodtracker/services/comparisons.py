"""Comparison views: lift weights per exercise and benchmark WOD times per WOD.

Both follow the same shape: fetch matching component rows in chronological
order, group them, then compute count/min/max/average and an improvement
delta that is positive when the athlete got better (heavier lift, faster time).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.core.enums import ComponentType
from wodtracker.db.retry import execute_with_retry
from wodtracker.models.exercise import Wod
from wodtracker.models.workout import Workout, WorkoutComponent


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 away from zero for positive values (round() rounds half to even)."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def summarize_weight_history(rows: Iterable[Any]) -> list[dict]:
    """
    Group weight rows by exercise_name (rows must be ordered by name, then date).
    Rows need: exercise_name, weight, reps, sets, date, workout_id.
    """
    grouped: dict[str, list[dict]] = {}
    for r in rows:
        grouped.setdefault(r.exercise_name, []).append({
            "weight": float(r.weight) if r.weight is not None else None,
            "reps": r.reps,
            "sets": r.sets,
            "date": r.date,
            "workout_id": r.workout_id,
        })

    comparisons = []
    for exercise_name, records in grouped.items():
        valid = [rec for rec in records if rec["weight"] is not None and rec["weight"] > 0]
        if not valid:
            continue
        weights = [rec["weight"] for rec in valid]
        comparisons.append({
            "exercise_name": exercise_name,
            "records": valid,
            "stats": {
                "count": len(weights),
                "max_weight": max(weights),
                "min_weight": min(weights),
                "avg_weight": round_half_up(sum(weights) / len(weights), 2),
                "improvement": weights[-1] - weights[0] if len(weights) > 1 else 0,
                "first_date": valid[0]["date"],
                "last_date": valid[-1]["date"],
            },
        })
    return comparisons


def summarize_wod_times(rows: Iterable[Any]) -> list[dict]:
    """
    Group completion rows by wod_id (rows ordered by WOD name, then date).
    Rows need: wod_id, wod_name, wod_type, duration, date, workout_id.
    Lower duration is better, so improvement = first - last.
    """
    grouped: dict[int, dict] = {}
    for r in rows:
        wod = grouped.setdefault(r.wod_id, {
            "wod_id": r.wod_id,
            "wod_name": r.wod_name,
            "wod_type": r.wod_type,
            "times": [],
        })
        if r.duration is not None and r.duration > 0:
            wod["times"].append({"duration": int(r.duration), "date": r.date, "workout_id": r.workout_id})

    comparisons = []
    for wod in grouped.values():
        durations = [t["duration"] for t in wod["times"]]
        if not durations:
            continue
        wod["stats"] = {
            "count": len(durations),
            "best": min(durations),
            "worst": max(durations),
            "average": int(round_half_up(sum(durations) / len(durations))),
            "improvement": durations[0] - durations[-1] if len(durations) > 1 else 0,
        }
        comparisons.append(wod)
    return comparisons


async def weight_comparison(db: AsyncSession, user_id: int, component_type: ComponentType) -> list[dict]:
    stmt = (
        select(
            WorkoutComponent.exercise_name,
            WorkoutComponent.weight,
            WorkoutComponent.reps,
            WorkoutComponent.sets,
            Workout.date,
            Workout.id.label("workout_id"),
        )
        .join(Workout, Workout.id == WorkoutComponent.workout_id)
        .where(
            Workout.user_id == user_id,
            WorkoutComponent.component_type == component_type.value,
            WorkoutComponent.exercise_name.isnot(None),
            WorkoutComponent.weight.isnot(None),
            WorkoutComponent.weight > 0,
        )
        .order_by(WorkoutComponent.exercise_name, Workout.date, WorkoutComponent.id)
    )
    result = await execute_with_retry(db, stmt)
    return summarize_weight_history(result.all())


async def wod_comparison(
    db: AsyncSession,
    user_id: int,
    subcategory_code: str,
    category_id: int,
) -> list[dict]:
    stmt = (
        select(
            Wod.id.label("wod_id"),
            Wod.name.label("wod_name"),
            Wod.type.label("wod_type"),
            WorkoutComponent.duration,
            Workout.date,
            Workout.id.label("workout_id"),
        )
        .join(WorkoutComponent, WorkoutComponent.wod_id == Wod.id)
        .join(Workout, Workout.id == WorkoutComponent.workout_id)
        .where(
            Wod.category_id == category_id,
            Wod.subcategory_code == subcategory_code,
            Wod.active.is_(True),
            Workout.user_id == user_id,
            WorkoutComponent.component_type == ComponentType.WOD.value,
            WorkoutComponent.duration.isnot(None),
        )
        .order_by(Wod.name, Workout.date, WorkoutComponent.id)
    )
    result = await execute_with_retry(db, stmt)
    return summarize_wod_times(result.all())
