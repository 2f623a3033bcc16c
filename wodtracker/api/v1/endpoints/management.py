"""Dashboard endpoints: workout generator, progress, calendar and comparisons."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timezone
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import case, func, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wodtracker.core.config import get_settings
from wodtracker.core.constants import WOD_FAMILY_SUBCATEGORY
from wodtracker.core.enums import ComponentType, WodFamily
from wodtracker.db.errors import is_missing_table
from wodtracker.db.retry import execute_with_retry
from wodtracker.db.session import get_db
from wodtracker.models.goal import Goal
from wodtracker.models.record import Record
from wodtracker.models.workout import Workout, WorkoutComponent
from wodtracker.schemas.management import (
    CalendarComponent,
    CalendarWorkout,
    ComponentTotals,
    GeneratedWorkout,
    GenerateWorkoutRequest,
    GoalTotals,
    LevelProgress,
    ProgressRead,
    RecordTotals,
    WeightComparison,
    WodComparison,
    WodComparisonBoth,
    WorkoutTotals,
)
from wodtracker.services.comparisons import round_half_up, weight_comparison, wod_comparison
from wodtracker.services.level_progress import compute_level_progress
from wodtracker.services.users import ensure_user_exists
from wodtracker.services.workout_generator import generate_workout

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

T = TypeVar("T")

WEIGHT_COMPARISON_TYPES = {ComponentType.OLY.value: ComponentType.OLY, ComponentType.MUSCLE.value: ComponentType.MUSCLE}


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _rounded(value) -> int | None:
    return int(round_half_up(float(value))) if value is not None else None


async def _empty_if_missing(
    db: AsyncSession, what: str, empty: T, query: Callable[[], Awaitable[T]]
) -> T:
    """Run query in a SAVEPOINT; a table that is not migrated yet yields `empty` instead of an error."""
    try:
        async with db.begin_nested():
            return await query()
    except DBAPIError as e:
        if is_missing_table(e):
            logger.warning("%s: %s", what, e.orig)
            return empty
        raise


@router.post("/generate-workout", response_model=GeneratedWorkout)
async def generate(
    payload: GenerateWorkoutRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Propose today's workout for the user. Nothing is saved."""
    user_id = (payload.user_id if payload else None) or settings.demo_user_id
    await ensure_user_exists(db, user_id)
    proposal = await generate_workout(db, user_id)
    logger.info(
        "generate-workout: user=%s level=%s components=%d",
        user_id, proposal["level"], len(proposal["components"]),
    )
    return GeneratedWorkout(success=True, **proposal)


async def _component_stats(db: AsyncSession, user_id: int) -> dict[str, ComponentTotals]:
    result = await execute_with_retry(
        db,
        select(
            WorkoutComponent.component_type,
            func.count(WorkoutComponent.id),
            func.avg(WorkoutComponent.duration),
        )
        .join(Workout, Workout.id == WorkoutComponent.workout_id)
        .where(Workout.user_id == user_id)
        .group_by(WorkoutComponent.component_type),
    )
    return {
        component_type: ComponentTotals(count=count, avg_duration=_rounded(avg_duration))
        for component_type, count, avg_duration in result.all()
    }


@router.get("/progress", response_model=ProgressRead)
async def progress(
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Totals for workouts, components, goals and PRs plus the tenure-based level."""
    user_id = user_id or settings.demo_user_id

    result = await execute_with_retry(
        db,
        select(
            func.count(Workout.id),
            func.coalesce(func.sum(case((Workout.completed.is_(True), 1), else_=0)), 0),
            func.avg(Workout.duration),
            func.min(Workout.date),
            func.max(Workout.date),
        ).where(Workout.user_id == user_id),
    )
    total, completed, avg_duration, first_workout, last_workout = result.one()
    workouts = WorkoutTotals(
        total=total,
        completed=completed,
        avg_duration=_rounded(avg_duration),
        first_workout=first_workout,
        last_workout=last_workout,
    )

    result = await execute_with_retry(
        db, select(Goal.completed, Goal.current_value, Goal.target_value).where(Goal.user_id == user_id)
    )
    goal_rows = result.all()
    ratios = [current / target * 100 for _, current, target in goal_rows if target]
    goals = GoalTotals(
        total=len(goal_rows),
        completed=sum(1 for done, _, _ in goal_rows if done),
        avg_progress=round_half_up(sum(ratios) / len(ratios), 2) if ratios else 0,
    )

    result = await execute_with_retry(
        db, select(func.count(Record.id)).where(Record.user_id == user_id, Record.is_pr.is_(True))
    )
    records = RecordTotals(total_prs=result.scalar_one())

    components = await _empty_if_missing(
        db, "GET /management/progress components", {}, lambda: _component_stats(db, user_id)
    )

    return ProgressRead(
        workouts=workouts,
        components=components,
        goals=goals,
        records=records,
        level=LevelProgress(**compute_level_progress(first_workout, _today())),
    )


@router.get("/calendar", response_model=list[CalendarWorkout])
async def calendar(
    user_id: int | None = None,
    month: int | None = None,
    year: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Workouts of one month (default: current) in date order with their components."""
    user_id = user_id or settings.demo_user_id
    today = _today()
    month = month if month is not None else today.month
    year = year if year is not None else today.year
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise HTTPException(status_code=400, detail="year out of range")

    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)

    async def query() -> list[Workout]:
        result = await execute_with_retry(
            db,
            select(Workout)
            .where(Workout.user_id == user_id, Workout.date >= start, Workout.date < end)
            .options(selectinload(Workout.components).selectinload(WorkoutComponent.wod))
            .order_by(Workout.date, Workout.id),
        )
        return list(result.scalars().all())

    workouts = await _empty_if_missing(db, "GET /management/calendar", [], query)
    return [
        CalendarWorkout(
            id=w.id,
            date=w.date,
            level=w.level,
            duration=w.duration,
            completed=w.completed,
            notes=w.notes,
            components=[
                CalendarComponent(
                    component_type=c.component_type,
                    wod_id=c.wod_id,
                    exercise_name=c.exercise_name,
                    wod_name=c.wod.name if c.wod else None,
                )
                for c in w.components
            ],
        )
        for w in workouts
    ]


@router.get("/weight-comparison", response_model=list[WeightComparison])
async def weight_comparison_view(
    type: str | None = None,
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Weight history per exercise for oly or muscle components."""
    component_type = WEIGHT_COMPARISON_TYPES.get(type or "")
    if component_type is None:
        raise HTTPException(status_code=400, detail="type must be 'oly' or 'muscle'")
    user_id = user_id or settings.demo_user_id
    return await _empty_if_missing(
        db, "GET /management/weight-comparison", [], lambda: weight_comparison(db, user_id, component_type)
    )


@router.get("/wod-comparison", response_model=list[WodComparison] | WodComparisonBoth)
async def wod_comparison_view(
    type: str | None = None,
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Benchmark WOD times per WOD; without type, hero and nasty_girls side by side."""
    user_id = user_id or settings.demo_user_id
    category_id = settings.benchmark_wod_category_id

    async def family(f: WodFamily) -> list[dict]:
        return await _empty_if_missing(
            db,
            f"GET /management/wod-comparison ({f.value})",
            [],
            lambda: wod_comparison(db, user_id, WOD_FAMILY_SUBCATEGORY[f], category_id),
        )

    if not type:
        return WodComparisonBoth(
            hero=await family(WodFamily.HERO),
            nasty_girls=await family(WodFamily.NASTY_GIRLS),
        )
    try:
        wod_family = WodFamily(type)
    except ValueError:
        raise HTTPException(status_code=400, detail="type must be 'hero' or 'nasty_girls'")
    return await family(wod_family)
