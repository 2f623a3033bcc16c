"""Workout CRUD endpoints (/entrenamientos)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from wodtracker.core.config import get_settings
from wodtracker.core.constants import WORKOUT_LIST_LIMIT
from wodtracker.db.errors import is_missing_table
from wodtracker.db.retry import execute_with_retry
from wodtracker.db.session import get_db
from wodtracker.models.workout import Workout, WorkoutComponent
from wodtracker.schemas.common import MutationResult
from wodtracker.schemas.workout import ComponentRead, WorkoutCreate, WorkoutRead, WorkoutUpdate
from wodtracker.services.component_notes import split_legacy_notes
from wodtracker.services.users import (
    decrement_workouts_completed,
    ensure_user_exists,
    increment_workouts_completed,
)

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()

# Columns a PUT may clear by sending null
NULLABLE_FIELDS = {"duration", "notes", "calories"}


def _component_read(c: WorkoutComponent) -> ComponentRead:
    notes, wod_details = c.notes, c.wod_details
    if wod_details is None:
        # Rows written before the wod_details column existed
        notes, wod_details = split_legacy_notes(notes)
    return ComponentRead(
        id=c.id,
        workout_id=c.workout_id,
        component_type=c.component_type,
        wod_id=c.wod_id,
        exercise_name=c.exercise_name,
        duration=c.duration,
        weight=float(c.weight) if c.weight is not None else None,
        reps=c.reps,
        sets=c.sets,
        distance=c.distance,
        calories=c.calories,
        notes=notes,
        wod_details=wod_details,
        order=c.order,
        wod_name=c.wod.name if c.wod else None,
        wod_type=c.wod.type if c.wod else None,
    )


def _workout_read(w: Workout) -> WorkoutRead:
    return WorkoutRead(
        id=w.id,
        user_id=w.user_id,
        date=w.date,
        level=w.level,
        duration=w.duration,
        exercises=w.exercises or [],
        completed=w.completed,
        notes=w.notes,
        calories=w.calories,
        created_at=w.created_at,
        updated_at=w.updated_at,
        components=[_component_read(c) for c in w.components],
    )


async def _get_workout_or_404(db: AsyncSession, workout_id: int) -> Workout:
    result = await execute_with_retry(db, select(Workout).where(Workout.id == workout_id))
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Latest workouts for a user with their ordered components. Empty if not migrated yet."""
    user_id = user_id or settings.demo_user_id
    try:
        result = await execute_with_retry(
            db,
            select(Workout)
            .where(Workout.user_id == user_id)
            .options(selectinload(Workout.components).selectinload(WorkoutComponent.wod))
            .order_by(Workout.date.desc(), Workout.id.desc())
            .limit(WORKOUT_LIST_LIMIT),
        )
    except DBAPIError as e:
        if is_missing_table(e):
            logger.warning("GET /entrenamientos: %s", e.orig)
            return []
        raise
    return [_workout_read(w) for w in result.scalars().all()]


@router.post("", response_model=MutationResult, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Log a workout with its components. With components, the workout duration is
    the sum of component durations. Increments the user's workout counter.
    """
    user_id = payload.user_id or settings.demo_user_id
    await ensure_user_exists(db, user_id)

    duration = payload.duration
    if payload.components:
        duration = sum(c.duration or 0 for c in payload.components) or None

    workout = Workout(
        user_id=user_id,
        date=payload.date or datetime.now(timezone.utc).date(),
        level=payload.level.value,
        duration=duration,
        exercises=payload.exercises,
        completed=payload.completed,
        notes=payload.notes,
        calories=payload.calories,
    )
    db.add(workout)
    await db.flush()

    for i, c in enumerate(payload.components):
        db.add(WorkoutComponent(
            workout_id=workout.id,
            component_type=c.component_type.value,
            wod_id=c.wod_id,
            exercise_name=c.exercise_name,
            duration=c.duration,
            weight=c.weight,
            reps=c.reps,
            sets=c.sets,
            distance=c.distance,
            calories=c.calories,
            notes=c.notes,
            wod_details=c.wod_details.model_dump(exclude_unset=True) if c.wod_details else None,
            order=c.order if c.order is not None else i,
        ))
    await db.flush()

    await increment_workouts_completed(db, user_id)
    return MutationResult(id=workout.id)


@router.put("/{workout_id}", response_model=MutationResult)
async def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update of the workout row (components are not touched)."""
    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    workout = await _get_workout_or_404(db, workout_id)
    for k, v in data.items():
        setattr(workout, k, v.value if k == "level" and v is not None else v)
    workout.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return MutationResult()


@router.delete("/{workout_id}", response_model=MutationResult)
async def delete_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout and its components; the owner's counter never drops below zero."""
    workout = await _get_workout_or_404(db, workout_id)
    user_id = workout.user_id
    await db.delete(workout)
    await db.flush()
    await decrement_workouts_completed(db, user_id)
    return MutationResult()
