"""Workout generator: propose today's six-slot session for a user.

Slots, in order: warmup, calisthenics, olympic lifts, accessory muscle work,
one WOD and a cardio finisher. The target level comes from the last two weeks
of training; WODs and olympic lifts used in the last week are avoided when
alternatives exist. Nothing is persisted here: the caller posts the proposal
back to /entrenamientos once the athlete has done it.

Every catalog/history lookup is best effort. A failing query is logged and
treated as "no data" so one broken table never blocks generation. Each lookup
runs in its own SAVEPOINT, so on PostgreSQL a failed statement does not abort
the lookups that follow it.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from collections.abc import Awaitable, Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any, TypeVar

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.core.constants import (
    CALISTHENICS_CATEGORY_TAGS,
    CALISTHENICS_MUSCLE_TAGS,
    CALISTHENICS_NAME_TAGS,
    CALISTHENICS_PICKS,
    CALISTHENICS_REPS,
    CALISTHENICS_SETS,
    CALORIE_GOAL_TAGS,
    CALORIE_NAME,
    CALORIE_TARGET_KCAL,
    CARDIO_GOAL_TAGS,
    CARDIO_GOAL_TYPE,
    DEFAULT_LEVEL,
    GENERAL_WARMUP_NAME,
    GENERAL_WARMUP_SECONDS,
    LEVEL_ESCALATION_WORKOUTS,
    LEVEL_LOOKBACK_DAYS,
    MUSCLE_CATEGORY_TAGS,
    MUSCLE_PICKS,
    MUSCLE_REPS,
    MUSCLE_SETS,
    OLY_CATEGORY_TAGS,
    OLY_NAME_TAGS,
    OLY_PICKS,
    OLY_REPS,
    OLY_SETS,
    OLY_WEIGHT_KG,
    RECENT_USE_DAYS,
    RUN_DISTANCE_KM,
    RUN_GOAL_TAGS,
    RUN_NAME,
    WARMUP_CATEGORY_TAGS,
    WARMUP_NAME_TAGS,
    WARMUP_PICKS,
    WARMUP_SECONDS,
)
from wodtracker.core.enums import ComponentType, Level
from wodtracker.db.retry import execute_with_retry
from wodtracker.models.category import ExerciseCategory
from wodtracker.models.exercise import Exercise, Wod
from wodtracker.models.goal import Goal
from wodtracker.models.user import User
from wodtracker.models.workout import Workout, WorkoutComponent

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _today() -> date:
    return datetime.now(timezone.utc).date()


def as_level(value: str | None) -> Level:
    """Parse a stored level string; unknown values fall back to the default."""
    try:
        return Level(value)
    except ValueError:
        return DEFAULT_LEVEL


def level_from_history(levels: list[str]) -> Level:
    """
    Most frequent level among recent workouts (ties: first seen), escalated one
    tier once the athlete logged LEVEL_ESCALATION_WORKOUTS or more sessions.
    """
    most_common = as_level(Counter(levels).most_common(1)[0][0])
    if len(levels) >= LEVEL_ESCALATION_WORKOUTS:
        return most_common.successor
    return most_common


async def _best_effort(
    db: AsyncSession, what: str, default: T, lookup: Callable[[], Awaitable[T]]
) -> T:
    """Run lookup in a SAVEPOINT so a failed statement leaves the outer transaction usable."""
    try:
        async with db.begin_nested():
            return await lookup()
    except Exception:
        logger.exception("generate-workout: %s lookup failed, continuing without it", what)
        return default


def _tagged(column, tags: tuple[str, ...]):
    return [column.ilike(f"%{tag}%") for tag in tags]


async def derive_training_level(db: AsyncSession, user_id: int, today: date | None = None) -> Level:
    """Level today's workout should target, from the last LEVEL_LOOKBACK_DAYS of history."""
    since = (today or _today()) - timedelta(days=LEVEL_LOOKBACK_DAYS)
    result = await execute_with_retry(
        db,
        select(Workout.level)
        .where(Workout.user_id == user_id, Workout.date >= since)
        .order_by(Workout.date.desc(), Workout.id.desc()),
    )
    levels = list(result.scalars().all())
    if not levels:
        result = await execute_with_retry(db, select(User.current_level).where(User.id == user_id))
        return as_level(result.scalar_one_or_none())
    return level_from_history(levels)


async def recent_wod_ids(db: AsyncSession, user_id: int, today: date | None = None) -> set[int]:
    since = (today or _today()) - timedelta(days=RECENT_USE_DAYS)
    result = await execute_with_retry(
        db,
        select(WorkoutComponent.wod_id)
        .distinct()
        .join(Workout, Workout.id == WorkoutComponent.workout_id)
        .where(
            Workout.user_id == user_id,
            Workout.date >= since,
            WorkoutComponent.component_type == ComponentType.WOD.value,
            WorkoutComponent.wod_id.isnot(None),
        ),
    )
    return set(result.scalars().all())


async def recent_oly_exercises(db: AsyncSession, user_id: int, today: date | None = None) -> set[str]:
    since = (today or _today()) - timedelta(days=RECENT_USE_DAYS)
    result = await execute_with_retry(
        db,
        select(WorkoutComponent.exercise_name)
        .distinct()
        .join(Workout, Workout.id == WorkoutComponent.workout_id)
        .where(
            Workout.user_id == user_id,
            Workout.date >= since,
            WorkoutComponent.component_type == ComponentType.OLY.value,
            WorkoutComponent.exercise_name.isnot(None),
        ),
    )
    return set(result.scalars().all())


async def cardio_goal_description(db: AsyncSession, user_id: int) -> str | None:
    """Description of the first open endurance-related goal, if any."""
    result = await execute_with_retry(
        db,
        select(Goal.description)
        .where(
            Goal.user_id == user_id,
            Goal.completed.is_(False),
            or_(Goal.type == CARDIO_GOAL_TYPE, *_tagged(Goal.description, CARDIO_GOAL_TAGS)),
        )
        .order_by(Goal.id)
        .limit(1),
    )
    return result.scalar_one_or_none()


async def _exercise_names(db: AsyncSession, *conditions) -> list[str]:
    result = await execute_with_retry(
        db,
        select(Exercise.name)
        .outerjoin(ExerciseCategory, ExerciseCategory.id == Exercise.category_id)
        .where(Exercise.active.is_(True), *conditions)
        .order_by(Exercise.name, Exercise.id),
    )
    return list(result.scalars().all())


def _level_matches(level: Level):
    return or_(Exercise.level == level.value, Exercise.level.is_(None))


async def warmup_candidates(db: AsyncSession) -> list[str]:
    return await _exercise_names(
        db,
        or_(
            *_tagged(ExerciseCategory.name, WARMUP_CATEGORY_TAGS),
            *_tagged(Exercise.name, WARMUP_NAME_TAGS),
        ),
    )


async def calisthenics_candidates(db: AsyncSession, level: Level) -> list[str]:
    return await _exercise_names(
        db,
        or_(
            *_tagged(ExerciseCategory.name, CALISTHENICS_CATEGORY_TAGS),
            *_tagged(Exercise.muscle_group, CALISTHENICS_MUSCLE_TAGS),
            *_tagged(Exercise.name, CALISTHENICS_NAME_TAGS),
        ),
        _level_matches(level),
    )


async def oly_candidates(db: AsyncSession) -> list[str]:
    return await _exercise_names(
        db,
        or_(
            *_tagged(ExerciseCategory.name, OLY_CATEGORY_TAGS),
            *_tagged(Exercise.name, OLY_NAME_TAGS),
        ),
    )


async def muscle_candidates(db: AsyncSession, level: Level) -> list[str]:
    return await _exercise_names(
        db,
        or_(*_tagged(ExerciseCategory.name, MUSCLE_CATEGORY_TAGS)),
        _level_matches(level),
    )


async def pick_wod(
    db: AsyncSession,
    level: Level,
    exclude_ids: set[int],
    rng: random.Random,
) -> Wod | None:
    """Random active WOD of the level not used recently; else any active WOD."""
    stmt = select(Wod).where(Wod.active.is_(True), Wod.level == level.value)
    if exclude_ids:
        stmt = stmt.where(Wod.id.notin_(sorted(exclude_ids)))
    result = await execute_with_retry(db, stmt.order_by(Wod.id))
    wods = list(result.scalars().all())
    if not wods:
        result = await execute_with_retry(db, select(Wod).where(Wod.active.is_(True)).order_by(Wod.id))
        wods = list(result.scalars().all())
    return rng.choice(wods) if wods else None


def pick_olympic_lifts(candidates: list[str], recent: set[str], rng: random.Random) -> list[str]:
    """Prefer lifts not done this week; if every lift was used, rotate through all of them."""
    fresh = [name for name in candidates if name not in recent]
    pool = fresh or candidates
    return rng.sample(pool, min(OLY_PICKS, len(pool)))


def choose_cardio(goal_description: str | None, rng: random.Random) -> dict[str, Any]:
    """5 km run or 1000 kcal block; a matching open goal decides, otherwise a coin flip."""
    run = None
    if goal_description:
        text = goal_description.lower()
        if any(tag in text for tag in RUN_GOAL_TAGS):
            run = True
        elif any(tag in text for tag in CALORIE_GOAL_TAGS):
            run = False
    if run is None:
        run = rng.random() > 0.5
    if run:
        return {"component_type": ComponentType.CARDIO.value, "exercise_name": RUN_NAME, "distance": RUN_DISTANCE_KM}
    return {"component_type": ComponentType.CARDIO.value, "exercise_name": CALORIE_NAME, "calories": CALORIE_TARGET_KCAL}


def wod_details_for(wod: Wod) -> dict[str, Any]:
    return {
        "name": wod.name,
        "description": wod.description,
        "type": wod.type,
        "level": wod.level,
        "total_rounds": wod.total_rounds,
        "rest_between_rounds": wod.rest_between_rounds,
        "exercises": wod.exercises or [],
        "metadata": wod.wod_metadata,
    }


def _sample(names: list[str], k: int, rng: random.Random) -> list[str]:
    return rng.sample(names, min(k, len(names)))


async def generate_workout(
    db: AsyncSession,
    user_id: int,
    today: date | None = None,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """Build the proposal: {level, date, components}. Components carry an increasing order."""
    today = today or _today()
    rng = rng or random.Random()

    level = await _best_effort(
        db, "training level", DEFAULT_LEVEL, lambda: derive_training_level(db, user_id, today)
    )
    used_wods = await _best_effort(db, "recent WODs", set(), lambda: recent_wod_ids(db, user_id, today))
    used_oly = await _best_effort(
        db, "recent oly lifts", set(), lambda: recent_oly_exercises(db, user_id, today)
    )
    goal_description = await _best_effort(
        db, "cardio goals", None, lambda: cardio_goal_description(db, user_id)
    )

    components: list[dict[str, Any]] = []

    def add(component: dict[str, Any]) -> None:
        component["order"] = len(components)
        components.append(component)

    # 1. Warmup
    warmups = _sample(
        await _best_effort(db, "warmup exercises", [], lambda: warmup_candidates(db)), WARMUP_PICKS, rng
    )
    for name in warmups:
        add({"component_type": ComponentType.WARMUP.value, "exercise_name": name, "duration": WARMUP_SECONDS})
    if not warmups:
        add({
            "component_type": ComponentType.WARMUP.value,
            "exercise_name": GENERAL_WARMUP_NAME,
            "duration": GENERAL_WARMUP_SECONDS,
        })

    # 2. Calisthenics
    calisthenics = await _best_effort(
        db, "calisthenics exercises", [], lambda: calisthenics_candidates(db, level)
    )
    for name in _sample(calisthenics, CALISTHENICS_PICKS, rng):
        add({
            "component_type": ComponentType.CALISTHENICS.value,
            "exercise_name": name,
            "reps": CALISTHENICS_REPS[level],
            "sets": CALISTHENICS_SETS,
        })

    # 3. Olympic lifts (weekly rotation)
    oly = await _best_effort(db, "oly exercises", [], lambda: oly_candidates(db))
    for name in pick_olympic_lifts(oly, used_oly, rng):
        add({
            "component_type": ComponentType.OLY.value,
            "exercise_name": name,
            "weight": OLY_WEIGHT_KG[level],
            "reps": OLY_REPS,
            "sets": OLY_SETS,
        })

    # 4. Accessory muscle work
    muscle = await _best_effort(db, "muscle exercises", [], lambda: muscle_candidates(db, level))
    for name in _sample(muscle, MUSCLE_PICKS, rng):
        add({
            "component_type": ComponentType.MUSCLE.value,
            "exercise_name": name,
            "reps": MUSCLE_REPS[level],
            "sets": MUSCLE_SETS[level],
        })

    # 5. WOD; duration is filled in when the athlete logs a time
    wod = await _best_effort(db, "WOD", None, lambda: pick_wod(db, level, used_wods, rng))
    if wod is not None:
        add({
            "component_type": ComponentType.WOD.value,
            "wod_id": wod.id,
            "exercise_name": wod.name,
            "duration": None,
            "wod_details": wod_details_for(wod),
        })

    # 6. Cardio
    add(choose_cardio(goal_description, rng))

    return {"level": level.value, "date": today, "components": components}
