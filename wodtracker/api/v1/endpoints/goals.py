"""Goal CRUD endpoints (/objetivos)."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.core.config import get_settings
from wodtracker.db.retry import execute_with_retry
from wodtracker.db.session import get_db
from wodtracker.models.goal import Goal
from wodtracker.schemas.common import MutationResult
from wodtracker.schemas.goal import GoalCreate, GoalRead, GoalUpdate
from wodtracker.services.users import ensure_user_exists

router = APIRouter()
settings = get_settings()

NULLABLE_FIELDS = {"deadline"}


async def _get_goal_or_404(db: AsyncSession, goal_id: int) -> Goal:
    result = await execute_with_retry(db, select(Goal).where(Goal.id == goal_id))
    goal = result.scalar_one_or_none()
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get("", response_model=list[GoalRead])
async def list_goals(
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Goals for a user, newest first."""
    user_id = user_id or settings.demo_user_id
    result = await execute_with_retry(
        db,
        select(Goal).where(Goal.user_id == user_id).order_by(Goal.created_at.desc(), Goal.id.desc()),
    )
    return list(result.scalars().all())


@router.post("", response_model=MutationResult, status_code=201)
async def create_goal(
    payload: GoalCreate,
    db: AsyncSession = Depends(get_db),
):
    user_id = payload.user_id or settings.demo_user_id
    await ensure_user_exists(db, user_id)
    goal = Goal(user_id=user_id, **payload.model_dump(exclude={"user_id"}))
    db.add(goal)
    await db.flush()
    return MutationResult(id=goal.id)


@router.put("/{goal_id}", response_model=MutationResult)
async def update_goal(
    goal_id: int,
    payload: GoalUpdate,
    db: AsyncSession = Depends(get_db),
):
    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    goal = await _get_goal_or_404(db, goal_id)
    for k, v in data.items():
        setattr(goal, k, v)
    goal.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return MutationResult()


@router.delete("/{goal_id}", response_model=MutationResult)
async def delete_goal(
    goal_id: int,
    db: AsyncSession = Depends(get_db),
):
    goal = await _get_goal_or_404(db, goal_id)
    await db.delete(goal)
    await db.flush()
    return MutationResult()
