"""User bootstrap and workout counter upkeep."""

from sqlalchemy import case, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.core.constants import DEFAULT_LEVEL
from wodtracker.db.retry import execute_with_retry
from wodtracker.models.user import User


def _insert_for(db: AsyncSession):
    if db.get_bind().dialect.name == "sqlite":
        return sqlite_insert
    return pg_insert


async def ensure_user_exists(db: AsyncSession, user_id: int) -> int:
    """
    Create the user with placeholder profile data unless it already exists.
    Single INSERT ... ON CONFLICT DO NOTHING, so concurrent first writes cannot race.
    """
    stmt = (
        _insert_for(db)(User)
        .values(
            id=user_id,
            email=f"usuario{user_id}@entrenamiento.app",
            name=f"Usuario {user_id}",
            current_level=DEFAULT_LEVEL.value,
            workouts_completed=0,
        )
        .on_conflict_do_nothing(index_elements=[User.id])
    )
    await execute_with_retry(db, stmt)
    return user_id


async def increment_workouts_completed(db: AsyncSession, user_id: int) -> None:
    await execute_with_retry(
        db,
        update(User)
        .where(User.id == user_id)
        .values(workouts_completed=User.workouts_completed + 1),
    )


async def decrement_workouts_completed(db: AsyncSession, user_id: int) -> None:
    """Decrement the counter, never below zero."""
    await execute_with_retry(
        db,
        update(User)
        .where(User.id == user_id)
        .values(
            workouts_completed=case(
                (User.workouts_completed > 0, User.workouts_completed - 1),
                else_=0,
            )
        ),
    )
