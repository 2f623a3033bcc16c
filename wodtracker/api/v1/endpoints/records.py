"""Personal record CRUD endpoints (/records)."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.core.config import get_settings
from wodtracker.db.retry import execute_with_retry
from wodtracker.db.session import get_db
from wodtracker.models.record import Record
from wodtracker.schemas.common import MutationResult
from wodtracker.schemas.record import RecordCreate, RecordRead, RecordUpdate
from wodtracker.services.users import ensure_user_exists

router = APIRouter()
settings = get_settings()

NULLABLE_FIELDS = {"notes"}


async def _get_record_or_404(db: AsyncSession, record_id: int) -> Record:
    result = await execute_with_retry(db, select(Record).where(Record.id == record_id))
    record = result.scalar_one_or_none()
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.get("", response_model=list[RecordRead])
async def list_records(
    user_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Records for a user, most recent date first."""
    user_id = user_id or settings.demo_user_id
    result = await execute_with_retry(
        db,
        select(Record).where(Record.user_id == user_id).order_by(Record.date.desc(), Record.id.desc()),
    )
    return list(result.scalars().all())


@router.post("", response_model=MutationResult, status_code=201)
async def create_record(
    payload: RecordCreate,
    db: AsyncSession = Depends(get_db),
):
    user_id = payload.user_id or settings.demo_user_id
    await ensure_user_exists(db, user_id)
    data = payload.model_dump(exclude={"user_id"})
    data["date"] = data["date"] or datetime.now(timezone.utc).date()
    record = Record(user_id=user_id, **data)
    db.add(record)
    await db.flush()
    return MutationResult(id=record.id)


@router.put("/{record_id}", response_model=MutationResult)
async def update_record(
    record_id: int,
    payload: RecordUpdate,
    db: AsyncSession = Depends(get_db),
):
    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k in NULLABLE_FIELDS
    }
    if not data:
        raise HTTPException(status_code=400, detail="No fields to update")
    record = await _get_record_or_404(db, record_id)
    for k, v in data.items():
        setattr(record, k, v)
    record.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return MutationResult()


@router.delete("/{record_id}", response_model=MutationResult)
async def delete_record(
    record_id: int,
    db: AsyncSession = Depends(get_db),
):
    record = await _get_record_or_404(db, record_id)
    await db.delete(record)
    await db.flush()
    return MutationResult()
