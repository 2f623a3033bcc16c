"""Catalog reads: categories, subcategories, exercises and WODs."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from wodtracker.db.retry import execute_with_retry
from wodtracker.db.session import get_db
from wodtracker.models.category import ExerciseCategory, ExerciseSubcategory
from wodtracker.models.exercise import Exercise, Wod
from wodtracker.schemas.catalog import CategoryRead, ExerciseRead, SubcategoryRead, WodRead

router = APIRouter()


def _wod_read(wod: Wod, category_name: str | None) -> WodRead:
    return WodRead(
        id=wod.id,
        name=wod.name,
        type=wod.type,
        description=wod.description,
        level=wod.level,
        total_rounds=wod.total_rounds,
        rest_between_rounds=wod.rest_between_rounds,
        category_id=wod.category_id,
        category_name=category_name,
        subcategory_code=wod.subcategory_code,
        exercises=wod.exercises or [],
        metadata=wod.wod_metadata,
    )


def _wod_query():
    return (
        select(Wod, ExerciseCategory.name.label("category_name"))
        .outerjoin(ExerciseCategory, ExerciseCategory.id == Wod.category_id)
        .where(Wod.active.is_(True))
    )


@router.get("/categorias", response_model=list[CategoryRead])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All exercise categories, alphabetical."""
    result = await execute_with_retry(db, select(ExerciseCategory).order_by(ExerciseCategory.name))
    return list(result.scalars().all())


@router.get("/subcategorias", response_model=list[SubcategoryRead])
async def list_subcategories(
    categoria_id: int | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Subcategories, optionally for one category."""
    stmt = select(ExerciseSubcategory)
    if categoria_id is not None:
        stmt = stmt.where(ExerciseSubcategory.category_id == categoria_id)
    result = await execute_with_retry(db, stmt.order_by(ExerciseSubcategory.name))
    return list(result.scalars().all())


@router.get("/ejercicios", response_model=list[ExerciseRead])
async def list_exercises(
    categoria_id: int | None = None,
    subcategoria_id: int | None = None,
    nivel: str | None = None,
    search: str | None = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    """Active exercises with category/subcategory names. search matches name or muscle group."""
    stmt = (
        select(
            Exercise,
            ExerciseCategory.name.label("category_name"),
            ExerciseSubcategory.name.label("subcategory_name"),
        )
        .outerjoin(ExerciseCategory, ExerciseCategory.id == Exercise.category_id)
        .outerjoin(ExerciseSubcategory, ExerciseSubcategory.id == Exercise.subcategory_id)
        .where(Exercise.active.is_(True))
    )
    if categoria_id is not None:
        stmt = stmt.where(Exercise.category_id == categoria_id)
    if subcategoria_id is not None:
        stmt = stmt.where(Exercise.subcategory_id == subcategoria_id)
    if nivel:
        stmt = stmt.where(Exercise.level == nivel)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Exercise.name.ilike(pattern), Exercise.muscle_group.ilike(pattern)))
    result = await execute_with_retry(db, stmt.order_by(Exercise.name, Exercise.id))
    return [
        ExerciseRead(
            id=ex.id,
            name=ex.name,
            description=ex.description,
            category_id=ex.category_id,
            subcategory_id=ex.subcategory_id,
            muscle_group=ex.muscle_group,
            level=ex.level,
            category_name=category_name,
            subcategory_name=subcategory_name,
        )
        for ex, category_name, subcategory_name in result.all()
    ]


@router.get("/wods", response_model=list[WodRead])
async def list_wods(
    nivel: str | None = None,
    search: str | None = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    """Active WODs; search matches name or description."""
    stmt = _wod_query()
    if nivel:
        stmt = stmt.where(Wod.level == nivel)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(or_(Wod.name.ilike(pattern), Wod.description.ilike(pattern)))
    result = await execute_with_retry(db, stmt.order_by(Wod.name, Wod.id))
    return [_wod_read(wod, category_name) for wod, category_name in result.all()]


@router.get("/wods/{wod_id}", response_model=WodRead)
async def get_wod(wod_id: int, db: AsyncSession = Depends(get_db)):
    """One active WOD with its exercise breakdown and metadata."""
    result = await execute_with_retry(db, _wod_query().where(Wod.id == wod_id))
    row = result.one_or_none()
    if row is None:
        raise HTTPException(status_code=404, detail="WOD not found")
    wod, category_name = row
    return _wod_read(wod, category_name)
