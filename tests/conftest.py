"""
Test fixtures for the WOD tracker API.

Every test gets a fresh SQLite file: tables are created and the catalog is
seeded through a sync engine, the app talks to the same file through
aiosqlite with the get_db dependency overridden.
"""

import os

os.environ.setdefault("DB_RETRY_INITIAL_DELAY", "0")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from wodtracker.db.base import Base  # noqa: E402
from wodtracker.db.session import enable_sqlite_savepoints, get_db  # noqa: E402
from wodtracker.main import app  # noqa: E402
from wodtracker.models import (  # noqa: E402
    Exercise,
    ExerciseCategory,
    ExerciseSubcategory,
    Wod,
)

BENCHMARK_CATEGORY_ID = 7


def seed_catalog(session: Session) -> None:
    session.add_all([
        ExerciseCategory(id=1, name="Calentamiento", description="Movilidad y activación"),
        ExerciseCategory(id=2, name="Calistenia"),
        ExerciseCategory(id=3, name="Olímpico"),
        ExerciseCategory(id=4, name="Musculación"),
        ExerciseCategory(id=BENCHMARK_CATEGORY_ID, name="WODs"),
    ])
    session.add_all([
        ExerciseSubcategory(id=1, category_id=2, name="Empuje", code="empuje"),
        ExerciseSubcategory(id=2, category_id=2, name="Tracción", code="traccion"),
        ExerciseSubcategory(id=3, category_id=BENCHMARK_CATEGORY_ID, name="Hero WODs", code="hero_wods_detallados"),
        ExerciseSubcategory(
            id=4, category_id=BENCHMARK_CATEGORY_ID, name="The Girls", code="the_girls_benchmark_wods"
        ),
    ])
    session.add_all([
        Exercise(id=1, name="Jumping jacks", category_id=1),
        Exercise(id=2, name="Movilidad de cadera", category_id=1),
        Exercise(id=3, name="Flexiones", category_id=2, subcategory_id=1, muscle_group="Pecho", level="Principiante"),
        Exercise(id=4, name="Dominadas", category_id=2, subcategory_id=2, muscle_group="Espalda"),
        Exercise(id=5, name="Fondos", category_id=2, subcategory_id=1, muscle_group="Tríceps", level="Intermedio"),
        Exercise(id=6, name="Muscle up", category_id=2, subcategory_id=2, muscle_group="Espalda", level="Avanzado"),
        Exercise(id=7, name="Snatch", category_id=3, muscle_group="Full body"),
        Exercise(id=8, name="Clean and jerk", category_id=3, muscle_group="Full body"),
        Exercise(id=9, name="Power clean", category_id=3, muscle_group="Full body"),
        Exercise(id=10, name="Press banca", category_id=4, muscle_group="Pecho", level="Intermedio"),
        Exercise(id=11, name="Peso muerto", category_id=4, muscle_group="Espalda"),
        Exercise(id=12, name="Remo con barra", category_id=4, muscle_group="Espalda", level="Intermedio"),
        Exercise(id=13, name="Curl de bíceps", category_id=4, muscle_group="Bíceps", level="Avanzado"),
        Exercise(id=14, name="Press militar retirado", category_id=4, level="Intermedio", active=False),
    ])
    session.add_all([
        Wod(
            id=1,
            name="Murph",
            type="For Time",
            description="1 mile run, 100 pull-ups, 200 push-ups, 300 squats, 1 mile run",
            level="Intermedio",
            total_rounds=1,
            rest_between_rounds=0,
            category_id=BENCHMARK_CATEGORY_ID,
            subcategory_code="hero_wods_detallados",
            exercises=[{"name": "Pull-ups", "reps": 100}, {"name": "Push-ups", "reps": 200}],
            wod_metadata={"vest_kg": 9},
        ),
        Wod(
            id=2,
            name="Fran",
            type="For Time",
            description="21-15-9 thrusters and pull-ups",
            level="Intermedio",
            total_rounds=3,
            category_id=BENCHMARK_CATEGORY_ID,
            subcategory_code="the_girls_benchmark_wods",
            exercises=[{"name": "Thrusters"}, {"name": "Pull-ups"}],
        ),
        Wod(
            id=3,
            name="Cindy",
            type="AMRAP",
            description="20 min: 5 pull-ups, 10 push-ups, 15 squats",
            level="Principiante",
            category_id=BENCHMARK_CATEGORY_ID,
            subcategory_code="the_girls_benchmark_wods",
            exercises=[],
        ),
        Wod(id=4, name="Retired chipper", type="For Time", level="Intermedio", active=False),
    ])


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "wodtracker-test.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        seed_catalog(session)
        session.commit()
    engine.dispose()
    return path


@pytest.fixture
def sync_session(db_path):
    """Sync session on the test database, for arranging rows and asserting on them."""
    engine = create_engine(f"sqlite:///{db_path}")
    session = sessionmaker(engine, expire_on_commit=False)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def session_maker(db_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool)
    enable_sqlite_savepoints(engine)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def client(session_maker) -> TestClient:
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
