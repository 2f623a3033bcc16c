"""Print row counts per table and how many components still carry a legacy notes envelope."""

import asyncio

from sqlalchemy import func, select
from sqlalchemy.exc import DBAPIError

from wodtracker.db.base import Base
from wodtracker.db.errors import is_missing_table
from wodtracker.db.session import async_session_maker, engine
from wodtracker.models import WorkoutComponent  # noqa: F401 - registers all models


async def check_data():
    async with async_session_maker() as session:
        for table in Base.metadata.sorted_tables:
            try:
                count = (await session.execute(select(func.count()).select_from(table))).scalar_one()
            except DBAPIError as e:
                if not is_missing_table(e):
                    raise
                print(f"{table.name}: not migrated")
                await session.rollback()
                continue
            print(f"{table.name}: {count} rows")

        legacy = await session.execute(
            select(func.count(WorkoutComponent.id)).where(
                WorkoutComponent.wod_details.is_(None),
                WorkoutComponent.notes.like('%"wod_details"%'),
            )
        )
        print(f"components with legacy notes envelope: {legacy.scalar_one()}")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(check_data())
