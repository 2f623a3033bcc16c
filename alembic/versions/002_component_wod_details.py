"""workout_components.wod_details: move WOD detail out of the notes envelope.

Revision ID: 002
Revises: 001
Create Date: 2026-10-05

"""
import json
import logging
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from wodtracker.services.component_notes import split_legacy_notes


revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

logger = logging.getLogger("alembic.runtime.migration")

components = sa.table(
    "workout_components",
    sa.column("id", sa.Integer()),
    sa.column("notes", sa.Text()),
    sa.column("wod_details", sa.JSON(none_as_null=True)),
)


def upgrade() -> None:
    op.add_column("workout_components", sa.Column("wod_details", sa.JSON(none_as_null=True), nullable=True))

    conn = op.get_bind()
    rows = conn.execute(
        sa.select(components.c.id, components.c.notes).where(components.c.notes.like('%"wod_details"%'))
    ).all()
    moved = 0
    for component_id, notes in rows:
        free_text, wod_details = split_legacy_notes(notes)
        if wod_details is None:
            continue
        conn.execute(
            components.update()
            .where(components.c.id == component_id)
            .values(notes=free_text, wod_details=wod_details)
        )
        moved += 1
    logger.info("moved wod_details out of notes for %d component(s)", moved)


def downgrade() -> None:
    conn = op.get_bind()
    rows = conn.execute(
        sa.select(components.c.id, components.c.notes, components.c.wod_details).where(
            components.c.wod_details.isnot(None)
        )
    ).all()
    for component_id, notes, wod_details in rows:
        envelope = json.dumps({"wod_details": wod_details, "custom_notes": notes or ""})
        conn.execute(components.update().where(components.c.id == component_id).values(notes=envelope))
    op.drop_column("workout_components", "wod_details")
