"""Workout and WorkoutComponent models."""

from __future__ import annotations

import datetime as dt
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodtracker.core.constants import DEFAULT_LEVEL
from wodtracker.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Workout(Base):
    """A logged training day: level, total duration and an ordered list of components."""

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_user_date", "user_id", "date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, default=lambda: _utcnow().date())
    level: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_LEVEL.value)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    exercises: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)  # legacy free-form list
    completed: Mapped[bool] = mapped_column(default=False, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    calories: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user: Mapped["User"] = relationship("User", back_populates="workouts")
    components: Mapped[list["WorkoutComponent"]] = relationship(
        "WorkoutComponent",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by=lambda: [WorkoutComponent.order, WorkoutComponent.id],
    )


class WorkoutComponent(Base):
    """One slot of a workout (warmup, calisthenics, oly, muscle, wod, cardio).

    notes holds free text only; structured WOD detail lives in wod_details.
    """

    __tablename__ = "workout_components"
    __table_args__ = (
        Index("ix_workout_components_workout_id", "workout_id"),
        Index("ix_workout_components_type", "component_type"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    component_type: Mapped[str] = mapped_column(String(20), nullable=False)
    wod_id: Mapped[int | None] = mapped_column(ForeignKey("wods.id", ondelete="SET NULL"), nullable=True)
    exercise_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    weight: Mapped[float | None] = mapped_column(Numeric(8, 2), nullable=True)  # kg
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance: Mapped[float | None] = mapped_column(Float, nullable=True)  # km
    calories: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    wod_details: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="components")
    wod: Mapped["Wod | None"] = relationship("Wod")
