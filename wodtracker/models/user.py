"""User model - created lazily on first write."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodtracker.core.constants import DEFAULT_LEVEL
from wodtracker.db.base import Base


class User(Base):
    """Training profile: stored level and a running count of logged workouts.

    No auth yet: rows are upserted with placeholder email/name the first time
    a user id writes anything.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    current_level: Mapped[str] = mapped_column(String(20), default=DEFAULT_LEVEL.value, nullable=False)
    workouts_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    workouts: Mapped[list["Workout"]] = relationship(
        "Workout", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    goals: Mapped[list["Goal"]] = relationship(
        "Goal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    records: Mapped[list["Record"]] = relationship(
        "Record", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
