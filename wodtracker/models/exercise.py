"""Exercise and WOD catalog models (read-only reference data)."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodtracker.db.base import Base


class Exercise(Base):
    """Exercise definition with category/subcategory, muscle group and optional level."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercise_categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    subcategory_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercise_subcategories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    muscle_group: Mapped[str | None] = mapped_column(String(100), nullable=True)
    level: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)  # None = any level
    active: Mapped[bool] = mapped_column(default=True, nullable=False)

    category: Mapped["ExerciseCategory | None"] = relationship("ExerciseCategory", back_populates="exercises")
    subcategory: Mapped["ExerciseSubcategory | None"] = relationship(
        "ExerciseSubcategory", back_populates="exercises"
    )


class Wod(Base):
    """Named WOD template: rounds, rest and the prescribed exercise list (JSON)."""

    __tablename__ = "wods"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)  # AMRAP, For Time, EMOM...
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    level: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    total_rounds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_between_rounds: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    category_id: Mapped[int | None] = mapped_column(
        ForeignKey("exercise_categories.id", ondelete="SET NULL"), nullable=True
    )
    subcategory_code: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    exercises: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    # "metadata" is reserved on declarative classes
    wod_metadata: Mapped[dict | None] = mapped_column("metadata", JSON, nullable=True)
    active: Mapped[bool] = mapped_column(default=True, nullable=False)

    category: Mapped["ExerciseCategory | None"] = relationship("ExerciseCategory")
