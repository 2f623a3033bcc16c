"""Exercise categories and subcategories - catalog classification."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wodtracker.db.base import Base


class ExerciseCategory(Base):
    """Top-level grouping (e.g. Calistenia, Olímpico, WODs). Also classifies WODs."""

    __tablename__ = "exercise_categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    subcategories: Mapped[list["ExerciseSubcategory"]] = relationship(
        "ExerciseSubcategory", back_populates="category", cascade="all, delete-orphan"
    )
    exercises: Mapped[list["Exercise"]] = relationship("Exercise", back_populates="category")


class ExerciseSubcategory(Base):
    __tablename__ = "exercise_subcategories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("exercise_categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)

    category: Mapped["ExerciseCategory"] = relationship("ExerciseCategory", back_populates="subcategories")
    exercises: Mapped[list["Exercise"]] = relationship("Exercise", back_populates="subcategory")
