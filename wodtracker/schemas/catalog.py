"""Catalog schemas: categories, subcategories, exercises, WODs."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: str | None = None


class SubcategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    category_id: int
    name: str
    code: str | None = None


class ExerciseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    name: str
    description: str | None = None
    category_id: int | None = None
    subcategory_id: int | None = None
    muscle_group: str | None = None
    level: str | None = None
    category_name: str | None = None
    subcategory_name: str | None = None


class WodRead(BaseModel):
    id: int
    name: str
    type: str | None = None
    description: str | None = None
    level: str | None = None
    total_rounds: int | None = None
    rest_between_rounds: int | None = None
    category_id: int | None = None
    category_name: str | None = None
    subcategory_code: str | None = None
    exercises: list[Any] = []
    metadata: dict[str, Any] | None = None
