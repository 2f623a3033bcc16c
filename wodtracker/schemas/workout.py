"""Workout and WorkoutComponent schemas."""

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wodtracker.core.enums import ComponentType, Level


class WodDetails(BaseModel):
    """Snapshot of the WOD prescription attached to a component.

    Extra keys are kept so the payload round-trips unchanged. The catalog
    columns behind rounds, rest, exercises and metadata are free-form JSON,
    so those values pass through without coercion.
    """

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    description: str | None = None
    type: str | None = None
    level: str | None = None
    total_rounds: Any = None
    rest_between_rounds: Any = None
    exercises: Any = []
    metadata: Any = None


class ComponentBase(BaseModel):
    component_type: ComponentType
    wod_id: int | None = None
    exercise_name: str | None = Field(None, max_length=255)
    duration: int | None = Field(None, ge=0)
    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    sets: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    calories: int | None = Field(None, ge=0)
    notes: str | None = None
    wod_details: WodDetails | None = None


class ComponentCreate(ComponentBase):
    # Defaults to the component's position in the submitted list
    order: int | None = None


class ComponentRead(ComponentBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    workout_id: int
    order: int
    # Stored payload as-is, without WodDetails defaults filled in
    wod_details: dict[str, Any] | None = None
    wod_name: str | None = None
    wod_type: str | None = None


class WorkoutCreate(BaseModel):
    user_id: int | None = None
    date: dt.date | None = None
    level: Level = Level.INTERMEDIO
    duration: int | None = Field(None, ge=0)
    exercises: list[Any] = []
    completed: bool = False
    notes: str | None = None
    calories: int | None = Field(None, ge=0)
    components: list[ComponentCreate] = []


class WorkoutUpdate(BaseModel):
    date: dt.date | None = None
    level: Level | None = None
    duration: int | None = Field(None, ge=0)
    exercises: list[Any] | None = None
    completed: bool | None = None
    notes: str | None = None
    calories: int | None = Field(None, ge=0)


class WorkoutRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    date: dt.date
    level: str
    duration: int | None = None
    exercises: list[Any] = []
    completed: bool = False
    notes: str | None = None
    calories: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    components: list[ComponentRead] = []
