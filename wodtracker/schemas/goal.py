"""Goal schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class GoalCreate(BaseModel):
    user_id: int | None = None
    description: str = Field(..., min_length=1)
    type: str = Field(default="general", max_length=50)
    target_value: float = 0
    current_value: float = 0
    deadline: dt.date | None = None
    completed: bool = False


class GoalUpdate(BaseModel):
    description: str | None = Field(None, min_length=1)
    type: str | None = Field(None, max_length=50)
    target_value: float | None = None
    current_value: float | None = None
    deadline: dt.date | None = None
    completed: bool | None = None


class GoalRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    description: str
    type: str
    target_value: float
    current_value: float
    deadline: dt.date | None = None
    completed: bool
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
