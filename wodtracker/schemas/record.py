"""Personal record schemas."""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class RecordCreate(BaseModel):
    user_id: int | None = None
    exercise: str = Field(..., min_length=1, max_length=255)
    type: str = Field(default="repeticiones", max_length=50)
    value: float
    notes: str | None = None
    is_pr: bool = False
    date: dt.date | None = None


class RecordUpdate(BaseModel):
    exercise: str | None = Field(None, min_length=1, max_length=255)
    type: str | None = Field(None, max_length=50)
    value: float | None = None
    notes: str | None = None
    is_pr: bool | None = None
    date: dt.date | None = None


class RecordRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    user_id: int
    exercise: str
    type: str
    value: float
    notes: str | None = None
    is_pr: bool
    date: dt.date
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
