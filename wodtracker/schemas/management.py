"""Dashboard schemas: generator output, progress, calendar, comparisons."""

import datetime as dt

from pydantic import BaseModel

from wodtracker.schemas.workout import WodDetails


class GenerateWorkoutRequest(BaseModel):
    user_id: int | None = None


class GeneratedComponent(BaseModel):
    """Proposed component; same fields as a component payload so it can be posted back."""

    component_type: str
    order: int
    exercise_name: str | None = None
    wod_id: int | None = None
    duration: int | None = None
    weight: float | None = None
    reps: int | None = None
    sets: int | None = None
    distance: float | None = None
    calories: int | None = None
    wod_details: WodDetails | None = None


class GeneratedWorkout(BaseModel):
    success: bool = True
    level: str
    date: dt.date
    components: list[GeneratedComponent]


class LevelProgress(BaseModel):
    current_level: str
    next_level: str
    progress_percentage: int
    weeks_into_period: int
    days_until_next_level: int


class WorkoutTotals(BaseModel):
    total: int = 0
    completed: int = 0
    avg_duration: int | None = None
    first_workout: dt.date | None = None
    last_workout: dt.date | None = None


class ComponentTotals(BaseModel):
    count: int
    avg_duration: int | None = None


class GoalTotals(BaseModel):
    total: int = 0
    completed: int = 0
    avg_progress: float = 0


class RecordTotals(BaseModel):
    total_prs: int = 0


class ProgressRead(BaseModel):
    workouts: WorkoutTotals
    components: dict[str, ComponentTotals]
    goals: GoalTotals
    records: RecordTotals
    level: LevelProgress


class CalendarComponent(BaseModel):
    component_type: str
    wod_id: int | None = None
    exercise_name: str | None = None
    wod_name: str | None = None


class CalendarWorkout(BaseModel):
    id: int
    date: dt.date
    level: str
    duration: int | None = None
    completed: bool
    notes: str | None = None
    components: list[CalendarComponent] = []


class WeightEntry(BaseModel):
    weight: float
    reps: int | None = None
    sets: int | None = None
    date: dt.date
    workout_id: int


class WeightStats(BaseModel):
    count: int
    max_weight: float
    min_weight: float
    avg_weight: float
    improvement: float
    first_date: dt.date
    last_date: dt.date


class WeightComparison(BaseModel):
    exercise_name: str
    records: list[WeightEntry]
    stats: WeightStats


class WodTime(BaseModel):
    duration: int
    date: dt.date
    workout_id: int


class WodStats(BaseModel):
    count: int
    best: int
    worst: int
    average: int
    improvement: int


class WodComparison(BaseModel):
    wod_id: int
    wod_name: str
    wod_type: str | None = None
    times: list[WodTime]
    stats: WodStats


class WodComparisonBoth(BaseModel):
    hero: list[WodComparison]
    nasty_girls: list[WodComparison]
