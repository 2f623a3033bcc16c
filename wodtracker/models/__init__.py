"""ORM models - import all so Base.metadata is complete for migrations."""

from wodtracker.models.category import ExerciseCategory, ExerciseSubcategory
from wodtracker.models.exercise import Exercise, Wod
from wodtracker.models.goal import Goal
from wodtracker.models.record import Record
from wodtracker.models.user import User
from wodtracker.models.workout import Workout, WorkoutComponent

__all__ = [
    "Exercise",
    "ExerciseCategory",
    "ExerciseSubcategory",
    "Goal",
    "Record",
    "User",
    "Wod",
    "Workout",
    "WorkoutComponent",
]
