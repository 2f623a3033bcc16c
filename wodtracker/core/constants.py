"""Application constants."""

from wodtracker.core.enums import Level, WodFamily

DEFAULT_LEVEL = Level.INTERMEDIO
LEVEL_CYCLE = (Level.PRINCIPIANTE, Level.INTERMEDIO, Level.AVANZADO)

# Generator: level derivation window and escalation threshold
LEVEL_LOOKBACK_DAYS = 14
LEVEL_ESCALATION_WORKOUTS = 8
# Generator: WODs / oly lifts used within this window are avoided
RECENT_USE_DAYS = 7

# Tenure-based level model: each level lasts one period
LEVEL_PERIOD_DAYS = 14

# Workout list page size
WORKOUT_LIST_LIMIT = 50

# Generator slot sizes
WARMUP_PICKS = 3
WARMUP_SECONDS = 300
GENERAL_WARMUP_NAME = "General warmup"
GENERAL_WARMUP_SECONDS = 600
CALISTHENICS_PICKS = 3
CALISTHENICS_SETS = 3
OLY_PICKS = 2
OLY_REPS = 5
OLY_SETS = 3
MUSCLE_PICKS = 4

# Per-level prescriptions
CALISTHENICS_REPS = {Level.PRINCIPIANTE: 10, Level.INTERMEDIO: 15, Level.AVANZADO: 20}
OLY_WEIGHT_KG = {Level.PRINCIPIANTE: 40, Level.INTERMEDIO: 60, Level.AVANZADO: 80}
MUSCLE_REPS = {Level.PRINCIPIANTE: 8, Level.INTERMEDIO: 10, Level.AVANZADO: 12}
MUSCLE_SETS = {Level.PRINCIPIANTE: 3, Level.INTERMEDIO: 4, Level.AVANZADO: 5}

# Catalog tags (case-insensitive substring match)
WARMUP_CATEGORY_TAGS = ("calentamiento", "warmup")
WARMUP_NAME_TAGS = ("calentamiento", "estiramiento", "stretching")
CALISTHENICS_CATEGORY_TAGS = ("calistenia",)
CALISTHENICS_MUSCLE_TAGS = ("cuerpo",)
CALISTHENICS_NAME_TAGS = ("flexión", "sentadilla", "dominada", "burpee", "mountain climber")
OLY_CATEGORY_TAGS = ("olímpico", "oly")
OLY_NAME_TAGS = ("snatch", "clean", "jerk", "arranque", "envión")
MUSCLE_CATEGORY_TAGS = ("musculación", "fuerza")

# Cardio
CARDIO_GOAL_TYPE = "resistencia"
CARDIO_GOAL_TAGS = ("correr", "cardio", "5k", "calorías")
RUN_GOAL_TAGS = ("5k", "correr")
CALORIE_GOAL_TAGS = ("1000", "calorías")
RUN_NAME = "Run 5k"
RUN_DISTANCE_KM = 5.0
CALORIE_NAME = "Cardio 1000kcal"
CALORIE_TARGET_KCAL = 1000

# WOD comparison: benchmark family -> wods.subcategory_code
WOD_FAMILY_SUBCATEGORY = {
    WodFamily.HERO: "hero_wods_detallados",
    WodFamily.NASTY_GIRLS: "the_girls_benchmark_wods",
}

BUSY_MESSAGE = "Server busy. Please try again in a few moments."
