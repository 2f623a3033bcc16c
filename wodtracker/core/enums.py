"""Shared enums for models and API."""

from enum import Enum


class Level(str, Enum):
    """Three-tier difficulty used for content and users."""

    PRINCIPIANTE = "Principiante"
    INTERMEDIO = "Intermedio"
    AVANZADO = "Avanzado"

    @property
    def successor(self) -> "Level":
        """Next tier; Avanzado cycles back to Intermedio, never to Principiante."""
        if self is Level.PRINCIPIANTE:
            return Level.INTERMEDIO
        if self is Level.INTERMEDIO:
            return Level.AVANZADO
        return Level.INTERMEDIO


class ComponentType(str, Enum):
    """Slot of a workout component."""

    WARMUP = "warmup"
    CALISTHENICS = "calisthenics"
    OLY = "oly"  # Olympic lifting
    MUSCLE = "muscle"  # Accessory / strength work
    WOD = "wod"
    CARDIO = "cardio"


class WodFamily(str, Enum):
    """Benchmark WOD families shown in the comparison view."""

    HERO = "hero"
    NASTY_GIRLS = "nasty_girls"
