"""Numeric input bounds.

Out-of-range user input is clamped to the nearest bound and never raised.
"""

from dataclasses import dataclass

from loguru import logger


@dataclass(frozen=True)
class NumericBounds:
    name: str
    minimum: int
    maximum: int

    def clamp(self, value: float) -> int:
        clamped = int(min(max(value, self.minimum), self.maximum))
        if clamped != value:
            logger.debug(
                f"bounds: Clamped {self.name}",
                value=value,
                clamped=clamped,
                minimum=self.minimum,
                maximum=self.maximum,
            )
        return clamped


# Profile rollers
WEIGHT_KG = NumericBounds("weight_kg", 30, 150)
HEIGHT_CM = NumericBounds("height_cm", 120, 230)
SLEEP_HOURS = NumericBounds("sleep_hours", 3, 12)

# Stats deltas
MEAL_CALORIES = NumericBounds("meal_calories", 0, 5000)
WATER_ADD_ML = NumericBounds("water_add_ml", 0, 5000)
STEPS_ADD = NumericBounds("steps_add", 0, 100000)

# Targets
CALORIES_TARGET = NumericBounds("calories_target", 1000, 6000)
WATER_TARGET_ML = NumericBounds("water_target_ml", 500, 8000)
STEPS_TARGET = NumericBounds("steps_target", 1000, 50000)
