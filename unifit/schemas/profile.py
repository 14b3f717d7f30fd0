from typing import Literal

from pydantic import BaseModel, Field, field_validator

from unifit.stats.bounds import HEIGHT_CM, SLEEP_HOURS, WEIGHT_KG


class UserProfile(BaseModel):
    """Answers collected by the onboarding wizard and the profile screen."""

    weight: int = 70  # kg
    height: int = 170  # cm
    goal: Literal["Lose Weight", "Maintain", "Gain Muscle"] = "Lose Weight"
    target_weight: int = 65  # kg
    diet_type: str = "Non-Veg"
    restrictions: list[str] = Field(default_factory=list)
    activity_level: str = "Mixed movement"
    workout_freq: str = "3"
    workout_time: str = "Evening"
    recurring_pain: list[str] = Field(default_factory=list)
    protein_supplements: bool = False
    eating_out_freq: str = "1-2 times/week"
    sleep_hours: int = 7
    stress_level: Literal["Low", "Medium", "High"] = "Medium"

    @field_validator("weight", "target_weight", mode="before")
    @classmethod
    def clamp_weight(cls, value: float) -> int:
        return WEIGHT_KG.clamp(float(value))

    @field_validator("height", mode="before")
    @classmethod
    def clamp_height(cls, value: float) -> int:
        return HEIGHT_CM.clamp(float(value))

    @field_validator("sleep_hours", mode="before")
    @classmethod
    def clamp_sleep(cls, value: float) -> int:
        return SLEEP_HOURS.clamp(float(value))


class ProfileAnalysis(BaseModel):
    """Targets and advice derived from a profile."""

    daily_calories: int = Field(..., ge=0)
    daily_water_ml: int = Field(..., ge=0)
    daily_protein_g: int = Field(..., ge=0)
    daily_steps: int = Field(..., ge=0, description="Recommended daily step count based on activity level")
    timeline_prediction: str = Field(..., description="Estimated timeline to reach goal")
    hydration_warnings: list[str]
    personalized_tips: list[str]
    workout_intensity: str = Field(..., description="Recommended intensity (e.g., Moderate, High HIIT)")
