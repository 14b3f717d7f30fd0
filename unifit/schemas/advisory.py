from enum import StrEnum

from pydantic import BaseModel, Field


class AdvisoryKind(StrEnum):
    DAILY_SUMMARY = "daily_summary"
    HYDRATION_ADVICE = "hydration_advice"


class DailySummary(BaseModel):
    score: int = Field(..., ge=0, le=100, description="Daily health score 0-100")
    summary: str = Field(..., description="3-5 sentences summary. Praise, improvements, suggestions.")
    focus_area: str


class HydrationAdvice(BaseModel):
    target: int = Field(..., ge=0, description="Recommended daily water intake in ml")
    advice: str = Field(..., description="Short advice based on activity and weather")
