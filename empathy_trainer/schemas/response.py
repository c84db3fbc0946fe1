"""Pydantic schemas for submitted responses."""
from datetime import date, datetime

from pydantic import BaseModel, Field


class ResponseSubmitSchema(BaseModel):
    scenario_id: int
    text: str
    duration_seconds: int | None = None
    self_rating: int | None = None


class ResponseOutSchema(BaseModel):
    id: int
    scenario_id: int
    response_text: str
    created_at: datetime
    created_on: date
    response_time_seconds: int | None = None
    self_rating: int | None = None
    viewed_example: bool
    response_length: int

    class Config:
        from_attributes = True


class SubmissionOutSchema(BaseModel):
    response_id: int
    current_streak: int
    total_responses: int
    achievements_unlocked: list[str]


class DifficultyUpdateSchema(BaseModel):
    # range is checked by the trainer so API and direct callers get the same error
    level: int = Field(description="Preferred difficulty, 1-5")
