"""Pydantic schemas for the progress aggregate."""
from datetime import date

from pydantic import BaseModel

from empathy_trainer.schemas.stats import AchievementSchema


class ProgressOutSchema(BaseModel):
    """Immutable snapshot of the aggregate row."""

    version: int
    current_streak: int
    longest_streak: int
    total_responses: int
    last_activity_date: date | None = None
    start_date: date
    total_active_days: int
    average_response_length: float
    average_self_rating: float
    examples_viewed: int
    unique_scenarios_completed: int
    preferred_difficulty: int
    tutorial_completed: bool
    achievements_unlocked: list[str]

    class Config:
        from_attributes = True
        frozen = True


class ProgressViewSchema(BaseModel):
    progress: ProgressOutSchema
    level: int
    level_description: str
    streak_status: str
    motivational_message: str
    next_milestone: str
    activity_percentage: str
    responses_per_day: float
    responded_today: bool
    achievements: list[AchievementSchema]
