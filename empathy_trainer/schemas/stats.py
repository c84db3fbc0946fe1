"""Pydantic schemas for stats and achievements."""
from pydantic import BaseModel


class AchievementSchema(BaseModel):
    id: str
    description: str
    unlocked: bool


class StatsOutSchema(BaseModel):
    total_responses: int
    active_days: int
    unique_scenarios: int
    average_response_length: float
    average_self_rating: float
    examples_viewed: int
    active_scenarios: int
    rated_responses: int


class StreakInfoSchema(BaseModel):
    current_streak: int
    longest_streak: int
