"""Pydantic schemas for scenarios and today's challenge."""
from pydantic import BaseModel


class ScenarioOutSchema(BaseModel):
    id: int
    scenario_key: str
    example_key: str
    category: str
    difficulty: int
    usage_count: int
    # filled from the localization resolver when the caller asks for display text
    prompt: str | None = None
    example: str | None = None
    category_name: str | None = None

    class Config:
        from_attributes = True


class ChallengeOutSchema(BaseModel):
    status: str  # available | limit_reached | exhausted
    responses_today: int
    daily_cap: int
    scenario: ScenarioOutSchema | None = None
