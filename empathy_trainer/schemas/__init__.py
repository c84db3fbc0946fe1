from empathy_trainer.schemas.progress import ProgressOutSchema, ProgressViewSchema
from empathy_trainer.schemas.response import (
    DifficultyUpdateSchema,
    ResponseOutSchema,
    ResponseSubmitSchema,
    SubmissionOutSchema,
)
from empathy_trainer.schemas.scenario import ChallengeOutSchema, ScenarioOutSchema
from empathy_trainer.schemas.stats import AchievementSchema, StatsOutSchema, StreakInfoSchema

__all__ = [
    "AchievementSchema",
    "ChallengeOutSchema",
    "DifficultyUpdateSchema",
    "ProgressOutSchema",
    "ProgressViewSchema",
    "ResponseOutSchema",
    "ResponseSubmitSchema",
    "ScenarioOutSchema",
    "StatsOutSchema",
    "StreakInfoSchema",
    "SubmissionOutSchema",
]
