"""Achievement rules evaluated against the aggregate after each submission."""
from datetime import date

from empathy_trainer.schemas.stats import AchievementSchema
from empathy_trainer.services.localization import DEFAULT_LOCALE, CatalogResolver
from empathy_trainer.services.progress import activity_percentage, days_since_start

CONSISTENCY_MIN_DAYS = 30
CONSISTENCY_MIN_RATE = 0.8

# id -> (field on the aggregate or context, threshold)
THRESHOLDS = {
    "first_response": ("total_responses", 1),
    "three_day_streak": ("current_streak", 3),
    "week_streak": ("current_streak", 7),
    "two_week_streak": ("current_streak", 14),
    "month_streak": ("current_streak", 30),
    "fifty_responses": ("total_responses", 50),
    "hundred_responses": ("total_responses", 100),
    "scenario_variety": ("unique_scenarios_completed", 20),
    "example_learner": ("examples_viewed", 25),
    "self_reflector": ("rated_responses", 50),
}

AVAILABLE_ACHIEVEMENTS = [*THRESHOLDS, "consistent_user", "empathy_master"]


def satisfied_achievements(progress, today: date, rated_responses: int) -> set[str]:
    """Ids whose condition holds right now, independent of what was unlocked before."""
    values = {
        "total_responses": progress.total_responses,
        "current_streak": progress.current_streak,
        "unique_scenarios_completed": progress.unique_scenarios_completed,
        "examples_viewed": progress.examples_viewed,
        "rated_responses": rated_responses,
    }
    result = {aid for aid, (field, minimum) in THRESHOLDS.items() if values[field] >= minimum}
    if (
        days_since_start(progress, today) >= CONSISTENCY_MIN_DAYS
        and activity_percentage(progress, today) >= CONSISTENCY_MIN_RATE
    ):
        result.add("consistent_user")
    return result


def unlock_achievements(progress, today: date, rated_responses: int) -> list[str]:
    """Union of already unlocked and newly satisfied ids; nothing is ever taken back."""
    unlocked = set(progress.achievements_unlocked) | satisfied_achievements(progress, today, rated_responses)
    others = set(AVAILABLE_ACHIEVEMENTS) - {"empathy_master"}
    if others <= unlocked:
        unlocked.add("empathy_master")
    return sorted(unlocked)


def describe_achievements(
    unlocked: list[str],
    resolver: CatalogResolver,
    locale: str = DEFAULT_LOCALE,
) -> list[AchievementSchema]:
    """Every known achievement in display order, flagged as unlocked or not."""
    unlocked_ids = set(unlocked)
    return [
        AchievementSchema(
            id=aid,
            description=resolver.achievement_description(aid, locale),
            unlocked=aid in unlocked_ids,
        )
        for aid in AVAILABLE_ACHIEVEMENTS
    ]
