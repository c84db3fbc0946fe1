"""The submission transaction: one response, one usage bump, one aggregate replace."""
import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.core.errors import InvalidInput
from empathy_trainer.models.response import Response
from empathy_trainer.models.scenario import Scenario
from empathy_trainer.services import history
from empathy_trainer.services.achievements import unlock_achievements
from empathy_trainer.services.progress import apply_submission, load_progress

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def clean_submission(text: str | None, duration_seconds: int | None, self_rating: int | None) -> str:
    """Validate a submission before anything touches the store; return the trimmed text."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise InvalidInput("Response text is empty")
    if self_rating is not None and not MIN_RATING <= self_rating <= MAX_RATING:
        raise InvalidInput(f"Self rating must be between {MIN_RATING} and {MAX_RATING}")
    if duration_seconds is not None and duration_seconds < 0:
        raise InvalidInput("Response time cannot be negative")
    return cleaned


async def record_submission(
    db: AsyncSession,
    now: datetime,
    scenario_id: int,
    cleaned_text: str,
    duration_seconds: int | None = None,
    self_rating: int | None = None,
) -> Response:
    """Apply a validated submission inside the caller's open transaction.

    The caller commits or rolls back; nothing here commits.
    """
    today = now.date()
    scenario = await db.get(Scenario, scenario_id)
    if scenario is None:
        raise InvalidInput(f"Unknown scenario {scenario_id}")

    progress = await load_progress(db, today)
    # must be read before the new row is flushed
    first_today = await history.count_on(db, today) == 0

    response = Response(
        scenario_id=scenario.id,
        response_text=cleaned_text,
        created_at=now,
        created_on=today,
        response_time_seconds=duration_seconds,
        self_rating=self_rating,
        viewed_example=False,
        response_length=len(cleaned_text),
    )
    db.add(response)
    await db.flush()

    await db.execute(
        update(Scenario)
        .where(Scenario.id == scenario.id)
        .values(usage_count=Scenario.usage_count + 1)
    )

    # counts include the new row; query them before touching the aggregate so it flushes once
    unique_scenarios = await history.count_distinct_scenarios(db)
    rated_responses = await history.count_rated(db)

    apply_submission(
        progress,
        today=today,
        response_length=response.response_length,
        self_rating=self_rating,
        first_today=first_today,
        unique_scenarios=unique_scenarios,
    )
    progress.achievements_unlocked = unlock_achievements(progress, today, rated_responses)

    logger.info(
        "Response %s for scenario %s: streak=%d total=%d active_days=%d",
        response.id,
        scenario.id,
        progress.current_streak,
        progress.total_responses,
        progress.total_active_days,
    )
    return response
