"""Daily challenge selection: per-day cap, no same-day repeats, least-used scenarios first."""
import logging
import random
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.models.scenario import Scenario
from empathy_trainer.services import history

logger = logging.getLogger(__name__)

DAILY_RESPONSE_CAP = 3

AVAILABLE = "available"
LIMIT_REACHED = "limit_reached"
EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class Selection:
    status: str
    responses_today: int
    scenario: Scenario | None = None


class ChallengeSelector:
    """Read-only; usage counters only move when a response is submitted."""

    def __init__(self, rng: random.Random | None = None, daily_cap: int = DAILY_RESPONSE_CAP):
        self.rng = rng or random.Random()
        self.daily_cap = daily_cap

    async def select(self, db: AsyncSession, today: date, preferred_difficulty: int | None = None) -> Selection:
        responses_today = await history.count_on(db, today)
        if responses_today >= self.daily_cap:
            logger.debug("Daily limit of %d responses reached for %s", self.daily_cap, today)
            return Selection(LIMIT_REACHED, responses_today)

        # preferred difficulty is carried for display only and does not filter the pool
        logger.debug("Selecting challenge for %s (preferred difficulty %s)", today, preferred_difficulty)
        result = await db.execute(
            select(Scenario)
            .where(Scenario.is_active.is_(True), Scenario.id.not_in(history.scenario_ids_on(today)))
            .order_by(Scenario.usage_count.asc(), Scenario.id.asc())
        )
        candidates = list(result.scalars().all())
        if not candidates:
            logger.warning("No unused scenarios left for %s", today)
            return Selection(EXHAUSTED, responses_today)

        lowest = candidates[0].usage_count
        pool = [s for s in candidates if s.usage_count == lowest]
        scenario = self.rng.choice(pool)
        logger.debug("Picked scenario %s (%s) out of %d least used", scenario.id, scenario.category, len(pool))
        return Selection(AVAILABLE, responses_today, scenario)
