"""Scenario catalog: seed definitions, first-run seeding and read queries."""
import logging
from typing import NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.models.scenario import Scenario

logger = logging.getLogger(__name__)


class ScenarioDefinition(NamedTuple):
    scenario_key: str
    example_key: str
    category: str
    difficulty: int


def _definition(slug: str, category: str, difficulty: int) -> ScenarioDefinition:
    return ScenarioDefinition(f"scenario_{slug}", f"example_{slug}", category, difficulty)


SCENARIO_DEFINITIONS = [
    _definition("work_missed_promotion", "work", 2),
    _definition("work_overloaded_colleague", "work", 1),
    _definition("work_layoff_news", "work", 4),
    _definition("relationships_forgotten_anniversary", "relationships", 3),
    _definition("relationships_long_distance", "relationships", 2),
    _definition("relationships_breakup", "relationships", 4),
    _definition("family_parent_illness", "family", 5),
    _definition("family_sibling_rivalry", "family", 3),
    _definition("family_child_struggling", "family", 2),
    _definition("personal_failed_exam", "personal", 1),
    _definition("personal_moving_city", "personal", 2),
    _definition("personal_lost_pet", "personal", 4),
    _definition("health_chronic_pain", "health", 4),
    _definition("health_new_diagnosis", "health", 5),
    _definition("health_burnout", "health", 3),
    _definition("friendship_left_out", "friendship", 1),
    _definition("friendship_cancelled_plans", "friendship", 1),
    _definition("friendship_betrayed_secret", "friendship", 3),
    _definition("education_rejected_application", "education", 2),
    _definition("education_group_project", "education", 1),
    _definition("education_dropping_out", "education", 5),
    _definition("general_stranger_upset", "general", 2),
    _definition("general_bad_day", "general", 1),
    _definition("general_grief_anniversary", "general", 5),
]


async def seed_scenarios(db: AsyncSession) -> int:
    """Insert the catalog on first start. Existing rows (and their usage counts) are left alone."""
    existing = set((await db.execute(select(Scenario.scenario_key))).scalars().all())
    added = 0
    for definition in SCENARIO_DEFINITIONS:
        if definition.scenario_key in existing:
            continue
        db.add(
            Scenario(
                scenario_key=definition.scenario_key,
                example_key=definition.example_key,
                category=definition.category,
                difficulty=definition.difficulty,
                is_active=True,
                usage_count=0,
            )
        )
        added += 1
    if added:
        await db.flush()
        logger.info("Seeded %d scenarios", added)
    return added


async def get_scenario(db: AsyncSession, scenario_id: int) -> Scenario | None:
    return await db.get(Scenario, scenario_id)


async def list_scenarios(
    db: AsyncSession,
    category: str | None = None,
    difficulty: int | None = None,
) -> list[Scenario]:
    """Active scenarios, optionally filtered; least used first."""
    query = select(Scenario).where(Scenario.is_active.is_(True))
    if category is not None:
        query = query.where(Scenario.category == category)
    if difficulty is not None:
        query = query.where(Scenario.difficulty == difficulty)
    result = await db.execute(query.order_by(Scenario.usage_count.asc(), Scenario.id.asc()))
    return list(result.scalars().all())


async def count_active(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Scenario.id)).where(Scenario.is_active.is_(True)))
    return result.scalar_one()
