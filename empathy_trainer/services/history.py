"""Response store queries. Responses are append-only; ordering is newest first."""
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.models.response import Response


def _newest_first(query):
    return query.order_by(Response.created_at.desc(), Response.id.desc())


async def list_responses(db: AsyncSession, on_date: date | None = None) -> list[Response]:
    query = select(Response)
    if on_date is not None:
        query = query.where(Response.created_on == on_date)
    result = await db.execute(_newest_first(query))
    return list(result.scalars().all())


async def list_for_scenario(db: AsyncSession, scenario_id: int) -> list[Response]:
    result = await db.execute(_newest_first(select(Response).where(Response.scenario_id == scenario_id)))
    return list(result.scalars().all())


async def list_recent(db: AsyncSession, today: date, days: int = 30) -> list[Response]:
    """Responses dated on or after `today - days`."""
    since = today - timedelta(days=days)
    result = await db.execute(_newest_first(select(Response).where(Response.created_on >= since)))
    return list(result.scalars().all())


async def count_on(db: AsyncSession, day: date) -> int:
    result = await db.execute(select(func.count(Response.id)).where(Response.created_on == day))
    return result.scalar_one()


def scenario_ids_on(day: date):
    """Subquery of scenario ids already answered on `day`."""
    return select(Response.scenario_id).where(Response.created_on == day)


async def count_distinct_scenarios(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(func.distinct(Response.scenario_id))))
    return result.scalar_one()


async def count_rated(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Response.id)).where(Response.self_rating.is_not(None)))
    return result.scalar_one()
