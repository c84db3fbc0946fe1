"""Scan-based statistics snapshot, independent of the incremental aggregate."""
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from empathy_trainer.models.response import Response
from empathy_trainer.services import catalog, history


async def comprehensive_stats(db: AsyncSession) -> dict:
    """Totals and means computed from the response rows themselves.

    The self-rating mean is taken over rated responses only, so it can differ from
    the running average kept on the aggregate.
    """
    result = await db.execute(
        select(
            func.count(Response.id),
            func.count(func.distinct(Response.created_on)),
            func.avg(Response.response_length),
            func.avg(Response.self_rating),
        )
    )
    total, active_days, avg_length, avg_rating = result.one()
    viewed = await db.execute(select(func.count(Response.id)).where(Response.viewed_example.is_(True)))
    return {
        "total_responses": total,
        "active_days": active_days,
        "unique_scenarios": await history.count_distinct_scenarios(db),
        "average_response_length": float(avg_length or 0.0),
        "average_self_rating": float(avg_rating or 0.0),
        "examples_viewed": viewed.scalar_one(),
        "active_scenarios": await catalog.count_active(db),
        "rated_responses": await history.count_rated(db),
    }
