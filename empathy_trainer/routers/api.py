"""API routes: JSON for today's challenge, responses, progress and stats."""
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from empathy_trainer.schemas.progress import ProgressOutSchema, ProgressViewSchema
from empathy_trainer.schemas.response import (
    DifficultyUpdateSchema,
    ResponseOutSchema,
    ResponseSubmitSchema,
    SubmissionOutSchema,
)
from empathy_trainer.schemas.scenario import ChallengeOutSchema, ScenarioOutSchema
from empathy_trainer.schemas.stats import StatsOutSchema, StreakInfoSchema
from empathy_trainer.services.achievements import describe_achievements
from empathy_trainer.services.localization import DEFAULT_LOCALE, CatalogResolver
from empathy_trainer.services.progress import (
    format_activity_percentage,
    has_responded_today,
    level_description,
    motivational_message,
    next_milestone,
    responses_per_day,
    streak_status_description,
    user_level,
)
from empathy_trainer.services.trainer import EmpathyTrainer

router = APIRouter(prefix="/api", tags=["api"])


def get_trainer(request: Request) -> EmpathyTrainer:
    return request.app.state.trainer


def get_resolver(request: Request) -> CatalogResolver:
    return request.app.state.resolver


def _scenario_out(scenario, resolver: CatalogResolver, locale: str) -> ScenarioOutSchema:
    out = ScenarioOutSchema.model_validate(scenario)
    return out.model_copy(
        update={
            "prompt": resolver.resolve(scenario.scenario_key, locale),
            "example": resolver.resolve(scenario.example_key, locale),
            "category_name": resolver.category_name(scenario.category, locale),
        }
    )


@router.get("/challenge/today", response_model=ChallengeOutSchema)
async def get_todays_challenge(
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
    resolver: Annotated[CatalogResolver, Depends(get_resolver)],
    locale: str = DEFAULT_LOCALE,
):
    """Today's scenario, or the reason there is none (limit reached / catalog exhausted)."""
    selection = await trainer.select_challenge()
    scenario = _scenario_out(selection.scenario, resolver, locale) if selection.scenario else None
    return ChallengeOutSchema(
        status=selection.status,
        responses_today=selection.responses_today,
        daily_cap=trainer.selector.daily_cap,
        scenario=scenario,
    )


@router.get("/scenarios", response_model=list[ScenarioOutSchema])
async def list_scenarios(
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
    resolver: Annotated[CatalogResolver, Depends(get_resolver)],
    category: str | None = None,
    difficulty: int | None = None,
    locale: str = DEFAULT_LOCALE,
):
    scenarios = await trainer.list_scenarios(category, difficulty)
    return [_scenario_out(s, resolver, locale) for s in scenarios]


@router.get("/scenarios/{scenario_id}", response_model=ScenarioOutSchema)
async def get_scenario(
    scenario_id: int,
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
    resolver: Annotated[CatalogResolver, Depends(get_resolver)],
    locale: str = DEFAULT_LOCALE,
):
    """Get one scenario by ID."""
    scenario = await trainer.get_scenario(scenario_id)
    if not scenario:
        raise HTTPException(status_code=404, detail="Scenario not found")
    return _scenario_out(scenario, resolver, locale)


@router.post("/responses", response_model=SubmissionOutSchema, status_code=201)
async def submit_response(
    body: ResponseSubmitSchema,
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
):
    """Submit a response; return its id and the updated streak."""
    response_id = await trainer.submit_response(
        body.scenario_id,
        body.text,
        duration_seconds=body.duration_seconds,
        self_rating=body.self_rating,
    )
    progress = await trainer.get_progress()
    return SubmissionOutSchema(
        response_id=response_id,
        current_streak=progress.current_streak,
        total_responses=progress.total_responses,
        achievements_unlocked=progress.achievements_unlocked,
    )


@router.get("/responses", response_model=list[ResponseOutSchema])
async def list_responses(
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
    on_date: date | None = None,
    scenario_id: int | None = None,
    recent_days: int | None = None,
):
    """Response history, newest first."""
    if scenario_id is not None:
        return await trainer.get_responses_for_scenario(scenario_id)
    if recent_days is not None:
        return await trainer.get_recent_responses(recent_days)
    return await trainer.get_responses(on_date)


@router.post("/responses/{response_id}/example-viewed", status_code=204)
async def mark_example_viewed(
    response_id: int,
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
):
    await trainer.mark_example_viewed(response_id)


@router.get("/progress", response_model=ProgressViewSchema)
async def get_progress(
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
    resolver: Annotated[CatalogResolver, Depends(get_resolver)],
    locale: str = DEFAULT_LOCALE,
):
    """Aggregate snapshot with level, descriptors and achievements."""
    progress = await trainer.get_progress()
    today = trainer.clock.today()
    level = user_level(progress.total_responses)
    return ProgressViewSchema(
        progress=progress,
        level=level,
        level_description=level_description(level),
        streak_status=streak_status_description(progress.current_streak),
        motivational_message=motivational_message(progress.total_responses),
        next_milestone=next_milestone(progress.current_streak),
        activity_percentage=format_activity_percentage(progress, today),
        responses_per_day=round(responses_per_day(progress), 2),
        responded_today=has_responded_today(progress, today),
        achievements=describe_achievements(progress.achievements_unlocked, resolver, locale),
    )


@router.get("/progress/streak", response_model=StreakInfoSchema)
async def get_streak(trainer: Annotated[EmpathyTrainer, Depends(get_trainer)]):
    current, longest = await trainer.get_streak_info()
    return StreakInfoSchema(current_streak=current, longest_streak=longest)


@router.put("/progress/difficulty", response_model=ProgressOutSchema)
async def update_difficulty(
    body: DifficultyUpdateSchema,
    trainer: Annotated[EmpathyTrainer, Depends(get_trainer)],
):
    await trainer.update_preferred_difficulty(body.level)
    return await trainer.get_progress()


@router.post("/progress/tutorial", response_model=ProgressOutSchema)
async def complete_tutorial(trainer: Annotated[EmpathyTrainer, Depends(get_trainer)]):
    await trainer.complete_tutorial()
    return await trainer.get_progress()


@router.get("/stats", response_model=StatsOutSchema)
async def get_stats(trainer: Annotated[EmpathyTrainer, Depends(get_trainer)]):
    """Scan-based totals over the response history."""
    return StatsOutSchema(**await trainer.get_comprehensive_stats())


@router.post("/reset", status_code=204)
async def reset(trainer: Annotated[EmpathyTrainer, Depends(get_trainer)]):
    """Delete every response and restore progress defaults. Cannot be undone."""
    await trainer.reset_all_user_data()
