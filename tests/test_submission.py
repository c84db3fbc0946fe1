"""
Tests for the submission transaction and the trainer operations around it.
"""

import asyncio

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from empathy_trainer.core.errors import InvalidInput, PersistenceError
from empathy_trainer.models.progress import Progress


async def answer(trainer, text="That must be really hard for you", **kwargs) -> int:
    scenario = await trainer.get_todays_challenge()
    assert scenario is not None
    return await trainer.submit_response(scenario.id, text, **kwargs)


class TestFirstSubmission:
    """Fresh aggregate plus one response"""

    @pytest.mark.asyncio
    async def test_i_understand(self, trainer):
        await answer(trainer, "I understand")
        progress = await trainer.get_progress()

        assert progress.total_responses == 1
        assert progress.current_streak == 1
        assert progress.total_active_days == 1
        # trimmed length of "I understand"
        assert progress.average_response_length == 12
        assert progress.average_self_rating == 0.0
        assert progress.achievements_unlocked == ["first_response"]

    @pytest.mark.asyncio
    async def test_response_record(self, trainer, clock):
        response_id = await answer(trainer, "  I am here for you  ", duration_seconds=42, self_rating=4)
        [response] = await trainer.get_responses()

        assert response.id == response_id
        assert response.response_text == "I am here for you"
        assert response.response_length == len("I am here for you")
        assert response.created_at == clock.now()
        assert response.created_on == clock.today()
        assert response.response_time_seconds == 42
        assert response.self_rating == 4
        assert response.viewed_example is False


class TestStreaks:
    """Streak continuity across calendar days"""

    @pytest.mark.asyncio
    async def test_next_day_extends_streak(self, trainer, clock):
        await answer(trainer)
        clock.advance(days=1)
        await answer(trainer)
        progress = await trainer.get_progress()
        assert progress.current_streak == 2
        assert progress.total_active_days == 2

    @pytest.mark.asyncio
    async def test_skipped_day_restarts_streak(self, trainer, clock):
        await answer(trainer)
        clock.advance(days=1)
        await answer(trainer)
        clock.advance(days=2)
        await answer(trainer)
        progress = await trainer.get_progress()
        assert progress.current_streak == 1
        assert progress.longest_streak == 2

    @pytest.mark.asyncio
    async def test_same_day_responses_do_not_inflate_streak(self, trainer, clock):
        await answer(trainer)
        clock.advance(hours=3)
        await answer(trainer)
        progress = await trainer.get_progress()
        assert progress.total_responses == 2
        assert progress.current_streak == 1
        assert progress.total_active_days == 1

    @pytest.mark.asyncio
    async def test_longest_streak_never_decreases(self, trainer, clock):
        gaps = [1, 1, 1, 3, 1, 0, 2, 1, 1, 1, 1, 5]
        longest = 0
        for gap in gaps:
            clock.advance(days=gap)
            await answer(trainer)
            progress = await trainer.get_progress()
            assert progress.longest_streak >= longest
            assert progress.longest_streak >= progress.current_streak
            assert progress.total_responses >= progress.total_active_days
            longest = progress.longest_streak
        assert longest == 5
        assert await trainer.get_streak_info() == (1, 5)


class TestRejection:
    """Invalid input leaves the store untouched"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"text": "   "},
            {"text": ""},
            {"text": "Fine words", "self_rating": 0},
            {"text": "Fine words", "self_rating": 6},
            {"text": "Fine words", "duration_seconds": -1},
        ],
    )
    async def test_rejected_before_any_write(self, trainer, kwargs):
        scenario = await trainer.get_todays_challenge()
        before = await trainer.get_progress()

        with pytest.raises(InvalidInput):
            await trainer.submit_response(scenario.id, **kwargs)

        assert await trainer.get_responses() == []
        assert (await trainer.get_scenario(scenario.id)).usage_count == 0
        assert await trainer.get_progress() == before

    @pytest.mark.asyncio
    async def test_unknown_scenario(self, trainer):
        before = await trainer.get_progress()
        with pytest.raises(InvalidInput):
            await trainer.submit_response(9999, "Words for nobody")
        assert await trainer.get_progress() == before
        assert await trainer.get_responses() == []


class TestAtomicity:
    """Store failure mid-transaction"""

    @pytest.mark.asyncio
    async def test_failed_aggregate_write_rolls_back_everything(self, trainer):
        await answer(trainer, "First answer")
        before = await trainer.get_progress()
        scenario = await trainer.get_todays_challenge()

        def fail(mapper, connection, target):
            raise OperationalError("UPDATE progress", {}, Exception("disk I/O error"))

        event.listen(Progress, "before_update", fail)
        try:
            with pytest.raises(PersistenceError):
                await trainer.submit_response(scenario.id, "Second answer")
        finally:
            event.remove(Progress, "before_update", fail)

        assert len(await trainer.get_responses()) == 1
        assert (await trainer.get_scenario(scenario.id)).usage_count == 0
        assert await trainer.get_progress() == before

        # the caller may simply retry
        await trainer.submit_response(scenario.id, "Second answer")
        assert (await trainer.get_progress()).total_responses == 2

    @pytest.mark.asyncio
    async def test_concurrent_submissions_are_serialized(self, trainer):
        first = await trainer.get_todays_challenge()
        scenarios = [s for s in await trainer.list_scenarios() if s.id != first.id][:1] + [first]

        await asyncio.gather(*(trainer.submit_response(s.id, "Written in parallel") for s in scenarios))

        progress = await trainer.get_progress()
        assert progress.total_responses == 2
        assert progress.total_active_days == 1
        assert progress.unique_scenarios_completed == 2


class TestOtherOperations:
    """Example views, preferences, stats and reset"""

    @pytest.mark.asyncio
    async def test_mark_example_viewed_counts_once(self, trainer):
        response_id = await answer(trainer)
        await trainer.mark_example_viewed(response_id)
        await trainer.mark_example_viewed(response_id)

        [response] = await trainer.get_responses()
        assert response.viewed_example is True
        assert (await trainer.get_progress()).examples_viewed == 1

    @pytest.mark.asyncio
    async def test_mark_example_viewed_unknown_id_is_noop(self, trainer):
        before = await trainer.get_progress()
        await trainer.mark_example_viewed(12345)
        assert await trainer.get_progress() == before

    @pytest.mark.asyncio
    async def test_preferred_difficulty(self, trainer):
        await trainer.update_preferred_difficulty(4)
        assert (await trainer.get_progress()).preferred_difficulty == 4
        for level in (0, 6):
            with pytest.raises(InvalidInput):
                await trainer.update_preferred_difficulty(level)
        assert (await trainer.get_progress()).preferred_difficulty == 4

    @pytest.mark.asyncio
    async def test_complete_tutorial(self, trainer):
        await trainer.complete_tutorial()
        assert (await trainer.get_progress()).tutorial_completed is True

    @pytest.mark.asyncio
    async def test_each_write_bumps_version(self, trainer):
        before = (await trainer.get_progress()).version
        await answer(trainer)
        await trainer.complete_tutorial()
        assert (await trainer.get_progress()).version == before + 2

    @pytest.mark.asyncio
    async def test_stats_use_rated_count_unlike_aggregate(self, trainer):
        await answer(trainer, "abcd", self_rating=4)
        await answer(trainer, "abcdef")
        await answer(trainer, "ab", self_rating=2)

        stats = await trainer.get_comprehensive_stats()
        progress = await trainer.get_progress()

        assert stats["total_responses"] == 3
        assert stats["active_days"] == 1
        assert stats["unique_scenarios"] == 3
        assert stats["rated_responses"] == 2
        assert stats["average_self_rating"] == pytest.approx(3.0)
        assert stats["average_response_length"] == pytest.approx(4.0)
        assert stats["active_scenarios"] == 24
        assert stats["examples_viewed"] == 0
        assert progress.average_self_rating == pytest.approx(10 / 3)
        assert progress.average_response_length == pytest.approx(4.0)

    @pytest.mark.asyncio
    async def test_responses_by_date_newest_first(self, trainer, clock):
        first_day = clock.today()
        await answer(trainer, "Day one")
        clock.advance(days=1)
        await answer(trainer, "Day two, morning")
        clock.advance(hours=2)
        await answer(trainer, "Day two, later")

        assert [r.response_text for r in await trainer.get_responses()] == [
            "Day two, later",
            "Day two, morning",
            "Day one",
        ]
        assert [r.response_text for r in await trainer.get_responses(first_day)] == ["Day one"]
        assert await trainer.get_today_response_count() == 2
        assert await trainer.has_done_todays_challenge() is True

    @pytest.mark.asyncio
    async def test_recent_and_per_scenario_history(self, trainer, clock):
        scenario = await trainer.get_todays_challenge()
        await trainer.submit_response(scenario.id, "Long ago")
        clock.advance(days=40)
        await trainer.submit_response(scenario.id, "Just now")

        assert [r.response_text for r in await trainer.get_recent_responses()] == ["Just now"]
        assert [r.response_text for r in await trainer.get_responses_for_scenario(scenario.id)] == [
            "Just now",
            "Long ago",
        ]

    @pytest.mark.asyncio
    async def test_reset_all_user_data(self, trainer, clock):
        response_id = await answer(trainer)
        await trainer.mark_example_viewed(response_id)
        await trainer.update_preferred_difficulty(3)
        clock.advance(days=2)

        await trainer.reset_all_user_data()

        progress = await trainer.get_progress()
        assert await trainer.get_responses() == []
        assert all(s.usage_count == 0 for s in await trainer.list_scenarios())
        assert progress.total_responses == 0
        assert progress.current_streak == 0
        assert progress.longest_streak == 0
        assert progress.examples_viewed == 0
        assert progress.last_activity_date is None
        assert progress.start_date == clock.today()
        assert progress.preferred_difficulty == 1
        assert progress.achievements_unlocked == []


class TestWatchProgress:
    """Live progress snapshots"""

    @pytest.mark.asyncio
    async def test_yields_current_then_updates(self, trainer):
        stream = trainer.watch_progress()
        initial = await anext(stream)
        assert initial.total_responses == 0

        await answer(trainer)
        updated = await asyncio.wait_for(anext(stream), timeout=1)
        assert updated.total_responses == 1

        await stream.aclose()
        assert not trainer.feed.has_subscribers
