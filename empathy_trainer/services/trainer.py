"""EmpathyTrainer: the operations the UI layer calls, over one session factory."""
import asyncio
import logging
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from sqlalchemy import delete, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from empathy_trainer.core.clock import Clock, SystemClock
from empathy_trainer.core.errors import InvalidInput, PersistenceError
from empathy_trainer.models.progress import PROGRESS_ID, Progress
from empathy_trainer.models.response import Response
from empathy_trainer.models.scenario import MAX_DIFFICULTY, MIN_DIFFICULTY, Scenario
from empathy_trainer.schemas.progress import ProgressOutSchema
from empathy_trainer.services import catalog, history
from empathy_trainer.services.challenge import DAILY_RESPONSE_CAP, ChallengeSelector, Selection
from empathy_trainer.services.progress import load_progress, new_progress, reset_progress
from empathy_trainer.services.stats import comprehensive_stats
from empathy_trainer.services.submission import clean_submission, record_submission

logger = logging.getLogger(__name__)


class ProgressFeed:
    """Fan-out of aggregate snapshots to live subscribers."""

    def __init__(self):
        self._queues: set[asyncio.Queue] = set()

    def open(self) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        self._queues.add(queue)
        return queue

    def close(self, queue: asyncio.Queue) -> None:
        self._queues.discard(queue)

    @property
    def has_subscribers(self) -> bool:
        return bool(self._queues)

    def publish(self, snapshot: ProgressOutSchema) -> None:
        for queue in list(self._queues):
            queue.put_nowait(snapshot)


class EmpathyTrainer:
    """Challenge selection, submissions, progress and history for the single local user.

    Every write to the progress aggregate goes through `_transaction`, which holds one
    lock and one database transaction; readers open their own sessions and never wait
    on the lock.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        clock: Clock | None = None,
        rng: random.Random | None = None,
        daily_cap: int = DAILY_RESPONSE_CAP,
    ):
        self._sessions = session_factory
        self.clock = clock or SystemClock()
        self.selector = ChallengeSelector(rng, daily_cap)
        self.feed = ProgressFeed()
        self._write_lock = asyncio.Lock()

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        async with self._write_lock:
            async with self._sessions() as db:
                try:
                    async with db.begin():
                        yield db
                except SQLAlchemyError as exc:
                    logger.error("Transaction rolled back: %s", exc)
                    raise PersistenceError(str(exc)) from exc
        await self._publish()

    async def _publish(self) -> None:
        if self.feed.has_subscribers:
            self.feed.publish(await self.get_progress())

    # ---------- setup ----------

    async def initialize(self) -> None:
        """Seed the catalog and create the aggregate row if this is the first start."""
        async with self._transaction() as db:
            await catalog.seed_scenarios(db)
            await load_progress(db, self.clock.today())

    # ---------- daily challenge ----------

    async def select_challenge(self, today: date | None = None) -> Selection:
        today = today or self.clock.today()
        async with self._sessions() as db:
            progress = await db.get(Progress, PROGRESS_ID)
            preferred = progress.preferred_difficulty if progress else None
            return await self.selector.select(db, today, preferred)

    async def get_todays_challenge(self, today: date | None = None) -> Scenario | None:
        selection = await self.select_challenge(today)
        return selection.scenario

    async def submit_response(
        self,
        scenario_id: int,
        text: str,
        duration_seconds: int | None = None,
        self_rating: int | None = None,
    ) -> int:
        """Store a response and fold it into the aggregate atomically; return the response id."""
        cleaned = clean_submission(text, duration_seconds, self_rating)
        async with self._transaction() as db:
            response = await record_submission(
                db, self.clock.now(), scenario_id, cleaned, duration_seconds, self_rating
            )
        return response.id

    async def get_today_response_count(self) -> int:
        async with self._sessions() as db:
            return await history.count_on(db, self.clock.today())

    async def has_done_todays_challenge(self) -> bool:
        return await self.get_today_response_count() > 0

    async def mark_example_viewed(self, response_id: int) -> None:
        """Flag the response; the aggregate counter moves only the first time. Unknown ids are ignored."""
        async with self._transaction() as db:
            response = await db.get(Response, response_id)
            if response is None:
                logger.debug("Response %s not found; nothing to mark", response_id)
                return
            if response.viewed_example:
                return
            response.viewed_example = True
            progress = await load_progress(db, self.clock.today())
            progress.examples_viewed += 1

    # ---------- progress ----------

    async def get_progress(self) -> ProgressOutSchema:
        async with self._sessions() as db:
            progress = await db.get(Progress, PROGRESS_ID)
            if progress is None:
                progress = new_progress(self.clock.today())
                progress.version = 0
            return ProgressOutSchema.model_validate(progress)

    async def watch_progress(self) -> AsyncIterator[ProgressOutSchema]:
        """Yield the current snapshot, then a new one after every committed write."""
        queue = self.feed.open()
        try:
            yield await self.get_progress()
            while True:
                yield await queue.get()
        finally:
            self.feed.close(queue)

    async def get_streak_info(self) -> tuple[int, int]:
        progress = await self.get_progress()
        return progress.current_streak, progress.longest_streak

    async def update_preferred_difficulty(self, level: int) -> None:
        if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
            raise InvalidInput(f"Difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}")
        async with self._transaction() as db:
            progress = await load_progress(db, self.clock.today())
            progress.preferred_difficulty = level
        logger.info("Preferred difficulty set to %d", level)

    async def complete_tutorial(self) -> None:
        async with self._transaction() as db:
            progress = await load_progress(db, self.clock.today())
            progress.tutorial_completed = True

    # ---------- catalog and history ----------

    async def get_scenario(self, scenario_id: int) -> Scenario | None:
        async with self._sessions() as db:
            return await catalog.get_scenario(db, scenario_id)

    async def list_scenarios(self, category: str | None = None, difficulty: int | None = None) -> list[Scenario]:
        async with self._sessions() as db:
            return await catalog.list_scenarios(db, category, difficulty)

    async def get_responses(self, on_date: date | None = None) -> list[Response]:
        async with self._sessions() as db:
            return await history.list_responses(db, on_date)

    async def get_responses_for_scenario(self, scenario_id: int) -> list[Response]:
        async with self._sessions() as db:
            return await history.list_for_scenario(db, scenario_id)

    async def get_recent_responses(self, days: int = 30) -> list[Response]:
        async with self._sessions() as db:
            return await history.list_recent(db, self.clock.today(), days)

    async def get_comprehensive_stats(self) -> dict:
        async with self._sessions() as db:
            return await comprehensive_stats(db)

    # ---------- reset ----------

    async def reset_all_user_data(self) -> None:
        """Delete every response, zero usage counters and restore the aggregate defaults."""
        logger.warning("Resetting all user data")
        async with self._transaction() as db:
            await db.execute(delete(Response))
            await db.execute(update(Scenario).values(usage_count=0))
            progress = await load_progress(db, self.clock.today())
            reset_progress(progress, self.clock.today())
