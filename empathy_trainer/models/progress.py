"""Progress model: the single aggregate row of cumulative statistics."""
import json

from sqlalchemy import Boolean, Column, Date, Float, Integer, Text

from empathy_trainer.db.session import Base

PROGRESS_ID = 1
DEFAULT_DIFFICULTY = 1


class Progress(Base):
    __tablename__ = "progress"

    id = Column(Integer, primary_key=True, default=PROGRESS_ID)
    # Bumped on every replace; a stale write raises StaleDataError
    version = Column(Integer, nullable=False, default=1)

    current_streak = Column(Integer, nullable=False, default=0)  # consecutive calendar days
    longest_streak = Column(Integer, nullable=False, default=0)
    total_responses = Column(Integer, nullable=False, default=0)
    last_activity_date = Column(Date, nullable=True)
    start_date = Column(Date, nullable=False)
    total_active_days = Column(Integer, nullable=False, default=0)
    average_response_length = Column(Float, nullable=False, default=0.0)
    average_self_rating = Column(Float, nullable=False, default=0.0)
    examples_viewed = Column(Integer, nullable=False, default=0)
    unique_scenarios_completed = Column(Integer, nullable=False, default=0)
    preferred_difficulty = Column(Integer, nullable=False, default=DEFAULT_DIFFICULTY)  # 1-5
    tutorial_completed = Column(Boolean, nullable=False, default=False)
    # JSON array of achievement ids
    achievements_json = Column(Text, nullable=False, default="[]")

    __mapper_args__ = {"version_id_col": version}

    @property
    def achievements_unlocked(self) -> list[str]:
        return json.loads(self.achievements_json or "[]")

    @achievements_unlocked.setter
    def achievements_unlocked(self, ids) -> None:
        self.achievements_json = json.dumps(sorted(set(ids)))
