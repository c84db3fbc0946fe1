"""Scenario model: one empathy prompt with category, difficulty and usage counter."""
from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from empathy_trainer.db.session import Base

CATEGORIES = (
    "work",
    "relationships",
    "family",
    "personal",
    "health",
    "friendship",
    "education",
    "general",
)

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class Scenario(Base):
    __tablename__ = "scenarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Opaque localization keys; display text is resolved outside the engine
    scenario_key = Column(String(128), unique=True, nullable=False)
    example_key = Column(String(128), nullable=False)
    category = Column(String(32), nullable=False, index=True)  # one of CATEGORIES
    difficulty = Column(Integer, nullable=False, default=1)  # 1-5
    is_active = Column(Boolean, nullable=False, default=True)
    # Bumped by the submission transaction only; zeroed by reset-all
    usage_count = Column(Integer, nullable=False, default=0)

    responses = relationship("Response", back_populates="scenario")

    def __repr__(self) -> str:
        return f"<Scenario {self.id} {self.scenario_key} usage={self.usage_count}>"
