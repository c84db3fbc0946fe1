"""Response model: one submitted answer to one scenario."""
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from empathy_trainer.db.session import Base


class Response(Base):
    __tablename__ = "responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    scenario_id = Column(Integer, ForeignKey("scenarios.id"), nullable=False, index=True)
    response_text = Column(Text, nullable=False)  # stored trimmed
    created_at = Column(DateTime, nullable=False)
    created_on = Column(Date, nullable=False, index=True)  # denormalized for per-day queries
    response_time_seconds = Column(Integer, nullable=True)
    self_rating = Column(Integer, nullable=True)  # 1-5
    viewed_example = Column(Boolean, nullable=False, default=False)  # only field mutable after insert
    response_length = Column(Integer, nullable=False)  # len(trimmed text), never recomputed

    scenario = relationship("Scenario", back_populates="responses")
