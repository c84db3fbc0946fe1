"""SQLAlchemy declarative base and model imports for Alembic."""
from empathy_trainer.db.session import Base

# Import all models so Alembic can see them
from empathy_trainer.models.progress import Progress  # noqa: F401
from empathy_trainer.models.response import Response  # noqa: F401
from empathy_trainer.models.scenario import Scenario  # noqa: F401

__all__ = ["Base", "Scenario", "Response", "Progress"]
