from empathy_trainer.services.catalog import seed_scenarios
from empathy_trainer.services.trainer import EmpathyTrainer

__all__ = ["EmpathyTrainer", "seed_scenarios"]
