from empathy_trainer.models.scenario import Scenario
from empathy_trainer.models.response import Response
from empathy_trainer.models.progress import Progress

__all__ = ["Scenario", "Response", "Progress"]
