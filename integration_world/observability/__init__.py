from .timer import StepTimer

__all__ = ["StepTimer"]
