from .compile import COMPILE_STEPS, CompileStep, suite_setup
from .teardown import scenario_teardown

__all__ = ["COMPILE_STEPS", "CompileStep", "suite_setup", "scenario_teardown"]
