#!filepath: integration_world/__init__.py

from .utils.logger import Logging, init_logging, logs
from .utils.errors import TeardownError, UnknownEntityError, WorldError
from .config import WorldConfig
from .world import EntityRegistry, World
from .lifecycle import scenario_teardown, suite_setup

__all__ = [
    "logs", "Logging", "init_logging",
    "WorldError", "UnknownEntityError", "TeardownError",
    "WorldConfig",
    "EntityRegistry", "World",
    "suite_setup", "scenario_teardown",
]
