from .registry import EntityRegistry
from .world import World

__all__ = ["EntityRegistry", "World"]
