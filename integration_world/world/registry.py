# integration_world/world/registry.py
from __future__ import annotations

from typing import Dict, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class EntityRegistry(Generic[T]):
    """
    Named handles of one category (seeds, nodes, wallets, ...).

    Contract:
    - iteration follows registration order
    - re-adding a name overwrites silently and keeps its original position
    - get() returns None for unknown names
    """

    def __init__(self, category: str):
        self.category = category
        self._items: Dict[str, T] = {}

    def add(self, name: str, item: T) -> None:
        self._items[name] = item

    def get(self, name: str) -> Optional[T]:
        return self._items.get(name)

    def names(self) -> list[str]:
        return list(self._items)

    def items(self) -> list[tuple[str, T]]:
        """Snapshot, safe to iterate while the registry changes."""
        return list(self._items.items())

    def values(self) -> list[T]:
        return list(self._items.values())

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"EntityRegistry({self.category!r}, names={self.names()})"
