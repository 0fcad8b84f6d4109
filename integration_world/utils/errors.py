# integration_world/utils/errors.py
from __future__ import annotations


class WorldError(RuntimeError):
    """
    Base class for harness errors raised by the world and its lifecycle hooks.
    """


class UnknownEntityError(WorldError, KeyError):
    """
    Raised when an operation needs a named entity that was never registered.

    Plain lookups (get_node, get_wallet, ...) return None instead.
    """

    def __init__(self, category: str, name: str):
        self.category = category
        self.name = name
        super().__init__(f"unknown {category}: {name!r}")

    def __str__(self) -> str:
        # KeyError quotes its message otherwise
        return self.args[0]


class TeardownError(WorldError):
    """
    Raised after a full teardown sweep when one or more stops failed.

    failures: [(category, name, exception), ...] in stop order
    """

    def __init__(self, failures: list[tuple[str, str, BaseException]]):
        self.failures = failures
        detail = ", ".join(f"{cat}/{name}: {exc!r}" for cat, name, exc in failures)
        super().__init__(f"{len(failures)} process(es) failed to stop: {detail}")
