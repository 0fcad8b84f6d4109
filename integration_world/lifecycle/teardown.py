# integration_world/lifecycle/teardown.py
from __future__ import annotations

from typing import TYPE_CHECKING

from integration_world import logs
from integration_world.utils.errors import TeardownError

if TYPE_CHECKING:
    from integration_world.world.world import World


def _stop_order(world: "World"):
    # seeds -> nodes -> proxies -> wallets -> miners
    return (
        world.seeds,
        world.nodes,
        world.proxies,
        world.wallets,
        world.miners,
    )


async def scenario_teardown(world: "World") -> None:
    """
    Stop every process the scenario registered.

    - categories in fixed order, each stop awaited before the next
    - a failing stop is logged and does not block the remaining stops
    - TeardownError (all failures) is raised once the sweep is done
    """
    logs.info("Stopping nodes")

    failures: list[tuple[str, str, BaseException]] = []
    for registry in _stop_order(world):
        for name, process in registry.items():
            try:
                await process.stop()
            except Exception as e:
                logs.error(f"[Teardown] failed to stop {registry.category} {name}: {e!r}")
                failures.append((registry.category, name, e))

    if failures:
        raise TeardownError(failures)
