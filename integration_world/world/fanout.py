# integration_world/world/fanout.py
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Sequence

from integration_world import logs


async def join_all(label: str, awaitables: Sequence[Awaitable[Any]]) -> list[Any]:
    """
    Run every awaitable concurrently and wait until all of them settle.

    - all succeed  -> results in launch order
    - any failed   -> the first failure (launch order) is raised, after the
                      rest have finished; no partial results are returned
    """
    if not awaitables:
        logs.debug(f"[FanOut] {label}: nothing to run")
        return []

    results = await asyncio.gather(*awaitables, return_exceptions=True)

    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        logs.warning(f"[FanOut] {label}: {len(errors)}/{len(results)} failed")
        raise errors[0]

    return results
