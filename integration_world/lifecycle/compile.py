#!filepath: integration_world/lifecycle/compile.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from integration_world import logs
from integration_world.config.world_config import WorldConfig
from integration_world.observability import StepTimer
from integration_world.processes.base import ManagedProcess, ProcessFactory

COMPILE_NAME = "compile"


@dataclass(frozen=True)
class CompileStep:
    """
    One process kind to build before the suite.

    build(factory, config) returns a throwaway process; it is never
    started, it only goes through init(**init_kwargs) then compile().
    """

    label: str
    build: Callable[[ProcessFactory, WorldConfig], ManagedProcess]
    init_kwargs: Dict[str, Any] = field(default_factory=dict)

    async def run(self, factory: ProcessFactory, config: WorldConfig) -> None:
        proc = self.build(factory, config)
        logs.info(f"Compiling {self.label}...")
        await proc.init(**self.init_kwargs)
        await proc.compile()


# Fixed order: base node, wallet, merge mining proxy, mining node
COMPILE_STEPS: tuple[CompileStep, ...] = (
    CompileStep(
        label="base node",
        build=lambda f, cfg: f.base_node(COMPILE_NAME),
    ),
    CompileStep(
        label="wallet",
        build=lambda f, cfg: f.wallet(COMPILE_NAME),
    ),
    CompileStep(
        label="mmproxy",
        build=lambda f, cfg: f.merge_mining_proxy(
            COMPILE_NAME, cfg.compile.base_node_address, cfg.compile.wallet_address
        ),
    ),
    CompileStep(
        label="mining node",
        build=lambda f, cfg: f.mining_node(
            COMPILE_NAME, cfg.compile.base_node_address, cfg.compile.wallet_address
        ),
        init_kwargs=dict(
            num_blocks=1,
            min_difficulty=1,
            max_difficulty=1,
            mine_on_tip_only=True,
        ),
    ),
)


async def _compile_sequential(
    factory: ProcessFactory,
    config: WorldConfig,
    steps: tuple[CompileStep, ...],
    timer: StepTimer,
) -> None:
    for step in steps:
        with timer.measure(step.label):
            await step.run(factory, config)


@logs.catch("suite setup failed")
async def suite_setup(
    factory: ProcessFactory,
    config: WorldConfig | None = None,
    steps: tuple[CompileStep, ...] = COMPILE_STEPS,
) -> Dict[str, float]:
    """
    Build every process kind once, before any scenario runs.

    - steps run one after another, each fully awaited
    - the whole sequence is bounded by config.compile.timeout_sec
    - any failure (or the timeout) propagates and should abort the run

    Returns the per-step timeline (label -> seconds).
    """
    config = config or WorldConfig()
    timer = StepTimer()

    try:
        await asyncio.wait_for(
            _compile_sequential(factory, config, steps, timer),
            timeout=config.compile.timeout_sec,
        )
    finally:
        timer.report("Suite compilation")

    logs.info("Finished compilation.")
    return dict(timer.timeline)
