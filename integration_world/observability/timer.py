#!filepath: integration_world/observability/timer.py
import time
from collections import OrderedDict
from contextlib import contextmanager
from typing import Dict

from integration_world import logs


class StepTimer:
    """
    Wall-clock timing of the suite setup steps
    - with timer.measure(label): ...  -> seconds recorded under label
    - a failing step is still recorded, so report() shows where it stopped
    """

    def __init__(self):
        self.timeline: Dict[str, float] = OrderedDict()

    @contextmanager
    def measure(self, label: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self.timeline[label] = time.perf_counter() - start

    def total(self) -> float:
        return sum(self.timeline.values())

    def report(self, title: str) -> None:
        if not self.timeline:
            logs.info(f"[SuiteSetup] {title}: no steps ran")
            return

        steps = ", ".join(f"{label}={sec:.3f}s" for label, sec in self.timeline.items())
        logs.info(f"[SuiteSetup] {title}: {steps} | total={self.total():.3f}s")
