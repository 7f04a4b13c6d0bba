"""Interval scheduler driving simulation steps and evaluation cycles.

Owns two asyncio tasks on the running event loop. Each loop sleeps for its
interval and then runs its job; a failing job is logged and the loop keeps
going.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from .competition import run_evaluation_cycle, run_simulation_step
from .registry import AgentRegistry

logger = logging.getLogger(__name__)


class CompetitionScheduler:
    """Owns the simulation and evaluation timer tasks for one registry."""

    def __init__(
        self,
        registry: AgentRegistry,
        simulation_interval: float = 30.0,
        evaluation_interval: float = 6 * 60 * 60,
    ) -> None:
        self.registry = registry
        self.simulation_interval = simulation_interval
        self.evaluation_interval = evaluation_interval
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks.values())

    async def start(self) -> None:
        if self.running:
            return
        self._tasks["simulation"] = asyncio.create_task(
            self._run("simulation", self.simulation_interval, self.simulate)
        )
        self._tasks["evaluation"] = asyncio.create_task(
            self._run("evaluation", self.evaluation_interval, self.evaluate)
        )
        logger.info(
            "scheduler started simulation_every=%ss evaluation_every=%ss",
            self.simulation_interval,
            self.evaluation_interval,
        )

    async def stop(self) -> None:
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            if not task.done():
                task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        if tasks:
            logger.info("scheduler stopped")

    def simulate(self) -> Any:
        return run_simulation_step(self.registry)

    def evaluate(self) -> Any:
        logger.info("starting competition evaluation")
        return run_evaluation_cycle(self.registry, interval=timedelta(seconds=self.evaluation_interval))

    async def _run(self, name: str, interval: float, job: Callable[[], Any]) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                job()
            except Exception:
                logger.exception("scheduled job failed job=%s", name)
