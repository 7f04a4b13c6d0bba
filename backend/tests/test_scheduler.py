"""Interval scheduler behavior with short timer intervals."""

import asyncio

from arena.competition import deploy_agent
from arena.scheduler import CompetitionScheduler


def test_scheduler_runs_simulation_and_evaluation(registry):
    agent = deploy_agent(registry, owner="alice")
    scheduler = CompetitionScheduler(registry, simulation_interval=0.01, evaluation_interval=0.05)

    async def run() -> None:
        await scheduler.start()
        await asyncio.sleep(0.2)
        await scheduler.stop()

    asyncio.run(run())

    assert agent.last_action is not None
    assert len(registry.winners) >= 1
    assert registry.last_evaluation is not None
    assert not scheduler.running


def test_scheduler_survives_failing_job(registry):
    scheduler = CompetitionScheduler(registry, simulation_interval=0.01, evaluation_interval=60)
    calls = []

    def boom() -> None:
        calls.append(1)
        raise RuntimeError("tick failed")

    scheduler.simulate = boom

    async def run() -> None:
        await scheduler.start()
        await scheduler.start()
        await asyncio.sleep(0.1)
        await scheduler.stop()

    asyncio.run(run())

    assert len(calls) >= 2
    assert registry.winners == []
