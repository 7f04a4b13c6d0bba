"""Competition engine: deployment, simulation steps, evaluation, and queries.

Simulation steps and evaluation cycles are plain functions over an
``AgentRegistry``; the caller decides the cadence. Ranking is a stable sort
on score descending, so ties keep registry (creation) order for both the
evaluation winner and the leaderboard.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from .models import (
    DEFAULT_KEEP_FRACTION,
    DEPLOYMENT_FEE,
    Agent,
    AgentStatus,
    RandomSource,
    StrategyType,
    WinnerRecord,
)
from .registry import EVALUATION_INTERVAL, AgentRegistry
from .utils import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationSummary:
    agents_simulated: int
    failures: int
    total_score: int
    average_balance: float


def deploy_agent(
    registry: AgentRegistry,
    owner: str,
    strategy_type: StrategyType | str = StrategyType.balanced,
    rng: Optional[RandomSource] = None,
) -> Agent:
    """Create an agent, charge the deployment fee, and register it."""

    if not owner or not owner.strip():
        raise ValueError("owner is required")
    kwargs: dict[str, Any] = {"owner": owner, "strategy_type": StrategyType(strategy_type)}
    if rng is not None:
        kwargs["rng"] = rng
    agent = Agent(**kwargs)
    with registry.lock:
        agent.balance -= DEPLOYMENT_FEE
        registry.register(agent)
    logger.info(
        "agent deployed id=%s owner=%s strategy=%s balance=%s",
        agent.id[:8],
        agent.owner,
        agent.strategy_type.value,
        agent.balance,
    )
    return agent


def rank_agents(agents: Iterable[Agent]) -> list[Agent]:
    return sorted(agents, key=lambda agent: agent.score, reverse=True)


def run_simulation_step(registry: AgentRegistry) -> SimulationSummary | None:
    """Apply one earn/spend/compete cycle to every active agent.

    A failing agent is logged and skipped; the rest of the batch still runs.
    Returns ``None`` when there are no active agents.
    """

    with registry.lock:
        active = registry.active()
        if not active:
            return None

        logger.info("simulating actions for %s active agents", len(active))
        failures = 0
        for agent in active:
            try:
                agent.act()
            except Exception:
                failures += 1
                logger.exception("error simulating agent id=%s", agent.id)

        total_score = sum(agent.score for agent in active)
        average_balance = sum(agent.balance for agent in active) / len(active)

    logger.info("total score=%s avg balance=%.2f failures=%s", total_score, average_balance, failures)
    return SimulationSummary(
        agents_simulated=len(active) - failures,
        failures=failures,
        total_score=total_score,
        average_balance=average_balance,
    )


def run_evaluation_cycle(
    registry: AgentRegistry,
    now: Optional[datetime] = None,
    interval: timedelta = EVALUATION_INTERVAL,
    keep_fraction: float = DEFAULT_KEEP_FRACTION,
) -> WinnerRecord | None:
    """Rank active agents, record the winner, and decay every ranked score.

    With no active agents nothing changes, including the evaluation timestamps.
    """

    with registry.lock:
        active = registry.active()
        if not active:
            logger.warning("no active agents to evaluate")
            return None

        now = now or utc_now()
        ranked = rank_agents(active)
        winner = ranked[0]
        record = WinnerRecord(
            agent_id=winner.id,
            owner=winner.owner,
            score=winner.score,
            balance=winner.balance,
            strategy_type=winner.strategy_type,
            timestamp=now,
            total_agents=len(active),
        )
        registry.record_winner(record)
        registry.last_evaluation = now
        registry.next_evaluation = now + interval

        for agent in ranked:
            agent.reset_score(keep_fraction)

    logger.info(
        "winner declared agent=%s owner=%s score=%s balance=%s strategy=%s agents=%s",
        record.agent_id[:8],
        record.owner,
        record.score,
        record.balance,
        record.strategy_type.value,
        record.total_agents,
    )
    logger.info("scores partially reset (%.0f%% retained)", keep_fraction * 100)
    return record


def agent_to_dict(agent: Agent) -> dict[str, Any]:
    last_action = agent.last_action
    return {
        "id": agent.id,
        "owner": agent.owner,
        "balance": agent.balance,
        "strategy_type": agent.strategy_type.value,
        "score": agent.score,
        "status": agent.status.value,
        "created_at": agent.created_at.isoformat(),
        "last_action": (
            {
                "type": last_action.type.value,
                "amount": last_action.amount,
                "timestamp": last_action.timestamp.isoformat(),
            }
            if last_action
            else None
        ),
    }


def winner_to_dict(record: WinnerRecord) -> dict[str, Any]:
    return {
        "agent_id": record.agent_id,
        "owner": record.owner,
        "score": record.score,
        "balance": record.balance,
        "strategy_type": record.strategy_type.value,
        "timestamp": record.timestamp.isoformat(),
        "total_agents": record.total_agents,
    }


def list_agents(registry: AgentRegistry, owner: Optional[str] = None) -> list[dict[str, Any]]:
    agents = registry.by_owner(owner) if owner else registry.all()
    return [agent_to_dict(agent) for agent in agents]


def get_leaderboard(registry: AgentRegistry, limit: int = 10) -> list[dict[str, Any]]:
    """Return the top ``limit`` active agents, ranked like the evaluation cycle."""

    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")
    return [
        {
            "id": agent.id,
            "owner": agent.owner,
            "score": agent.score,
            "balance": agent.balance,
            "strategy_type": agent.strategy_type.value,
            "created_at": agent.created_at.isoformat(),
        }
        for agent in rank_agents(registry.active())[:limit]
    ]


def get_stats(registry: AgentRegistry) -> dict[str, Any]:
    active = registry.active()
    total_score = sum(agent.score for agent in active)
    total_balance = sum(agent.balance for agent in active)
    count = len(active)
    return {
        "total_agents": len(registry),
        "active_agents": count,
        "total_score": total_score,
        "total_balance": total_balance,
        "average_score": total_score / count if count else 0,
        "average_balance": total_balance / count if count else 0,
        "last_evaluation": _iso(registry.last_evaluation),
        "next_evaluation": _iso(registry.next_evaluation),
        "total_winners": len(registry.winners),
    }


def get_last_winner(registry: AgentRegistry) -> dict[str, Any] | None:
    """Latest winner record plus the referenced agent's live state, if any."""

    record = registry.latest_winner()
    if record is None:
        return None
    agent = registry.get(record.agent_id)
    return {
        **winner_to_dict(record),
        "current_status": agent.status.value if agent else AgentStatus.inactive.value,
        "current_score": agent.score if agent else None,
        "current_balance": agent.balance if agent else None,
    }


def _iso(value: Optional[datetime]) -> str | None:
    return value.isoformat() if value else None
