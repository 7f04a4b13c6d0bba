"""FastAPI application entrypoint and REST surface.

This module exposes the deploy, agent listing, leaderboard, winner, and
stats APIs used by the frontend, and runs the competition scheduler for
the lifetime of the app.
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from .competition import (
    agent_to_dict,
    deploy_agent,
    get_last_winner,
    get_leaderboard,
    get_stats,
    list_agents,
)
from .config import settings
from .registry import AgentRegistry
from .scheduler import CompetitionScheduler
from .schemas import AgentDeploy
from .utils import utc_iso_now

logger = logging.getLogger(__name__)


def build_registry() -> AgentRegistry:
    """Registry whose first advertised evaluation matches the evaluation timer."""

    return AgentRegistry(evaluation_interval=timedelta(seconds=settings.evaluation_interval_seconds))


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("arena").setLevel(settings.log_level)


registry = build_registry()
scheduler = CompetitionScheduler(
    registry,
    simulation_interval=settings.simulation_interval_seconds,
    evaluation_interval=settings.evaluation_interval_seconds,
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging()
    if settings.scheduler_enabled:
        await scheduler.start()
    yield
    await scheduler.stop()


app = FastAPI(title="Agent Competition Arena", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_registry() -> AgentRegistry:
    return registry


@app.post("/api/deploy-agent", status_code=201)
def deploy(payload: AgentDeploy, agents: AgentRegistry = Depends(get_registry)):
    agent = deploy_agent(agents, owner=payload.owner, strategy_type=payload.strategy_type)
    return {
        "success": True,
        "agent": agent_to_dict(agent),
        "message": "Agent deployed successfully",
    }


@app.get("/api/agents")
def get_agents(owner: str | None = None, agents: AgentRegistry = Depends(get_registry)):
    items = list_agents(agents, owner=owner)
    return {"agents": items, "count": len(items)}


@app.get("/api/leaderboard")
def leaderboard(
    limit: int = Query(default=settings.leaderboard_default_limit, ge=1, le=settings.leaderboard_max_limit),
    agents: AgentRegistry = Depends(get_registry),
):
    entries = get_leaderboard(agents, limit=limit)
    stats = get_stats(agents)
    return {
        "leaderboard": entries,
        "count": len(entries),
        "last_evaluation": stats["last_evaluation"],
        "next_evaluation": stats["next_evaluation"],
    }


@app.get("/api/last-winner")
def last_winner(agents: AgentRegistry = Depends(get_registry)):
    winner = get_last_winner(agents)
    if winner is None:
        return {
            "winner": None,
            "message": "No winners yet. Competition has not been evaluated.",
        }
    return {"winner": winner, "total_winners": len(agents.winners)}


@app.get("/api/stats")
def stats(agents: AgentRegistry = Depends(get_registry)):
    return get_stats(agents)


@app.get("/health")
def health():
    return {"status": "ok", "timestamp": utc_iso_now()}
