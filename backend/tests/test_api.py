"""Frontend-exposed competition API flow tests."""

import logging
from datetime import timedelta

from fastapi.testclient import TestClient

from arena.competition import run_evaluation_cycle, run_simulation_step
from arena.config import settings
from arena.main import app, build_registry, configure_logging
from arena.utils import utc_now


def test_deploy_list_and_leaderboard(registry):
    with TestClient(app) as client:
        r = client.post("/api/deploy-agent", json={"owner": "alice", "strategy_type": "aggressive"})
        assert r.status_code == 201
        body = r.json()
        assert body["success"] is True
        agent = body["agent"]
        assert agent["balance"] == 900
        assert agent["score"] == 0
        assert agent["status"] == "active"
        assert agent["strategy_type"] == "aggressive"

        client.post("/api/deploy-agent", json={"owner": "bob"})

        r2 = client.get("/api/agents", params={"owner": "alice"})
        assert r2.status_code == 200
        assert r2.json()["count"] == 1
        assert r2.json()["agents"][0]["id"] == agent["id"]

        run_simulation_step(registry)

        r3 = client.get("/api/leaderboard", params={"limit": 1})
        assert r3.status_code == 200
        board = r3.json()
        assert board["count"] == 1
        assert board["last_evaluation"] is None
        assert board["next_evaluation"] is not None


def test_deploy_rejects_invalid_input():
    with TestClient(app) as client:
        assert client.post("/api/deploy-agent", json={"strategy_type": "balanced"}).status_code == 422
        assert client.post("/api/deploy-agent", json={"owner": "  "}).status_code == 422
        assert client.post("/api/deploy-agent", json={"owner": "a", "strategy_type": "reckless"}).status_code == 422
        assert client.get("/api/leaderboard", params={"limit": 0}).status_code == 422


def test_last_winner_and_stats(registry):
    with TestClient(app) as client:
        empty = client.get("/api/last-winner").json()
        assert empty["winner"] is None

        created = client.post("/api/deploy-agent", json={"owner": "carol", "strategy_type": "conservative"})
        agent_id = created.json()["agent"]["id"]
        run_simulation_step(registry)
        run_evaluation_cycle(registry)

        r = client.get("/api/last-winner")
        assert r.status_code == 200
        payload = r.json()
        assert payload["total_winners"] == 1
        assert payload["winner"]["agent_id"] == agent_id
        assert payload["winner"]["current_status"] == "active"

        stats = client.get("/api/stats").json()
        assert stats["total_agents"] == 1
        assert stats["active_agents"] == 1
        assert stats["total_winners"] == 1
        assert stats["last_evaluation"] is not None


def test_initial_next_evaluation_follows_configured_interval(monkeypatch):
    monkeypatch.setattr(settings, "evaluation_interval_seconds", 60.0)

    fresh = build_registry()

    gap = fresh.next_evaluation - utc_now()
    assert timedelta(seconds=0) < gap <= timedelta(seconds=61)


def test_configure_logging_attaches_handler_at_configured_level(monkeypatch):
    calls = []
    monkeypatch.setattr(settings, "log_level", "DEBUG")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    arena_logger = logging.getLogger("arena")
    original_level = arena_logger.level

    try:
        configure_logging()
        assert calls and calls[0]["level"] == "DEBUG"
        assert arena_logger.level == logging.DEBUG
    finally:
        arena_logger.setLevel(original_level)
