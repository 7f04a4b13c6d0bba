"""In-memory agent registry and competition bookkeeping.

The registry holds references to live agents in creation order together with
the chronological winner log and evaluation timestamps. Mutating operations
(deploy, simulation step, evaluation cycle) run under ``lock``; readers take
list snapshots and may observe values that are mid-update.
"""

import threading
from datetime import datetime, timedelta
from typing import Optional

from .models import Agent, WinnerRecord
from .utils import utc_now

EVALUATION_INTERVAL = timedelta(hours=6)


class AgentRegistry:
    """Append-only store for agents and winner records."""

    def __init__(self, evaluation_interval: timedelta = EVALUATION_INTERVAL, now: Optional[datetime] = None) -> None:
        self.lock = threading.RLock()
        self._agents: list[Agent] = []
        self._ids: set[str] = set()
        self._winners: list[WinnerRecord] = []
        self.last_evaluation: Optional[datetime] = None
        self.next_evaluation: datetime = (now or utc_now()) + evaluation_interval

    def register(self, agent: Agent) -> Agent:
        with self.lock:
            if agent.id in self._ids:
                raise ValueError(f"Agent id already registered: {agent.id}")
            self._ids.add(agent.id)
            self._agents.append(agent)
        return agent

    def all(self) -> list[Agent]:
        return list(self._agents)

    def by_owner(self, owner: str) -> list[Agent]:
        return [agent for agent in self._agents if agent.owner == owner]

    def active(self) -> list[Agent]:
        return [agent for agent in self._agents if agent.is_active]

    def get(self, agent_id: str) -> Optional[Agent]:
        for agent in self._agents:
            if agent.id == agent_id:
                return agent
        return None

    def record_winner(self, record: WinnerRecord) -> None:
        with self.lock:
            self._winners.append(record)

    @property
    def winners(self) -> list[WinnerRecord]:
        return list(self._winners)

    def latest_winner(self) -> Optional[WinnerRecord]:
        winners = self._winners
        return winners[-1] if winners else None

    def __len__(self) -> int:
        return len(self._agents)
