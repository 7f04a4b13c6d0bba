"""Agent economic model and competition records.

An agent owns its currency balance and competition score. Its strategy
selects one coefficient profile that parameterizes the earn, spend and
compete formulas. Every formula takes its uniform draw from an injectable
random source so outcomes can be pinned in tests.
"""

import random
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Protocol

from .utils import round_half_away, utc_now

STARTING_BALANCE = 1000
DEPLOYMENT_FEE = 100
DEFAULT_KEEP_FRACTION = 0.1
MIN_EARN = 10


class RandomSource(Protocol):
    def random(self) -> float: ...


class StrategyType(str, Enum):
    aggressive = "aggressive"
    balanced = "balanced"
    conservative = "conservative"


class AgentStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class ActionType(str, Enum):
    earn = "earn"
    spend = "spend"
    compete = "compete"


@dataclass(frozen=True)
class StrategyProfile:
    """Formula coefficients for one strategy.

    earn   = earn_base + r * earn_spread - earn_offset
    spend  = balance * 0.10 * (spend_low_mult + r * (spend_high_mult - spend_low_mult))
    points = balance / 1000 * 100 * compete_multiplier * (0.5 + r * 0.5)
    """

    earn_base: float
    earn_spread: float
    earn_offset: float
    spend_low_mult: float
    spend_high_mult: float
    compete_multiplier: float


STRATEGY_PROFILES: dict[StrategyType, StrategyProfile] = {
    StrategyType.aggressive: StrategyProfile(
        earn_base=50,
        earn_spread=130,
        earn_offset=15,
        spend_low_mult=1.5,
        spend_high_mult=2.0,
        compete_multiplier=1.3,
    ),
    StrategyType.balanced: StrategyProfile(
        earn_base=50,
        earn_spread=75,
        earn_offset=25,
        spend_low_mult=0.8,
        spend_high_mult=1.5,
        compete_multiplier=1.0,
    ),
    StrategyType.conservative: StrategyProfile(
        earn_base=50,
        earn_spread=50,
        earn_offset=10,
        spend_low_mult=0.5,
        spend_high_mult=1.0,
        compete_multiplier=0.9,
    ),
}


@dataclass(frozen=True)
class LastAction:
    """Most recent action an agent performed, kept for display only."""

    type: ActionType
    amount: int
    timestamp: datetime


@dataclass
class Agent:
    owner: str
    strategy_type: StrategyType = StrategyType.balanced
    rng: RandomSource = field(default_factory=random.Random, repr=False, compare=False)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    balance: int = STARTING_BALANCE
    score: int = 0
    status: AgentStatus = AgentStatus.active
    created_at: datetime = field(default_factory=utc_now)
    last_action: Optional[LastAction] = None

    def __post_init__(self) -> None:
        self.strategy_type = StrategyType(self.strategy_type)

    @property
    def profile(self) -> StrategyProfile:
        return STRATEGY_PROFILES[self.strategy_type]

    @property
    def is_active(self) -> bool:
        return self.status == AgentStatus.active

    def earn(self) -> int:
        profile = self.profile
        raw = profile.earn_base + self.rng.random() * profile.earn_spread - profile.earn_offset
        amount = max(MIN_EARN, round_half_away(raw))
        self.balance += amount
        self._record(ActionType.earn, amount)
        return amount

    def spend(self) -> int:
        profile = self.profile
        base = self.balance * 0.10
        spread = profile.spend_high_mult - profile.spend_low_mult
        raw = base * (profile.spend_low_mult + self.rng.random() * spread)
        raw = min(max(raw, 0.0), float(self.balance))
        amount = min(round_half_away(raw), self.balance)
        self.balance -= amount
        self._record(ActionType.spend, amount)
        return amount

    def compete(self) -> int:
        balance_weight = self.balance / STARTING_BALANCE
        competition_factor = 0.5 + self.rng.random() * 0.5
        points = max(0, round_half_away(balance_weight * 100 * self.profile.compete_multiplier * competition_factor))
        self.score += points
        self._record(ActionType.compete, points)
        return points

    def act(self) -> None:
        """Run one earn, spend, compete cycle; inactive agents are left untouched."""

        if not self.is_active:
            return
        self.earn()
        self.spend()
        self.compete()

    def reset_score(self, keep_fraction: float = DEFAULT_KEEP_FRACTION) -> None:
        """Decay the score, keeping ``keep_fraction`` of it."""

        if not 0.0 <= keep_fraction <= 1.0:
            raise ValueError(f"keep_fraction must be within [0, 1], got {keep_fraction}")
        self.score = round_half_away(self.score * keep_fraction)

    def _record(self, action_type: ActionType, amount: int) -> None:
        self.last_action = LastAction(type=action_type, amount=amount, timestamp=utc_now())


@dataclass(frozen=True)
class WinnerRecord:
    """Snapshot of the top-ranked agent at one evaluation."""

    agent_id: str
    owner: str
    score: int
    balance: int
    strategy_type: StrategyType
    timestamp: datetime
    total_agents: int
