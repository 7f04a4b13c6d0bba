"""Pydantic request schemas for frontend-exposed API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from .models import StrategyType


class AgentDeploy(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    owner: str = Field(min_length=1, max_length=200)
    strategy_type: StrategyType = StrategyType.balanced
