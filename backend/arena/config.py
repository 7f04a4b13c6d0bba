"""Runtime configuration loaded from environment variables.

This module centralizes backend settings such as logging, CORS origins,
simulation/evaluation cadence, and leaderboard defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Typed settings object used across the backend."""

    env: str = os.getenv("ENV", "dev")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: list[str] = [x.strip() for x in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if x.strip()]
    scheduler_enabled: bool = _env_flag("SCHEDULER_ENABLED", "true")
    simulation_interval_seconds: float = float(os.getenv("SIMULATION_INTERVAL_SECONDS", "30"))
    evaluation_interval_seconds: float = float(os.getenv("EVALUATION_INTERVAL_SECONDS", str(6 * 60 * 60)))
    leaderboard_default_limit: int = int(os.getenv("LEADERBOARD_DEFAULT_LIMIT", "10"))
    leaderboard_max_limit: int = int(os.getenv("LEADERBOARD_MAX_LIMIT", "100"))


settings = Settings()
