# Area: Shared
"""
draft_engine.config — Engine Configuration
==========================================

Configuration for the engine entry points. Values come from, in order
of increasing precedence:

    1. Defaults below
    2. JSON config file (if given)
    3. .env file (loaded with python-dotenv, never overriding real env)
    4. Environment variables
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger("draft_engine.config")

# Environment variable -> config key
ENV_MAPPINGS = {
    "DRAFT_DB_PATH": "db_path",
    "DRAFT_HEARTBEAT_WINDOW_SECONDS": "heartbeat_window_seconds",
    "DRAFT_BUSY_TIMEOUT_SECONDS": "busy_timeout_seconds",
    "DRAFT_SYSTEM_ACTOR_ID": "system_actor_id",
    "DRAFT_SYSTEM_ACTOR_LABEL": "system_actor_label",
    "DRAFT_LOG_FILE": "log_file",
    "DRAFT_LOG_LEVEL": "log_level",
}


class EngineConfig(BaseModel):
    """Validated engine configuration.

    Fields
    ------
    db_path : str
        SQLite database file.
    heartbeat_window_seconds : int
        Maximum heartbeat age for a participant to count as online.
    busy_timeout_seconds : float
        How long a writer waits for the per-database write lock.
    system_actor_id : str
        ``picked_by_user_id`` recorded on auto-picks.
    system_actor_label : str
        ``picked_by_label`` recorded on auto-picks.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    db_path: str = "draft_engine.db"
    heartbeat_window_seconds: int = Field(default=45, ge=1)
    busy_timeout_seconds: float = Field(default=10.0, gt=0)
    system_actor_id: str = Field(default="system:auto-pick", min_length=1)
    system_actor_label: str = "Auto Pick (Timeout)"
    log_file: str = "draft_engine.log"
    log_level: str = "INFO"


def validate_config(config: Dict[str, Any]) -> EngineConfig:
    """
    Validate a raw config dict.

    Args:
        config: Configuration dict

    Returns:
        EngineConfig

    Raises:
        ValueError: If any value is invalid
    """
    try:
        return EngineConfig.model_validate(config)
    except ValidationError as e:
        raise ValueError(f"Invalid engine configuration: {e}") from e


def load_config(
    config_path: Optional[str] = None,
    env_file: Optional[str] = None,
) -> EngineConfig:
    """
    Load config from file and environment.

    Args:
        config_path: Optional JSON config file
        env_file: Optional .env file (defaults to ./.env when present)

    Returns:
        EngineConfig
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            logger.warning("Config file not found: %s", config_path)

    load_dotenv(dotenv_path=env_file, override=False)

    for env_key, config_key in ENV_MAPPINGS.items():
        if env_key in os.environ:
            config[config_key] = os.environ[env_key]

    return validate_config(config)
