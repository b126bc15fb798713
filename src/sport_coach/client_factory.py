"""
Client factory for the sport coach.

Builds the process-wide collaborators (activity client, plan store, coach)
from configuration once, and hands the same instances to every surface
(console, chat bot, MCP tools). Each check-in still owns its own snapshot
and result.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import anthropic

from sport_coach.api.plans import PlanStore
from sport_coach.coach.executor import ToolExecutor
from sport_coach.coach.loop import Coach
from sport_coach.coach.tools import build_coach_registry
from sport_coach.config import Config, load_config
from sport_coach.sdk.client import IntervalsClient
from sport_coach.sdk.notion import NotionClient
from sport_coach.sdk.telegram import TelegramClient

logger = logging.getLogger(__name__)


@dataclass
class Collaborators:
    """Everything a check-in needs."""
    config: Config
    intervals: IntervalsClient
    plan_store: PlanStore
    coach: Coach


_collaborators: Optional[Collaborators] = None


def create_collaborators(config: Config) -> Collaborators:
    """Wire clients, plan store, and coach from a Config."""
    intervals = IntervalsClient(config.intervals.athlete_id, config.intervals.api_key)
    plan_store = PlanStore(
        NotionClient(config.notion.api_key),
        config.notion.plans_db_id,
        athlete_state_page_id=config.notion.athlete_state_page_id,
    )

    registry = build_coach_registry()
    coach = Coach(
        anthropic.Anthropic(api_key=config.anthropic.api_key),
        ToolExecutor(plan_store, registry=registry),
        registry=registry,
        model=config.anthropic.model,
        max_tokens=config.anthropic.max_tokens,
        max_turns=config.anthropic.max_turns,
    )
    return Collaborators(config=config, intervals=intervals, plan_store=plan_store, coach=coach)


def get_collaborators(config: Optional[Config] = None) -> Collaborators:
    """
    Get the shared collaborators, creating them on first use.

    Raises:
        ConfigError: If the environment is missing required configuration
    """
    global _collaborators
    if _collaborators is None:
        _collaborators = create_collaborators(config or load_config())
        logger.info("Collaborators initialized (model=%s)", _collaborators.coach.model)
    return _collaborators


def reset_collaborators() -> None:
    """Drop the cached collaborators (used when configuration changes)."""
    global _collaborators
    _collaborators = None


def create_telegram_client(config: Config) -> TelegramClient:
    """Telegram client for the configured bot token."""
    return TelegramClient(config.require_telegram().bot_token)
