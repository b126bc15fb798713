"""
Configuration from environment variables.

`load_config` reads the process environment (the command-line entry point
seeds it from a .env file first) and fails with one ConfigError listing
every missing or malformed variable.
"""

import os
from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from sport_coach.coach.loop import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, MAX_TURNS
from sport_coach.sdk.types import RaceEvent, enum_values

REQUIRED_VARS = (
    "INTERVALS_ATHLETE_ID",
    "INTERVALS_API_KEY",
    "ANTHROPIC_API_KEY",
    "NOTION_API_KEY",
    "NOTION_PLANS_DB_ID",
    "RACE_DATE",
    "RACE_EVENT",
)

DEFAULT_TRAINING_WEEKS = 16
DEFAULT_HISTORY_DAYS = 30


class ConfigError(RuntimeError):
    """Missing or malformed configuration. Fatal at startup."""


@dataclass(frozen=True)
class IntervalsConfig:
    athlete_id: str
    api_key: str


@dataclass(frozen=True)
class NotionConfig:
    api_key: str
    plans_db_id: str
    athlete_state_page_id: Optional[str] = None


@dataclass(frozen=True)
class AnthropicConfig:
    api_key: str
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    max_turns: int = MAX_TURNS


@dataclass(frozen=True)
class RaceConfig:
    date: str
    event: str
    target_time: Optional[str] = None
    total_weeks: int = DEFAULT_TRAINING_WEEKS


@dataclass(frozen=True)
class TelegramConfig:
    bot_token: str
    chat_id: Optional[str] = None


@dataclass(frozen=True)
class Config:
    intervals: IntervalsConfig
    notion: NotionConfig
    anthropic: AnthropicConfig
    race: RaceConfig
    telegram: Optional[TelegramConfig] = None
    lthr_override: Optional[int] = None
    history_days: int = DEFAULT_HISTORY_DAYS

    def require_telegram(self) -> TelegramConfig:
        if self.telegram is None:
            raise ConfigError("Missing TELEGRAM_BOT_TOKEN; the chat bot cannot start")
        return self.telegram


def _int(env: Mapping[str, str], name: str, default: Optional[int], errors: list) -> Optional[int]:
    raw = env.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        errors.append(f"{name} must be an integer (got {raw!r})")
        return default
    if value <= 0:
        errors.append(f"{name} must be positive (got {value})")
        return default
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build the Config from environment variables.

    Raises:
        ConfigError: If required variables are missing or values are malformed
    """
    env = os.environ if env is None else env

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    errors = []
    race_date = env["RACE_DATE"]
    try:
        date.fromisoformat(race_date)
    except ValueError:
        errors.append(f"RACE_DATE must be YYYY-MM-DD (got {race_date!r})")

    event = env["RACE_EVENT"]
    if event not in enum_values(RaceEvent):
        errors.append(f"RACE_EVENT must be one of {', '.join(enum_values(RaceEvent))} (got {event!r})")

    total_weeks = _int(env, "TRAINING_WEEKS", DEFAULT_TRAINING_WEEKS, errors)
    lthr = _int(env, "ATHLETE_LTHR", None, errors)
    max_tokens = _int(env, "COACH_MAX_TOKENS", DEFAULT_MAX_TOKENS, errors)
    max_turns = _int(env, "COACH_MAX_TURNS", MAX_TURNS, errors)
    history_days = _int(env, "HISTORY_DAYS", DEFAULT_HISTORY_DAYS, errors)

    if errors:
        raise ConfigError("; ".join(errors))

    telegram = None
    if env.get("TELEGRAM_BOT_TOKEN"):
        telegram = TelegramConfig(
            bot_token=env["TELEGRAM_BOT_TOKEN"],
            chat_id=env.get("TELEGRAM_CHAT_ID") or None,
        )

    return Config(
        intervals=IntervalsConfig(
            athlete_id=env["INTERVALS_ATHLETE_ID"],
            api_key=env["INTERVALS_API_KEY"],
        ),
        notion=NotionConfig(
            api_key=env["NOTION_API_KEY"],
            plans_db_id=env["NOTION_PLANS_DB_ID"],
            athlete_state_page_id=env.get("NOTION_ATHLETE_STATE_PAGE_ID") or None,
        ),
        anthropic=AnthropicConfig(
            api_key=env["ANTHROPIC_API_KEY"],
            model=env.get("COACH_MODEL") or DEFAULT_MODEL,
            max_tokens=max_tokens,
            max_turns=max_turns,
        ),
        race=RaceConfig(
            date=race_date,
            event=event,
            target_time=env.get("RACE_TARGET_TIME") or None,
            total_weeks=total_weeks,
        ),
        telegram=telegram,
        lthr_override=lthr,
        history_days=history_days,
    )
