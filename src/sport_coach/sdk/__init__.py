"""
Low-level SDK for the coach's upstream services.

Thin typed wrappers over three HTTP APIs:
    client / activities / athlete / wellness: Intervals.icu (activity source)
    notion                                  : Notion (plan store)
    telegram                                : Telegram Bot API (chat transport)
"""

from sport_coach.sdk.client import IntervalsClient
from sport_coach.sdk.notion import NotionClient
from sport_coach.sdk.telegram import TelegramClient
from sport_coach.sdk.types import (
    ActivityType,
    TrainingGoal,
    PlanStatus,
    RiskCategory,
    Severity,
    RaceEvent,
    DEFAULT_ACTIVITY_TYPES,
)

__all__ = [
    "IntervalsClient",
    "NotionClient",
    "TelegramClient",
    "ActivityType",
    "TrainingGoal",
    "PlanStatus",
    "RiskCategory",
    "Severity",
    "RaceEvent",
    "DEFAULT_ACTIVITY_TYPES",
]
