"""
Upstream types, enums, and constants.

All closed vocabularies (plan goals, statuses, risk categories) and the
wire-level names used by the activity source, document store, and chat
transport live here.
"""

from enum import Enum


# Base URLs
INTERVALS_API_URL = "https://intervals.icu/api/v1"
NOTION_API_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
TELEGRAM_API_URL = "https://api.telegram.org"

# Intervals.icu authenticates with HTTP Basic auth, literal username "API_KEY"
INTERVALS_AUTH_USER = "API_KEY"

# Notion rejects rich text segments longer than this
NOTION_TEXT_LIMIT = 2000

# Telegram rejects messages longer than this
TELEGRAM_MESSAGE_LIMIT = 4096


class ActivityType(Enum):
    """Compact activity types shown to the model."""
    RUN = "Run"
    RIDE = "Ride"
    WEIGHT_TRAINING = "WeightTraining"
    OTHER = "Other"


class TrainingGoal(Enum):
    """Closed set of weekly training goals."""
    BUILD_FITNESS = "Build Fitness"
    INCREASE_VOLUME = "Increase Volume"
    RECOVERY = "Recovery"
    RACE_WEEK = "Race Week"
    MAINTENANCE = "Maintenance"


class PlanStatus(Enum):
    """Lifecycle status of a week plan."""
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class RiskCategory(Enum):
    """Injury / overtraining risk categories the model may flag."""
    VOLUME_SPIKE = "volume_spike"
    HIGH_FATIGUE = "high_fatigue"
    INADEQUATE_RECOVERY = "inadequate_recovery"
    OVERREACHING = "overreaching"


class Severity(Enum):
    """Risk severity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RaceEvent(Enum):
    """Supported race distances."""
    FIVE_K = "5K"
    TEN_K = "10K"
    HALF_MARATHON = "HalfMarathon"
    MARATHON = "Marathon"


def enum_values(enum_cls) -> list:
    """List the wire values of an enum, in declaration order."""
    return [member.value for member in enum_cls]


# Activity type substrings fetched by default (case-insensitive match)
DEFAULT_ACTIVITY_TYPES = ("run", "ride", "weight")

# Notion property names of the plans database
PLAN_PROPERTIES = {
    "title": "Name",
    "plan_id": "Plan ID",
    "week_start": "Week Start",
    "status": "Status",
    "goal": "Goal",
    "week_focus": "Week Focus",
    "daily_note": "Daily Note",
    "plan": "Plan",
    "summary": "Summary",
    "planned_load": "Planned Load",
    "actual_load": "Actual Load",
    "generated_by_ai": "Generated by AI",
    "last_updated": "Last Updated",
}

# Notion block types whose rich text is read as athlete-state text
TEXT_BLOCK_TYPES = (
    "paragraph",
    "heading_1",
    "heading_2",
    "heading_3",
    "bulleted_list_item",
    "numbered_list_item",
    "quote",
    "callout",
    "to_do",
)
