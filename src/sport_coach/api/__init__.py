"""
High-Level API: domain model for the coach.

Every function returns a clean value the model can reason about.
Composes with the SDK layer internally.

Modules:
    model       immutable domain types (snapshot, plan, result)
    profile     Who are you?        (age, weight, HR thresholds)
    status      How are you now?    (chronic/acute load, balance)
    activities  What have you done? (compact recent sessions)
    plans       What's planned?     (week plans, athlete state)
"""

from sport_coach.api.model import (
    AthleteProfile,
    Wellness,
    CompactActivity,
    RaceGoal,
    WeekPlan,
    RiskFlag,
    CoachInput,
    ToolInvocation,
    CoachResult,
)
from sport_coach.api.profile import get_athlete_profile
from sport_coach.api.status import get_wellness
from sport_coach.api.activities import get_compact_activities, to_compact
from sport_coach.api.plans import PlanStore, page_to_plan

__all__ = [
    # Model
    "AthleteProfile", "Wellness", "CompactActivity", "RaceGoal", "WeekPlan",
    "RiskFlag", "CoachInput", "ToolInvocation", "CoachResult",
    # Profile / status / activities
    "get_athlete_profile", "get_wellness", "get_compact_activities", "to_compact",
    # Plans
    "PlanStore", "page_to_plan",
]
