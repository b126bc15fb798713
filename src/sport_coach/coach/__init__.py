"""
The coach: tool registry, prompts, executor, and the orchestration loop.
"""

from sport_coach.coach.tools import COACH_TOOLS, ToolRegistry, ToolSpec, build_coach_registry
from sport_coach.coach.prompts import build_system_prompt, build_user_message
from sport_coach.coach.executor import NoCurrentPlanError, ToolExecutor
from sport_coach.coach.loop import Coach, MAX_TURNS
from sport_coach.coach.formatting import format_coach_response

__all__ = [
    "COACH_TOOLS", "ToolRegistry", "ToolSpec", "build_coach_registry",
    "build_system_prompt", "build_user_message",
    "NoCurrentPlanError", "ToolExecutor",
    "Coach", "MAX_TURNS",
    "format_coach_response",
]
